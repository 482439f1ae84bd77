# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Weekly reminders. Tell the upcoming host, and the whole team,
who is treating on the next occurrence.
"""

from datetime import date
from typing import Any

from treating_calendar.core.config import settings
from treating_calendar.core.logging import get_logger
from treating_calendar.metrics import REMINDERS_SENT
from treating_calendar.models.domain import Person, Team
from treating_calendar.repositories.personnel_repository import PersonnelRepository
from treating_calendar.repositories.schedule_repository import ScheduleRepository
from treating_calendar.services import rotation
from treating_calendar.services.notification_client import NotificationClient
from treating_calendar.services.team_service import TeamService

logger = get_logger(__name__)

HOST_SUBJECT = "Treating reminder: you are hosting on {date}"
HOST_MESSAGE = (
    "Hi {name},\n\n"
    "This is a reminder that you are treating the {team} team on {date}.\n\n"
    "View the calendar: {url}"
)
TEAM_SUBJECT = "{team}: {name} is treating on {date}"
TEAM_MESSAGE = (
    "Hello {team},\n\n"
    "{name} ({email}) is treating on {date}.\n\n"
    "View the calendar: {url}"
)


def format_long_date(day: date) -> str:
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def render_template(template: str, **values: Any) -> str:
    """Substitute ``{key}`` placeholders, leaving unknown braces untouched."""
    rendered = template
    for key, value in values.items():
        rendered = rendered.replace("{" + key + "}", str(value))
    return rendered


class ReminderService:
    def __init__(
        self,
        team_service: TeamService,
        personnel_repo: PersonnelRepository,
        schedule_repo: ScheduleRepository,
        notification_client: NotificationClient,
        weekday: int = settings.OCCURRENCE_WEEKDAY,
    ) -> None:
        self._teams = team_service
        self._personnel = personnel_repo
        self._schedule = schedule_repo
        self._notifications = notification_client
        self._weekday = weekday

    def send_weekly(
        self,
        team_id: str,
        reference_date: date,
        force: bool = False,
        test_mode: bool = False,
    ) -> dict[str, Any]:
        """
        Send reminders for the next occurrence on/after ``reference_date``.

        ``force`` ignores both the team toggles and the already-notified flags.
        ``test_mode`` delivers but leaves the notified flags untouched.
        Raises TeamNotFoundError for an unknown team.
        """
        team = self._teams.get_team(team_id)
        day = rotation.first_occurrence(reference_date, self._weekday)
        summary: dict[str, Any] = {
            "team_id": team_id,
            "date": day.isoformat(),
            "host": None,
            "host_notified": False,
            "team_notified": False,
            "recipients": 0,
            "skipped": None,
        }

        if not force and not (team.host_notifications_enabled or team.team_notifications_enabled):
            summary["skipped"] = "notifications_disabled"
            return summary

        assignment = self._schedule.get_by_date(team_id, day)
        if assignment is None or assignment.person_id is None:
            summary["skipped"] = "no_assignment"
            logger.info("No reminder: team=%s, date=%s has no host", team_id, day)
            return summary

        host = self._personnel.get_person(team_id, assignment.person_id)
        if host is None or not host.email:
            summary["skipped"] = "no_host_email"
            logger.info("No reminder: team=%s, date=%s host has no email", team_id, day)
            return summary
        summary["host"] = host.name

        values = {
            "name": host.name,
            "email": host.email,
            "team": team.team_name,
            "date": format_long_date(day),
            "url": f"{settings.APP_URL}?teamId={team_id}",
        }
        reference = f"{team_id}:{day.isoformat()}"

        if (team.host_notifications_enabled or force) and (force or not assignment.host_notified):
            if self._send_host(host, values, reference):
                summary["host_notified"] = True
                if not test_mode:
                    self._schedule.mark_notified(team_id, day, host_notified=True)

        if (team.team_notifications_enabled or force) and (force or not assignment.team_notified):
            delivered = self._send_team(team, values, reference)
            summary["recipients"] = delivered
            if delivered:
                summary["team_notified"] = True
                if not test_mode:
                    self._schedule.mark_notified(team_id, day, team_notified=True)

        logger.info(
            "Weekly reminders: team=%s, date=%s, host_notified=%s, team_recipients=%d",
            team_id, day, summary["host_notified"], summary["recipients"],
        )
        return summary

    # ── Internal ──

    def _send_host(self, host: Person, values: dict[str, Any], reference: str) -> bool:
        sent = self._notifications.send(
            recipient=host.email,
            subject=render_template(HOST_SUBJECT, **values),
            message=render_template(HOST_MESSAGE, **values),
            reference=reference,
        )
        if sent:
            REMINDERS_SENT.labels(kind="host").inc()
        return sent

    def _send_team(self, team: Team, values: dict[str, Any], reference: str) -> int:
        subject = render_template(TEAM_SUBJECT, **values)
        message = render_template(TEAM_MESSAGE, **values)
        delivered = 0
        for member in self._personnel.list_people(team.team_id):
            if not member.email:
                continue
            if self._notifications.send(
                recipient=member.email, subject=subject, message=message, reference=reference
            ):
                delivered += 1
        if delivered:
            REMINDERS_SENT.labels(kind="team").inc(delivered)
        return delivered
