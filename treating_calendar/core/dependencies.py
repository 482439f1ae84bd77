# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection: wire repositories and services.
"""

from datetime import date
from typing import Optional

from fastapi import Query

from treating_calendar.core.config import settings
from treating_calendar.core.database import engine
from treating_calendar.repositories.personnel_repository import PersonnelRepository
from treating_calendar.repositories.schedule_repository import ScheduleRepository
from treating_calendar.repositories.team_repository import TeamRepository
from treating_calendar.services.notification_client import NotificationClient
from treating_calendar.services.reminder_service import ReminderService
from treating_calendar.services.roster_service import RosterService
from treating_calendar.services.scheduler_service import RotationScheduler
from treating_calendar.services.team_service import TeamService

# ── Repository instances ──
_team_repo = TeamRepository(engine)
_personnel_repo = PersonnelRepository(engine)
_schedule_repo = ScheduleRepository(engine)
_notification_client = NotificationClient()

# ── Service instances (with injected dependencies) ──
_team_service = TeamService(_team_repo)
_scheduler = RotationScheduler(
    personnel_repo=_personnel_repo,
    schedule_repo=_schedule_repo,
)
_roster_service = RosterService(
    personnel_repo=_personnel_repo,
    team_service=_team_service,
    scheduler=_scheduler,
)
_reminder_service = ReminderService(
    team_service=_team_service,
    personnel_repo=_personnel_repo,
    schedule_repo=_schedule_repo,
    notification_client=_notification_client,
)


# ── FastAPI dependency functions ──
def get_team_service() -> TeamService:
    return _team_service


def get_scheduler() -> RotationScheduler:
    return _scheduler


def get_roster_service() -> RosterService:
    return _roster_service


def get_reminder_service() -> ReminderService:
    return _reminder_service


def get_reference_date(
    reference_date: Optional[date] = Query(
        default=None,
        description="Treat this date as today (defaults to DEBUG_DATE, then today)",
    ),
) -> date:
    """The only place the wall clock is read; services always receive a date."""
    return reference_date or settings.DEBUG_DATE or date.today()
