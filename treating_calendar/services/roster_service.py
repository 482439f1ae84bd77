# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Roster management. People join and leave, and the future schedule
is regenerated after every change.
"""

import uuid
from datetime import date, datetime, timezone
from typing import Optional

from treating_calendar.core.errors import PersonNotFoundError, ValidationError
from treating_calendar.core.logging import get_logger
from treating_calendar.metrics import PEOPLE_ADDED, PEOPLE_REMOVED, ROSTER_SIZE
from treating_calendar.models.domain import Person, SortType
from treating_calendar.repositories.personnel_repository import PersonnelRepository
from treating_calendar.services import rotation
from treating_calendar.services.scheduler_service import RotationScheduler, ScheduleResult
from treating_calendar.services.team_service import TeamService

logger = get_logger(__name__)


class RosterService:
    """Business logic for roster changes and ordering-mode changes."""

    def __init__(
        self,
        personnel_repo: PersonnelRepository,
        team_service: TeamService,
        scheduler: RotationScheduler,
    ) -> None:
        self._personnel = personnel_repo
        self._teams = team_service
        self._scheduler = scheduler

    # ── Commands ──

    def add_person(
        self,
        team_id: str,
        name: str,
        email: str,
        reference_date: date,
        phone: Optional[str] = None,
    ) -> tuple[Person, ScheduleResult]:
        """
        Add a person seeded at the roster's current minimum fairness value,
        then regenerate the future schedule.
        """
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email:
            raise ValidationError("Both name and email are required")

        team = self._teams.ensure_team(team_id)
        with self._scheduler.roster_lock(team_id):
            current = self._scheduler.recompute_fairness_values(team_id)
            person = Person(
                id=str(uuid.uuid4()),
                team_id=team_id,
                name=name,
                email=email,
                phone=(phone or "").strip() or None,
                hosting_count=0,
                host_offset=rotation.minimum_fairness_value(current),
                created_at=datetime.now(timezone.utc),
            )
            self._personnel.add_person(person)
            result = self._scheduler.generate_schedule(team_id, team.sort_type, reference_date)

        PEOPLE_ADDED.inc()
        ROSTER_SIZE.set(self._personnel.count())
        logger.info(
            "Person added: team=%s, person=%s, offset=%d",
            team_id, person.id, person.host_offset,
        )
        return person, result

    def remove_person(self, team_id: str, person_id: str, reference_date: date) -> ScheduleResult:
        """Remove a person and regenerate the future schedule without them."""
        team = self._teams.get_team(team_id)
        with self._scheduler.roster_lock(team_id):
            if not self._personnel.delete_person(team_id, person_id):
                raise PersonNotFoundError(f"No person '{person_id}' in team '{team_id}'")
            result = self._scheduler.generate_schedule(team_id, team.sort_type, reference_date)

        PEOPLE_REMOVED.inc()
        ROSTER_SIZE.set(self._personnel.count())
        logger.info("Person removed: team=%s, person=%s", team_id, person_id)
        return result

    def regenerate(
        self,
        team_id: str,
        reference_date: date,
        sort_type: Optional[SortType] = None,
        window_size: Optional[int] = None,
    ) -> ScheduleResult:
        """Regenerate, storing ``sort_type`` as the team's ordering mode when given."""
        team = self._teams.ensure_team(team_id)
        if sort_type is not None and sort_type != team.sort_type:
            team = self._teams.save_team(team_id, sort_type=sort_type)
        return self._scheduler.generate_schedule(
            team_id, team.sort_type, reference_date, window_size
        )

    # ── Queries ──

    def list_people(self, team_id: str) -> list[Person]:
        return self._personnel.list_people(team_id)

    def get_person(self, team_id: str, person_id: str) -> Person:
        person = self._personnel.get_person(team_id, person_id)
        if person is None:
            raise PersonNotFoundError(f"No person '{person_id}' in team '{team_id}'")
        return person

    def future_assignment_count(self, team_id: str, person_id: str, reference_date: date) -> int:
        self.get_person(team_id, person_id)
        return self._scheduler.future_assignment_count(team_id, person_id, reference_date)
