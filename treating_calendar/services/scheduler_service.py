# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Rotation scheduling. Fairness recompute, schedule generation and swaps.
Coordinates the pure rotation functions with the roster and schedule stores.
"""

import random
import threading
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from treating_calendar.core.config import settings
from treating_calendar.core.errors import (
    AssignmentNotFoundError,
    InvalidSwapError,
    PastAssignmentError,
    ValidationError,
)
from treating_calendar.core.logging import get_logger
from treating_calendar.metrics import (
    ASSIGNMENTS_GENERATED,
    SCHEDULES_GENERATED,
    SWAPS_REJECTED,
    SWAPS_TOTAL,
)
from treating_calendar.models.domain import Assignment, Person, SortType
from treating_calendar.repositories.personnel_repository import PersonnelRepository
from treating_calendar.repositories.schedule_repository import ScheduleRepository
from treating_calendar.services import rotation

logger = get_logger(__name__)


@dataclass
class ScheduleResult:
    assignments: list[Assignment] = field(default_factory=list)
    people: list[Person] = field(default_factory=list)
    replaced: int = 0


class RotationScheduler:
    """
    Owns every write to a team's schedule. Operations on one team are
    serialized by a per-team lock; different teams never contend.
    """

    def __init__(
        self,
        personnel_repo: PersonnelRepository,
        schedule_repo: ScheduleRepository,
        rng: Optional[random.Random] = None,
        weekday: int = settings.OCCURRENCE_WEEKDAY,
        window_size: int = settings.SCHEDULE_WINDOW_WEEKS,
    ) -> None:
        self._personnel = personnel_repo
        self._schedule = schedule_repo
        self._rng = rng or random.Random(settings.RANDOM_SEED)
        self._weekday = weekday
        self._window_size = window_size
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @property
    def weekday(self) -> int:
        return self._weekday

    def roster_lock(self, team_id: str) -> threading.RLock:
        """Lock serializing all schedule writes for ``team_id`` (re-entrant)."""
        with self._locks_guard:
            lock = self._locks.get(team_id)
            if lock is None:
                lock = self._locks[team_id] = threading.RLock()
            return lock

    # ── Commands ──

    def recompute_fairness_values(
        self, team_id: str, people: Optional[list[Person]] = None
    ) -> list[Person]:
        """Rebuild hosting counts from completed history and persist them."""
        if people is None:
            people = self._personnel.list_people(team_id)
        if not people:
            return []
        updated = rotation.recompute_fairness_values(
            people, self._schedule.list_completed(team_id)
        )
        self._personnel.update_hosting_counts(
            team_id, {p.id: p.hosting_count for p in updated}
        )
        return updated

    def refresh_completion(self, team_id: str, reference_date: date) -> list[Person]:
        """Re-partition completed/open assignments around ``reference_date``."""
        with self.roster_lock(team_id):
            done, still_open = self._schedule.refresh_completed(team_id, reference_date)
            logger.info(
                "Completion refreshed: team=%s, reference=%s, completed=%d, open=%d",
                team_id, reference_date, done, still_open,
            )
            return self.recompute_fairness_values(team_id)

    def generate_schedule(
        self,
        team_id: str,
        sort_type: SortType,
        reference_date: date,
        window_size: Optional[int] = None,
    ) -> ScheduleResult:
        """
        Replace the open part of the schedule with a fresh round-robin over the
        ranked roster. An empty roster clears the future.

        Ranking only uses history dated before ``reference_date``, so repeated
        calls with the same roster and reference date produce the same rows.
        A slot already stored on the reference date is completed and is kept;
        the round-robin resumes after its host.
        Raises PersistenceError if the replace fails; nothing is half-written.
        """
        window = self._window_size if window_size is None else window_size
        if window < 1:
            raise ValidationError("window_size must be at least 1")

        with self.roster_lock(team_id):
            self._schedule.refresh_completed(team_id, reference_date)
            people = self.recompute_fairness_values(team_id)
            kept = self._reference_slot(team_id, reference_date)
            replace_from = reference_date + timedelta(days=1) if kept else reference_date

            if not people:
                replaced = self._schedule.replace_future_assignments(team_id, replace_from, [])
                logger.info(
                    "Schedule cleared: team=%s, reference=%s, removed=%d",
                    team_id, reference_date, replaced,
                )
                return ScheduleResult(assignments=[kept] if kept else [], replaced=replaced)

            history = [
                a for a in self._schedule.list_completed(team_id) if a.date < reference_date
            ]
            ranked = rotation.recompute_fairness_values(people, history)
            ordered = rotation.sort_people(ranked, sort_type, self._rng)
            if kept:
                ordered = rotation.resume_order(ordered, kept.person_id)
                assignments = rotation.build_assignments(
                    team_id, ordered, replace_from, window - 1, self._weekday
                )
            else:
                assignments = rotation.build_assignments(
                    team_id, ordered, reference_date, window, self._weekday
                )
            replaced = self._schedule.replace_future_assignments(
                team_id, replace_from, assignments
            )
            # a new slot on the reference date counts as hosted
            people = self.recompute_fairness_values(team_id, people)

        SCHEDULES_GENERATED.labels(sort_type=sort_type.value).inc()
        ASSIGNMENTS_GENERATED.inc(len(assignments))
        logger.info(
            "Schedule generated: team=%s, sort=%s, reference=%s, weeks=%d, people=%d, replaced=%d",
            team_id, sort_type.value, reference_date, window, len(people), replaced,
        )
        if kept:
            assignments = [kept] + assignments
        return ScheduleResult(assignments=assignments, people=people, replaced=replaced)

    def swap(
        self, team_id: str, date_a: date, date_b: date, reference_date: date
    ) -> tuple[Assignment, Assignment]:
        """Exchange the hosts of two future dates. Past dates are immutable."""
        try:
            with self.roster_lock(team_id):
                if date_a == date_b:
                    raise InvalidSwapError(f"Cannot swap {date_a} with itself")

                self._schedule.refresh_completed(team_id, reference_date)
                first = self._require_assignment(team_id, date_a)
                second = self._require_assignment(team_id, date_b)
                for assignment in (first, second):
                    if assignment.completed:
                        raise PastAssignmentError(
                            f"Cannot modify past assignment on {assignment.date}"
                        )

                self._schedule.update_assignment_people(
                    team_id, {date_a: second.person_id, date_b: first.person_id}
                )
                self.recompute_fairness_values(team_id)
        except (AssignmentNotFoundError, PastAssignmentError, InvalidSwapError) as exc:
            SWAPS_REJECTED.labels(reason=exc.reason).inc()
            logger.warning("Swap rejected: team=%s, reason=%s, %s", team_id, exc.reason, exc)
            raise

        SWAPS_TOTAL.inc()
        logger.info(
            "Swapped: team=%s, %s=%s, %s=%s",
            team_id, date_a, second.person_id, date_b, first.person_id,
        )
        return (
            first.model_copy(update={"person_id": second.person_id}),
            second.model_copy(update={"person_id": first.person_id}),
        )

    # ── Queries ──

    def list_assignments(
        self, team_id: str, start: Optional[date] = None, end: Optional[date] = None
    ) -> list[Assignment]:
        return self._schedule.list_assignments(team_id, start=start, end=end)

    def get_assignment(self, team_id: str, day: date) -> Assignment:
        return self._require_assignment(team_id, day)

    def is_occurrence_weekday(self, day: date) -> bool:
        return rotation.is_occurrence_weekday(day, self._weekday)

    def is_past(self, team_id: str, day: date, reference_date: date) -> bool:
        assignment = self._schedule.get_by_date(team_id, day)
        return assignment is not None and rotation.is_past(assignment, reference_date)

    def future_assignment_count(self, team_id: str, person_id: str, reference_date: date) -> int:
        return rotation.future_assignment_count(
            self._schedule.list_assignments(team_id, start=reference_date),
            person_id,
            reference_date,
        )

    def person_for_date(self, team_id: str, day: date) -> Optional[Person]:
        assignment = self._schedule.get_by_date(team_id, day)
        if assignment is None or assignment.person_id is None:
            return None
        return self._personnel.get_person(team_id, assignment.person_id)

    def next_assignment(self, team_id: str, reference_date: date) -> Optional[Assignment]:
        upcoming = self._schedule.list_assignments(team_id, start=reference_date)
        return upcoming[0] if upcoming else None

    # ── Internal ──

    def _require_assignment(self, team_id: str, day: date) -> Assignment:
        assignment = self._schedule.get_by_date(team_id, day)
        if assignment is None:
            raise AssignmentNotFoundError(f"No assignment found on {day}")
        return assignment

    def _reference_slot(self, team_id: str, reference_date: date) -> Optional[Assignment]:
        """The completed assignment on the reference date, if one is stored."""
        if not self.is_occurrence_weekday(reference_date):
            return None
        return self._schedule.get_by_date(team_id, reference_date)
