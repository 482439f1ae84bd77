# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Rotation logic. Pure computation, no side effects.
Weekdays use 0 = Sunday ... 6 = Saturday throughout.
"""

import random
import uuid
from collections import Counter
from datetime import date, timedelta
from functools import cmp_to_key
from typing import Iterable, Optional

from treating_calendar.models.domain import Assignment, Person, SortType

THURSDAY = 4
DAYS_PER_WEEK = 7


def weekday_index(day: date) -> int:
    return day.isoweekday() % DAYS_PER_WEEK


def is_occurrence_weekday(day: date, weekday: int = THURSDAY) -> bool:
    return weekday_index(day) == weekday


def first_occurrence(reference_date: date, weekday: int = THURSDAY) -> date:
    """First date on or after ``reference_date`` that falls on ``weekday``."""
    delta = (weekday - weekday_index(reference_date)) % DAYS_PER_WEEK
    return reference_date + timedelta(days=delta)


def occurrence_dates(reference_date: date, count: int, weekday: int = THURSDAY) -> list[date]:
    start = first_occurrence(reference_date, weekday)
    return [start + timedelta(weeks=i) for i in range(count)]


def minimum_fairness_value(people: Iterable[Person]) -> int:
    """Offset for a newcomer: the roster's lowest fairness value, or 0."""
    values = [p.fairness_value for p in people]
    return min(values) if values else 0


def count_completed(history: Iterable[Assignment]) -> Counter:
    return Counter(a.person_id for a in history if a.completed and a.person_id is not None)


def recompute_fairness_values(
    people: list[Person], history: Iterable[Assignment]
) -> list[Person]:
    """
    Return copies of ``people`` whose hosting_count is the number of completed
    assignments in ``history``. host_offset is left alone.
    """
    if not people:
        return []
    counts = count_completed(history)
    return [p.model_copy(update={"hosting_count": counts.get(p.id, 0)}) for p in people]


def _compare_add_order(a: Person, b: Person) -> int:
    if a.fairness_value != b.fairness_value:
        return a.fairness_value - b.fairness_value
    if a.created_at is not None and b.created_at is not None:
        if a.created_at != b.created_at:
            return -1 if a.created_at < b.created_at else 1
        return 0
    if a.id == b.id:
        return 0
    return -1 if a.id < b.id else 1


def sort_people(
    people: list[Person],
    sort_type: SortType,
    rng: Optional[random.Random] = None,
) -> list[Person]:
    """
    Rank the roster for round-robin assignment. Fairness value always
    dominates; the ordering mode only decides among equal values.
    """
    ordered = list(people)
    if sort_type == SortType.BY_NAME:
        ordered.sort(key=lambda p: (p.fairness_value, p.name))
    elif sort_type == SortType.BY_ADD_ORDER:
        ordered.sort(key=cmp_to_key(_compare_add_order))
    else:
        (rng or random.Random()).shuffle(ordered)
        # list.sort is stable: the shuffle survives among equal values
        ordered.sort(key=lambda p: p.fairness_value)
    return ordered


def build_assignments(
    team_id: str,
    ordered_people: list[Person],
    reference_date: date,
    window_size: int,
    weekday: int = THURSDAY,
) -> list[Assignment]:
    """Assign ``ordered_people`` round-robin to the next ``window_size`` occurrences."""
    if not ordered_people or window_size <= 0:
        return []
    assignments: list[Assignment] = []
    for index, day in enumerate(occurrence_dates(reference_date, window_size, weekday)):
        person = ordered_people[index % len(ordered_people)]
        assignments.append(Assignment(
            id=str(uuid.uuid4()),
            team_id=team_id,
            date=day,
            person_id=person.id,
            completed=day <= reference_date,
        ))
    return assignments


def resume_order(ordered_people: list[Person], person_id: Optional[str]) -> list[Person]:
    """Rotate ``ordered_people`` so the round-robin continues after ``person_id``."""
    for index, person in enumerate(ordered_people):
        if person.id == person_id:
            return ordered_people[index + 1:] + ordered_people[:index + 1]
    return list(ordered_people)


def future_assignment_count(
    assignments: Iterable[Assignment], person_id: str, reference_date: date
) -> int:
    """Upcoming load: assignments after ``reference_date`` (the reference day is already past)."""
    return sum(1 for a in assignments if a.person_id == person_id and a.date > reference_date)


def is_past(assignment: Assignment, reference_date: date) -> bool:
    """An assignment is past (and immutable) once its date is on/before the reference."""
    return assignment.date <= reference_date
