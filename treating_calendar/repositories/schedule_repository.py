# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Host schedule (assignment) data access.
Every multi-row write runs inside a single transaction.
"""
from datetime import date
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Connection, Engine

from treating_calendar.core.database import host_schedule
from treating_calendar.models.domain import Assignment
from treating_calendar.repositories.base import persistence_guard


def _row_to_assignment(row) -> Assignment:
    return Assignment(
        id=row["id"],
        team_id=row["team_id"],
        date=row["date"],
        person_id=row["person_id"],
        completed=bool(row["completed"]),
        host_notified=bool(row["host_notified"]),
        team_notified=bool(row["team_notified"]),
    )


def _assignment_values(assignment: Assignment) -> dict:
    return {
        "id": assignment.id,
        "team_id": assignment.team_id,
        "date": assignment.date,
        "person_id": assignment.person_id,
        "completed": assignment.completed,
        "host_notified": assignment.host_notified,
        "team_notified": assignment.team_notified,
    }


class ScheduleRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Read ──

    def list_assignments(
        self,
        team_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[Assignment]:
        stmt = select(host_schedule).where(host_schedule.c.team_id == team_id)
        if start is not None:
            stmt = stmt.where(host_schedule.c.date >= start)
        if end is not None:
            stmt = stmt.where(host_schedule.c.date <= end)
        with persistence_guard("list_assignments"), self._engine.connect() as conn:
            rows = conn.execute(stmt.order_by(host_schedule.c.date)).mappings().all()
        return [_row_to_assignment(r) for r in rows]

    def get_by_date(self, team_id: str, day: date) -> Optional[Assignment]:
        with persistence_guard("get_assignment"), self._engine.connect() as conn:
            row = conn.execute(
                select(host_schedule).where(
                    host_schedule.c.team_id == team_id, host_schedule.c.date == day
                )
            ).mappings().first()
        return _row_to_assignment(row) if row else None

    def list_completed(self, team_id: str) -> list[Assignment]:
        with persistence_guard("list_completed"), self._engine.connect() as conn:
            rows = conn.execute(
                select(host_schedule)
                .where(host_schedule.c.team_id == team_id, host_schedule.c.completed.is_(True))
                .order_by(host_schedule.c.date)
            ).mappings().all()
        return [_row_to_assignment(r) for r in rows]

    def count(self, team_id: Optional[str] = None) -> int:
        stmt = select(func.count()).select_from(host_schedule)
        if team_id is not None:
            stmt = stmt.where(host_schedule.c.team_id == team_id)
        with persistence_guard("count_assignments"), self._engine.connect() as conn:
            return conn.execute(stmt).scalar() or 0

    # ── Write ──

    def replace_future_assignments(
        self, team_id: str, from_date: date, assignments: list[Assignment]
    ) -> int:
        """
        Delete every assignment dated on/after ``from_date`` and insert
        ``assignments`` in the same transaction. Returns the number deleted.
        """
        with persistence_guard("replace_future_assignments"), self._engine.begin() as conn:
            deleted = conn.execute(
                host_schedule.delete().where(
                    host_schedule.c.team_id == team_id,
                    host_schedule.c.date >= from_date,
                )
            ).rowcount
            if assignments:
                conn.execute(
                    host_schedule.insert(),
                    [_assignment_values(a) for a in assignments],
                )
        return deleted

    def update_assignment_people(
        self, team_id: str, changes: dict[date, Optional[str]]
    ) -> None:
        """Reassign several dates at once; all or nothing."""
        with persistence_guard("update_assignment_people"), self._engine.begin() as conn:
            for day, person_id in changes.items():
                conn.execute(
                    host_schedule.update()
                    .where(host_schedule.c.team_id == team_id, host_schedule.c.date == day)
                    .values(person_id=person_id)
                )

    def refresh_completed(self, team_id: str, reference_date: date) -> tuple[int, int]:
        """
        Recompute the completed partition: dates <= reference are completed,
        later dates are not. Returns (completed_rows, open_rows).
        """
        with persistence_guard("refresh_completed"), self._engine.begin() as conn:
            done = self._mark_completed_before(conn, team_id, reference_date)
            still_open = self._mark_incomplete_from(conn, team_id, reference_date)
        return done, still_open

    def mark_notified(
        self,
        team_id: str,
        day: date,
        host_notified: Optional[bool] = None,
        team_notified: Optional[bool] = None,
    ) -> None:
        values = {}
        if host_notified is not None:
            values["host_notified"] = host_notified
        if team_notified is not None:
            values["team_notified"] = team_notified
        if not values:
            return
        with persistence_guard("mark_notified"), self._engine.begin() as conn:
            conn.execute(
                host_schedule.update()
                .where(host_schedule.c.team_id == team_id, host_schedule.c.date == day)
                .values(**values)
            )

    # ── Internal ──

    @staticmethod
    def _mark_completed_before(conn: Connection, team_id: str, reference_date: date) -> int:
        return conn.execute(
            host_schedule.update()
            .where(host_schedule.c.team_id == team_id, host_schedule.c.date <= reference_date)
            .values(completed=True)
        ).rowcount

    @staticmethod
    def _mark_incomplete_from(conn: Connection, team_id: str, reference_date: date) -> int:
        return conn.execute(
            host_schedule.update()
            .where(host_schedule.c.team_id == team_id, host_schedule.c.date > reference_date)
            .values(completed=False)
        ).rowcount
