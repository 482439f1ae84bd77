# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Personnel (roster) data access.
NO business rules here: pure CRUD.
"""
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Engine

from treating_calendar.core.database import personnel
from treating_calendar.models.domain import Person
from treating_calendar.repositories.base import persistence_guard


def _row_to_person(row) -> Person:
    return Person(
        id=row["id"],
        team_id=row["team_id"],
        name=row["name"],
        email=row["email"],
        phone=row["phone"],
        hosting_count=row["hosting_count"] or 0,
        host_offset=row["host_offset"] or 0,
        created_at=row["created_at"],
    )


class PersonnelRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Read ──

    def list_people(self, team_id: str) -> list[Person]:
        with persistence_guard("list_people"), self._engine.connect() as conn:
            rows = conn.execute(
                select(personnel)
                .where(personnel.c.team_id == team_id)
                .order_by(personnel.c.name)
            ).mappings().all()
        return [_row_to_person(r) for r in rows]

    def get_person(self, team_id: str, person_id: str) -> Optional[Person]:
        with persistence_guard("get_person"), self._engine.connect() as conn:
            row = conn.execute(
                select(personnel).where(
                    personnel.c.team_id == team_id, personnel.c.id == person_id
                )
            ).mappings().first()
        return _row_to_person(row) if row else None

    def count(self, team_id: Optional[str] = None) -> int:
        stmt = select(func.count()).select_from(personnel)
        if team_id is not None:
            stmt = stmt.where(personnel.c.team_id == team_id)
        with persistence_guard("count_people"), self._engine.connect() as conn:
            return conn.execute(stmt).scalar() or 0

    # ── Write ──

    def add_person(self, person: Person) -> Person:
        with persistence_guard("add_person"), self._engine.begin() as conn:
            conn.execute(personnel.insert().values(
                id=person.id,
                team_id=person.team_id,
                name=person.name,
                email=person.email,
                phone=person.phone,
                hosting_count=person.hosting_count,
                host_offset=person.host_offset,
                created_at=person.created_at,
            ))
        return person

    def delete_person(self, team_id: str, person_id: str) -> bool:
        with persistence_guard("remove_person"), self._engine.begin() as conn:
            deleted = conn.execute(
                personnel.delete().where(
                    personnel.c.team_id == team_id, personnel.c.id == person_id
                )
            ).rowcount
        return deleted > 0

    def update_hosting_counts(self, team_id: str, counts: dict[str, int]) -> None:
        """Persist recomputed hosting counts for several people in one transaction."""
        if not counts:
            return
        with persistence_guard("update_hosting_counts"), self._engine.begin() as conn:
            for person_id, hosting_count in counts.items():
                conn.execute(
                    personnel.update()
                    .where(personnel.c.team_id == team_id, personnel.c.id == person_id)
                    .values(hosting_count=hosting_count)
                )
