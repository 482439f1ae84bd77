# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Team data access.
NO business rules here: pure CRUD.
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine

from treating_calendar.core.database import teams
from treating_calendar.models.domain import SortType, Team
from treating_calendar.repositories.base import persistence_guard


def _row_to_team(row) -> Team:
    return Team(
        team_id=row["team_id"],
        team_name=row["team_name"],
        sort_type=SortType(row["sort_type"]),
        host_notifications_enabled=bool(row["host_notifications_enabled"]),
        team_notifications_enabled=bool(row["team_notifications_enabled"]),
        created_at=row["created_at"],
    )


class TeamRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Read ──

    def get(self, team_id: str) -> Optional[Team]:
        with persistence_guard("get_team"), self._engine.connect() as conn:
            row = conn.execute(
                select(teams).where(teams.c.team_id == team_id)
            ).mappings().first()
        return _row_to_team(row) if row else None

    def get_all(self) -> list[Team]:
        with persistence_guard("list_teams"), self._engine.connect() as conn:
            rows = conn.execute(select(teams).order_by(teams.c.team_id)).mappings().all()
        return [_row_to_team(r) for r in rows]

    # ── Write ──

    def save(self, team: Team) -> Team:
        """Insert or update a team row."""
        values = {
            "team_name": team.team_name,
            "sort_type": team.sort_type.value,
            "host_notifications_enabled": team.host_notifications_enabled,
            "team_notifications_enabled": team.team_notifications_enabled,
        }
        with persistence_guard("save_team"), self._engine.begin() as conn:
            updated = conn.execute(
                teams.update().where(teams.c.team_id == team.team_id).values(**values)
            ).rowcount
            if not updated:
                conn.execute(teams.insert().values(
                    team_id=team.team_id, created_at=team.created_at, **values
                ))
        return team
