# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Team registry with team name, reminder toggles and ordering mode.
"""

from datetime import datetime, timezone
from typing import Optional

from treating_calendar.core.config import settings
from treating_calendar.core.errors import TeamNotFoundError, ValidationError
from treating_calendar.core.logging import get_logger
from treating_calendar.models.domain import SortType, Team
from treating_calendar.repositories.team_repository import TeamRepository

logger = get_logger(__name__)


class TeamService:
    def __init__(self, team_repo: TeamRepository) -> None:
        self._teams = team_repo

    def get_team(self, team_id: str) -> Team:
        team = self._teams.get(team_id)
        if team is None:
            raise TeamNotFoundError(f"No team found with id '{team_id}'")
        return team

    def list_teams(self) -> list[Team]:
        return self._teams.get_all()

    def ensure_team(self, team_id: str) -> Team:
        """Return the team, registering it with defaults on first use."""
        team = self._teams.get(team_id)
        if team is not None:
            return team
        team = Team(
            team_id=team_id,
            team_name=team_id,
            sort_type=SortType(settings.DEFAULT_SORT_TYPE),
            created_at=datetime.now(timezone.utc),
        )
        self._teams.save(team)
        logger.info("Team registered: team=%s", team_id)
        return team

    def save_team(
        self,
        team_id: str,
        team_name: Optional[str] = None,
        sort_type: Optional[SortType] = None,
        host_notifications_enabled: Optional[bool] = None,
        team_notifications_enabled: Optional[bool] = None,
    ) -> Team:
        """Create or partially update a team."""
        if team_name is not None and not team_name.strip():
            raise ValidationError("team_name must not be empty")

        team = self.ensure_team(team_id)
        changes = {
            "team_name": team_name.strip() if team_name is not None else None,
            "sort_type": sort_type,
            "host_notifications_enabled": host_notifications_enabled,
            "team_notifications_enabled": team_notifications_enabled,
        }
        changes = {k: v for k, v in changes.items() if v is not None}
        if not changes:
            return team

        team = team.model_copy(update=changes)
        self._teams.save(team)
        logger.info("Team updated: team=%s, changes=%s", team_id, sorted(changes))
        return team
