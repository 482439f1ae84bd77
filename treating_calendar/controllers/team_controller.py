# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Team registry endpoints.
Thin HTTP layer that delegates ALL logic to TeamService / RosterService.
"""

from datetime import date

from fastapi import APIRouter, Depends

from treating_calendar.controllers.errors import to_http
from treating_calendar.core.dependencies import (
    get_reference_date,
    get_roster_service,
    get_team_service,
)
from treating_calendar.core.errors import TreatingError
from treating_calendar.schemas import TeamResponse, TeamSaveRequest
from treating_calendar.services.roster_service import RosterService
from treating_calendar.services.team_service import TeamService

router = APIRouter(prefix="/api/v1", tags=["Teams"])


@router.get("/teams", response_model=list[TeamResponse])
def list_teams(service: TeamService = Depends(get_team_service)):
    """List every registered team."""
    return [TeamResponse.from_team(t) for t in service.list_teams()]


@router.get("/teams/{team_id}", response_model=TeamResponse)
def get_team(team_id: str, service: TeamService = Depends(get_team_service)):
    try:
        return TeamResponse.from_team(service.get_team(team_id))
    except TreatingError as e:
        raise to_http(e)


@router.put("/teams/{team_id}", response_model=TeamResponse)
def save_team(
    team_id: str,
    payload: TeamSaveRequest,
    reference_date: date = Depends(get_reference_date),
    service: TeamService = Depends(get_team_service),
    roster: RosterService = Depends(get_roster_service),
):
    """Create or update a team. Changing the ordering mode regenerates the schedule."""
    try:
        previous = service.ensure_team(team_id)
        team = service.save_team(
            team_id,
            team_name=payload.team_name,
            host_notifications_enabled=payload.host_notifications_enabled,
            team_notifications_enabled=payload.team_notifications_enabled,
        )
        if payload.sort_type is not None and payload.sort_type != previous.sort_type:
            roster.regenerate(team_id, reference_date, sort_type=payload.sort_type)
            team = service.get_team(team_id)
        return TeamResponse.from_team(team)
    except TreatingError as e:
        raise to_http(e)
