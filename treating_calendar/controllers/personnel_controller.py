# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Roster endpoints.
Thin HTTP layer that delegates ALL logic to RosterService.
"""

from datetime import date

from fastapi import APIRouter, Depends

from treating_calendar.controllers.errors import to_http
from treating_calendar.core.dependencies import get_reference_date, get_roster_service
from treating_calendar.core.errors import TreatingError
from treating_calendar.schemas import (
    AssignmentResponse,
    FutureCountResponse,
    PersonChangeResponse,
    PersonCreateRequest,
    PersonResponse,
    ScheduleResponse,
)
from treating_calendar.services.roster_service import RosterService

router = APIRouter(prefix="/api/v1", tags=["People"])


@router.get("/teams/{team_id}/people", response_model=list[PersonResponse])
def list_people(team_id: str, service: RosterService = Depends(get_roster_service)):
    return [PersonResponse.from_person(p) for p in service.list_people(team_id)]


@router.post("/teams/{team_id}/people", status_code=201, response_model=PersonChangeResponse)
def add_person(
    team_id: str,
    payload: PersonCreateRequest,
    reference_date: date = Depends(get_reference_date),
    service: RosterService = Depends(get_roster_service),
):
    """Add a team member and regenerate the future schedule."""
    try:
        person, result = service.add_person(
            team_id,
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            reference_date=reference_date,
        )
    except TreatingError as e:
        raise to_http(e)
    refreshed = next((p for p in result.people if p.id == person.id), person)
    return PersonChangeResponse(
        team_id=team_id,
        reference_date=reference_date,
        replaced=result.replaced,
        person=PersonResponse.from_person(refreshed),
        assignments=[AssignmentResponse.from_assignment(a) for a in result.assignments],
        people=[PersonResponse.from_person(p) for p in result.people],
    )


@router.get("/teams/{team_id}/people/{person_id}", response_model=PersonResponse)
def get_person(
    team_id: str,
    person_id: str,
    service: RosterService = Depends(get_roster_service),
):
    try:
        return PersonResponse.from_person(service.get_person(team_id, person_id))
    except TreatingError as e:
        raise to_http(e)


@router.delete("/teams/{team_id}/people/{person_id}", response_model=ScheduleResponse)
def remove_person(
    team_id: str,
    person_id: str,
    reference_date: date = Depends(get_reference_date),
    service: RosterService = Depends(get_roster_service),
):
    """Remove a team member and regenerate the future schedule without them."""
    try:
        result = service.remove_person(team_id, person_id, reference_date)
    except TreatingError as e:
        raise to_http(e)
    return ScheduleResponse(
        team_id=team_id,
        reference_date=reference_date,
        replaced=result.replaced,
        assignments=[AssignmentResponse.from_assignment(a) for a in result.assignments],
        people=[PersonResponse.from_person(p) for p in result.people],
    )


@router.get("/teams/{team_id}/people/{person_id}/future-count", response_model=FutureCountResponse)
def future_count(
    team_id: str,
    person_id: str,
    reference_date: date = Depends(get_reference_date),
    service: RosterService = Depends(get_roster_service),
):
    """Upcoming hosting load for one person."""
    try:
        count = service.future_assignment_count(team_id, person_id, reference_date)
    except TreatingError as e:
        raise to_http(e)
    return FutureCountResponse(
        person_id=person_id, reference_date=reference_date, future_assignments=count
    )
