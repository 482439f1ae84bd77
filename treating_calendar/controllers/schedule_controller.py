# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Schedule generation, swaps, completion refresh and lookups.
Thin HTTP layer that delegates ALL logic to RotationScheduler / RosterService.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends

from treating_calendar.controllers.errors import to_http
from treating_calendar.core.dependencies import (
    get_reference_date,
    get_roster_service,
    get_scheduler,
)
from treating_calendar.core.errors import TreatingError
from treating_calendar.schemas import (
    AssignmentDetailResponse,
    AssignmentResponse,
    GenerateRequest,
    NextHostResponse,
    PersonResponse,
    ScheduleResponse,
    SwapRequest,
    SwapResponse,
)
from treating_calendar.services.roster_service import RosterService
from treating_calendar.services.scheduler_service import RotationScheduler

router = APIRouter(prefix="/api/v1", tags=["Schedule"])


@router.get("/teams/{team_id}/schedule", response_model=list[AssignmentResponse])
def list_schedule(
    team_id: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
    scheduler: RotationScheduler = Depends(get_scheduler),
):
    """All assignments for a team, optionally bounded by date."""
    try:
        assignments = scheduler.list_assignments(team_id, start=start, end=end)
    except TreatingError as e:
        raise to_http(e)
    return [AssignmentResponse.from_assignment(a) for a in assignments]


@router.post("/teams/{team_id}/schedule/generate", response_model=ScheduleResponse)
def generate_schedule(
    team_id: str,
    payload: Optional[GenerateRequest] = None,
    reference_date: date = Depends(get_reference_date),
    roster: RosterService = Depends(get_roster_service),
):
    """Regenerate the future schedule, optionally switching the ordering mode."""
    payload = payload or GenerateRequest()
    try:
        result = roster.regenerate(
            team_id,
            reference_date,
            sort_type=payload.sort_type,
            window_size=payload.window_size,
        )
    except TreatingError as e:
        raise to_http(e)
    return ScheduleResponse(
        team_id=team_id,
        reference_date=reference_date,
        replaced=result.replaced,
        assignments=[AssignmentResponse.from_assignment(a) for a in result.assignments],
        people=[PersonResponse.from_person(p) for p in result.people],
    )


@router.post("/teams/{team_id}/schedule/swap", response_model=SwapResponse)
def swap_assignments(
    team_id: str,
    payload: SwapRequest,
    reference_date: date = Depends(get_reference_date),
    scheduler: RotationScheduler = Depends(get_scheduler),
):
    """Exchange the hosts of two future dates."""
    try:
        first, second = scheduler.swap(team_id, payload.date_a, payload.date_b, reference_date)
    except TreatingError as e:
        raise to_http(e)
    return SwapResponse(
        team_id=team_id,
        assignments=[
            AssignmentResponse.from_assignment(first),
            AssignmentResponse.from_assignment(second),
        ],
    )


@router.post("/teams/{team_id}/schedule/refresh", response_model=list[PersonResponse])
def refresh_completion(
    team_id: str,
    reference_date: date = Depends(get_reference_date),
    scheduler: RotationScheduler = Depends(get_scheduler),
):
    """Recompute completed flags and hosting counts for the reference date."""
    try:
        people = scheduler.refresh_completion(team_id, reference_date)
    except TreatingError as e:
        raise to_http(e)
    return [PersonResponse.from_person(p) for p in people]


@router.get("/teams/{team_id}/schedule/next", response_model=NextHostResponse)
def next_host(
    team_id: str,
    reference_date: date = Depends(get_reference_date),
    scheduler: RotationScheduler = Depends(get_scheduler),
):
    """Who is treating next."""
    try:
        assignment = scheduler.next_assignment(team_id, reference_date)
        person = scheduler.person_for_date(team_id, assignment.date) if assignment else None
    except TreatingError as e:
        raise to_http(e)
    return NextHostResponse(
        team_id=team_id,
        reference_date=reference_date,
        assignment=AssignmentResponse.from_assignment(assignment) if assignment else None,
        person=PersonResponse.from_person(person) if person else None,
    )


@router.get("/teams/{team_id}/schedule/{day}", response_model=AssignmentDetailResponse)
def get_assignment(
    team_id: str,
    day: date,
    reference_date: date = Depends(get_reference_date),
    scheduler: RotationScheduler = Depends(get_scheduler),
):
    """One date's assignment, its host and whether it is already past."""
    try:
        assignment = scheduler.get_assignment(team_id, day)
        person = scheduler.person_for_date(team_id, day)
    except TreatingError as e:
        raise to_http(e)
    return AssignmentDetailResponse(
        **AssignmentResponse.from_assignment(assignment).model_dump(),
        is_past=scheduler.is_past(team_id, day, reference_date),
        person=PersonResponse.from_person(person) if person else None,
    )
