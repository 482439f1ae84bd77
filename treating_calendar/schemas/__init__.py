# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas: API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from treating_calendar.models.domain import Assignment, Person, SortType, Team


# ── Team Schemas ──

class TeamSaveRequest(BaseModel):
    team_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    sort_type: Optional[SortType] = None
    host_notifications_enabled: Optional[bool] = None
    team_notifications_enabled: Optional[bool] = None


class TeamResponse(BaseModel):
    team_id: str
    team_name: str
    sort_type: SortType
    host_notifications_enabled: bool
    team_notifications_enabled: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_team(cls, team: Team) -> "TeamResponse":
        return cls(**team.model_dump())


# ── Personnel Schemas ──

class PersonCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: str = Field(..., min_length=3, max_length=255, description="Reminder address")
    phone: Optional[str] = Field(default=None, max_length=64)

    @field_validator("name", "email")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class PersonResponse(BaseModel):
    id: str
    team_id: str
    name: str
    email: str
    phone: Optional[str] = None
    hosting_count: int
    host_offset: int
    fairness_value: int
    created_at: Optional[datetime] = None

    @classmethod
    def from_person(cls, person: Person) -> "PersonResponse":
        return cls(fairness_value=person.fairness_value, **person.model_dump())


class FutureCountResponse(BaseModel):
    person_id: str
    reference_date: date
    future_assignments: int


# ── Schedule Schemas ──

class AssignmentResponse(BaseModel):
    date: date
    person_id: Optional[str] = None
    completed: bool
    host_notified: bool
    team_notified: bool

    @classmethod
    def from_assignment(cls, assignment: Assignment) -> "AssignmentResponse":
        return cls(**assignment.model_dump(exclude={"id", "team_id"}))


class AssignmentDetailResponse(AssignmentResponse):
    is_past: bool
    person: Optional[PersonResponse] = None


class GenerateRequest(BaseModel):
    sort_type: Optional[SortType] = None
    window_size: Optional[int] = Field(
        default=None, ge=1, le=520, description="Number of weekly occurrences"
    )


class ScheduleResponse(BaseModel):
    team_id: str
    reference_date: date
    replaced: int
    assignments: list[AssignmentResponse]
    people: list[PersonResponse]


class PersonChangeResponse(ScheduleResponse):
    person: PersonResponse


class SwapRequest(BaseModel):
    date_a: date
    date_b: date


class SwapResponse(BaseModel):
    status: str = "swapped"
    team_id: str
    assignments: list[AssignmentResponse]


class NextHostResponse(BaseModel):
    team_id: str
    reference_date: date
    assignment: Optional[AssignmentResponse] = None
    person: Optional[PersonResponse] = None


# ── Reminder Schemas ──

class ReminderRequest(BaseModel):
    force: bool = False
    test_mode: bool = False


class ReminderResponse(BaseModel):
    team_id: str
    date: date
    host: Optional[str] = None
    host_notified: bool
    team_notified: bool
    recipients: int
    skipped: Optional[str] = None
