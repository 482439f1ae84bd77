# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models. Pure data structures, NO FastAPI dependency.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SortType(str, Enum):
    """Ordering mode used to rank the roster before round-robin assignment."""
    BY_NAME = "byName"
    BY_ADD_ORDER = "byAddOrder"
    RANDOM = "random"


class Person(BaseModel):
    """A roster member who takes turns hosting."""
    id: str
    team_id: str
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(default="", max_length=255)
    phone: Optional[str] = None
    hosting_count: int = Field(default=0, ge=0)
    host_offset: int = 0
    created_at: Optional[datetime] = None

    @property
    def fairness_value(self) -> int:
        """Lower means sooner. Offset lets late joiners start level with veterans."""
        return self.hosting_count + self.host_offset


class Assignment(BaseModel):
    """One hosting slot on one occurrence date."""
    id: str
    team_id: str
    date: date
    person_id: Optional[str] = None
    completed: bool = False
    host_notified: bool = False
    team_notified: bool = False


class Team(BaseModel):
    team_id: str
    team_name: str
    sort_type: SortType = SortType.BY_NAME
    host_notifications_enabled: bool = False
    team_notifications_enabled: bool = False
    created_at: Optional[datetime] = None
