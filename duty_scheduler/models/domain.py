# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
Attributes are snake_case; the wire format is camelCase via aliases.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TICKET_PRIORITIES: tuple[str, ...] = ("P1", "P2", "P3", "P4")
TICKET_STATUSES: tuple[str, ...] = ("open", "in_progress", "resolved", "escalated")


class DomainModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TeamMember(DomainModel):
    """A member of the duty team. Immutable after seeding."""
    id: int
    name: str
    priority: int = Field(..., description="Lower value wins conflicts")
    color: str
    is_active: bool = True
    access_key: str = Field(..., repr=False)

    def public(self) -> dict:
        """Serialisable view without the access key."""
        return self.model_dump(by_alias=True, exclude={"access_key"})


class Booking(DomainModel):
    """A request by one member for one weekend date."""
    id: int
    user_id: str
    date: str
    month: str
    is_confirmed: bool = False
    is_conflicted: bool = False


class FinalScheduleEntry(DomainModel):
    id: int
    date: str
    assigned_to: str
    month: str


class ConflictResolution(DomainModel):
    date: str
    winner: str
    losers: list[str]


class UserBookingStatus(DomainModel):
    user_id: str
    confirmed_days: int
    conflicted_days: int
    remaining_days: int
    bookings: list[Booking]


class MonthlySchedule(DomainModel):
    month: str
    assignments: dict[str, str]
    conflicts: list[ConflictResolution]
    user_statuses: list[UserBookingStatus]


class Ticket(DomainModel):
    """An incident ticket worked on a duty date."""
    id: int
    date: str
    ticket_ids: list[str]
    priority: str = "P3"
    status: str = "open"
    notes: Optional[str] = None
    created_by: str
    created_at: str
    updated_at: Optional[str] = None
