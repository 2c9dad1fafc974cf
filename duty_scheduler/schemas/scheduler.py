# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from duty_scheduler.models.domain import ConflictResolution
from duty_scheduler.services.dates import is_valid_date

DATE_REGEX = r"^\d{4}-\d{2}-\d{2}$"
PRIORITY_REGEX = r"^(P1|P2|P3|P4)$"
STATUS_REGEX = r"^(open|in_progress|resolved|escalated)$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _check_real_date(value: str) -> str:
    if not is_valid_date(value):
        raise ValueError("date must be a real calendar date (YYYY-MM-DD)")
    return value


# ── Auth Schemas ──

class AccessKeyValidationRequest(CamelModel):
    access_key: str = Field(default="", description="Shared-secret access key")


class AccessKeyValidationResponse(CamelModel):
    valid: bool
    user: Optional[dict] = None


# ── Booking Schemas ──

class BookingCreateRequest(CamelModel):
    user_id: str = Field(..., min_length=1, max_length=100, description="Member name")
    date: str = Field(..., pattern=DATE_REGEX, description="Weekend date, YYYY-MM-DD")

    @field_validator("date")
    @classmethod
    def real_date(cls, v: str) -> str:
        return _check_real_date(v)


class BookingResultResponse(CamelModel):
    success: bool
    conflicts: list[ConflictResolution] = Field(default_factory=list)


# ── Ticket Schemas ──

class TicketCreateRequest(CamelModel):
    date: str = Field(..., pattern=DATE_REGEX)
    ticket_ids: list[str] = Field(..., min_length=1, description="External ticket ids")
    priority: str = Field(default="P3", pattern=PRIORITY_REGEX)
    status: str = Field(default="open", pattern=STATUS_REGEX)
    notes: Optional[str] = Field(default=None, max_length=5000)

    @field_validator("date")
    @classmethod
    def real_date(cls, v: str) -> str:
        return _check_real_date(v)

    @field_validator("ticket_ids")
    @classmethod
    def non_blank_ids(cls, v: list[str]) -> list[str]:
        ids = [t.strip() for t in v if t.strip()]
        if not ids:
            raise ValueError("At least one ticket ID is required")
        return ids


class TicketUpdateRequest(CamelModel):
    """Partial update model for PUT /api/tickets/{id}."""
    ticket_ids: Optional[list[str]] = Field(default=None, min_length=1)
    priority: Optional[str] = Field(default=None, pattern=PRIORITY_REGEX)
    status: Optional[str] = Field(default=None, pattern=STATUS_REGEX)
    notes: Optional[str] = Field(default=None, max_length=5000)
