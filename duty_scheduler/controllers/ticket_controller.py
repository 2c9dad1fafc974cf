# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Duty ticket endpoints.
Thin HTTP layer — delegates ALL logic to TicketService.
"""

from fastapi import APIRouter, Depends, HTTPException

from duty_scheduler.core.dependencies import get_current_member, get_ticket_service
from duty_scheduler.core.errors import TicketNotFound
from duty_scheduler.models.domain import TeamMember
from duty_scheduler.schemas.scheduler import TicketCreateRequest, TicketUpdateRequest
from duty_scheduler.services.dates import is_valid_date
from duty_scheduler.services.ticket_service import TicketService

router = APIRouter(prefix="/api", tags=["Tickets"])


@router.get("/tickets/{date}")
def list_tickets(
    date: str,
    _: TeamMember = Depends(get_current_member),
    service: TicketService = Depends(get_ticket_service),
):
    """Tickets logged against a duty date."""
    if not is_valid_date(date):
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")
    return service.list_tickets(date)


@router.post("/tickets", status_code=201)
def create_ticket(
    payload: TicketCreateRequest,
    member: TeamMember = Depends(get_current_member),
    service: TicketService = Depends(get_ticket_service),
):
    """Log a ticket; the caller is recorded as its author."""
    try:
        return service.create_ticket(
            date=payload.date,
            ticket_ids=payload.ticket_ids,
            created_by=member.name,
            priority=payload.priority,
            status=payload.status,
            notes=payload.notes,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/tickets/{ticket_id}")
def update_ticket(
    ticket_id: int,
    payload: TicketUpdateRequest,
    _: TeamMember = Depends(get_current_member),
    service: TicketService = Depends(get_ticket_service),
):
    """Partially update a ticket."""
    try:
        return service.update_ticket(ticket_id, payload.model_dump(exclude_unset=True))
    except TicketNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/tickets/{ticket_id}")
def delete_ticket(
    ticket_id: int,
    _: TeamMember = Depends(get_current_member),
    service: TicketService = Depends(get_ticket_service),
):
    """Delete a ticket."""
    try:
        return service.delete_ticket(ticket_id)
    except TicketNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
