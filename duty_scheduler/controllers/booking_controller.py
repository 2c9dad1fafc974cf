# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Booking endpoints.
Thin HTTP layer — delegates ALL logic to BookingService.
"""

from fastapi import APIRouter, Depends, HTTPException

from duty_scheduler.core.dependencies import get_booking_service, get_current_member
from duty_scheduler.core.errors import BookingNotFound, SchedulingError
from duty_scheduler.models.domain import TeamMember
from duty_scheduler.schemas.scheduler import BookingCreateRequest, BookingResultResponse
from duty_scheduler.services.booking_service import BookingService
from duty_scheduler.services.dates import is_valid_date, is_valid_month

router = APIRouter(prefix="/api", tags=["Bookings"])


@router.get("/bookings/{month}")
def list_bookings(
    month: str,
    _: TeamMember = Depends(get_current_member),
    service: BookingService = Depends(get_booking_service),
):
    """All bookings of a month, every member."""
    if not is_valid_month(month):
        raise HTTPException(status_code=400, detail="Invalid month format. Use YYYY-MM")
    return service.list_bookings(month)


@router.post("/bookings", response_model=BookingResultResponse)
def request_booking(
    payload: BookingCreateRequest,
    member: TeamMember = Depends(get_current_member),
    service: BookingService = Depends(get_booking_service),
):
    """Book a weekend day for the calling member."""
    if payload.user_id != member.name:
        raise HTTPException(status_code=403, detail="You can only book for yourself")
    try:
        return service.request_booking(payload.user_id, payload.date)
    except SchedulingError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/bookings/{user_id}/{date}")
def cancel_booking(
    user_id: str,
    date: str,
    member: TeamMember = Depends(get_current_member),
    service: BookingService = Depends(get_booking_service),
):
    """Cancel one of the calling member's bookings."""
    if user_id != member.name:
        raise HTTPException(status_code=403, detail="You can only cancel your own bookings")
    if not is_valid_date(date):
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")
    try:
        return service.cancel_booking(user_id, date)
    except BookingNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
