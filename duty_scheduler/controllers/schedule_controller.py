# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Monthly schedule and export endpoints.
Thin HTTP layer — delegates ALL logic to ScheduleService.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from duty_scheduler.core.dependencies import get_current_member, get_schedule_service
from duty_scheduler.models.domain import TeamMember
from duty_scheduler.services.dates import is_valid_month
from duty_scheduler.services.schedule_service import ScheduleService

router = APIRouter(prefix="/api", tags=["Schedule"])


def _require_month(month: str) -> None:
    if not is_valid_month(month):
        raise HTTPException(status_code=400, detail="Invalid month format. Use YYYY-MM")


@router.get("/schedule/{month}")
def get_monthly_schedule(
    month: str,
    _: TeamMember = Depends(get_current_member),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Assignments, conflicts, and per-member status for a month."""
    _require_month(month)
    return service.get_monthly_schedule(month)


@router.get("/export/{month}")
def export_schedule(
    month: str,
    _: TeamMember = Depends(get_current_member),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Downloadable JSON snapshot of a month."""
    _require_month(month)
    return JSONResponse(
        content=service.export_schedule(month),
        headers={"Content-Disposition": f'attachment; filename="schedule-{month}.json"'},
    )
