# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Access-key validation and team directory endpoints.
Thin HTTP layer — delegates ALL logic to TeamDirectory.
"""

from fastapi import APIRouter, Depends, HTTPException

from duty_scheduler.core.config import settings
from duty_scheduler.core.dependencies import get_current_member, get_directory
from duty_scheduler.models.domain import TeamMember
from duty_scheduler.schemas.scheduler import (
    AccessKeyValidationRequest,
    AccessKeyValidationResponse,
)
from duty_scheduler.services.directory import TeamDirectory

router = APIRouter(prefix="/api", tags=["Auth"])


@router.get("/access-keys")
def list_access_keys(directory: TeamDirectory = Depends(get_directory)):
    """Initial-setup helper; disabled unless EXPOSE_ACCESS_KEYS is set."""
    if not settings.EXPOSE_ACCESS_KEYS:
        raise HTTPException(status_code=404, detail="Not Found")
    return [
        {"name": m.name, "accessKey": m.access_key}
        for m in directory.list_members()
    ]


@router.post("/auth/validate", response_model=AccessKeyValidationResponse)
def validate_access_key(
    payload: AccessKeyValidationRequest,
    directory: TeamDirectory = Depends(get_directory),
):
    """Check a presented access key without requiring authentication."""
    member = directory.validate_access_key(payload.access_key)
    if member is None:
        return {"valid": False}
    return {"valid": True, "user": {"name": member.name, "color": member.color}}


@router.get("/team-members")
def list_team_members(
    _: TeamMember = Depends(get_current_member),
    directory: TeamDirectory = Depends(get_directory),
):
    """List the team in priority order."""
    return [m.public() for m in directory.list_members()]
