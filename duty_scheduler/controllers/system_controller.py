# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints — health, readiness, metrics.
Pure HTTP layer — no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from duty_scheduler.core.config import settings
from duty_scheduler.core.dependencies import Container, get_container

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check(container: Container = Depends(get_container)):
    """Liveness probe for Docker and orchestration."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "storage": settings.STORAGE_BACKEND,
        "team_members": container.team_repo.count(),
        "bookings": container.booking_repo.count(),
    }


@router.get("/health/ready")
def readiness_check(container: Container = Depends(get_container)):
    """Readiness probe — the team must be loaded before bookings make sense."""
    return {
        "status": "ready",
        "service": settings.SERVICE_NAME,
        "team_loaded": container.team_repo.count() > 0,
    }


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics in OpenMetrics format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
