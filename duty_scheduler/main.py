# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Weekend Duty Scheduler
======================
Members book weekend duty days; double-bookings are resolved by a static
priority order and the winning member is written to the final schedule.
A per-date ticket log records incidents worked during duty.

Port: 8005
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from duty_scheduler.controllers import (
    auth_controller,
    booking_controller,
    schedule_controller,
    system_controller,
    ticket_controller,
)
from duty_scheduler.core.config import settings
from duty_scheduler.core.dependencies import Container, build_container
from duty_scheduler.core.logging import get_logger
from duty_scheduler.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Log startup and shutdown."""
    container: Container = application.state.container
    logger.info(
        "Duty scheduler starting — storage=%s, team_members=%d",
        settings.STORAGE_BACKEND, container.team_repo.count(),
    )
    yield
    logger.info("Duty scheduler shutting down — %d bookings held", container.booking_repo.count())


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Build the application around ``container`` (or one from settings)."""
    application = FastAPI(
        title="Weekend Duty Scheduler",
        description="Weekend on-call booking with priority-based conflict resolution.",
        version=settings.SERVICE_VERSION,
        lifespan=lifespan,
    )
    application.state.container = container or build_container()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(MetricsMiddleware)
    application.add_middleware(RequestIDMiddleware)

    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        req_id = getattr(request.state, "request_id", None)
        logger.exception("Unhandled exception", extra={"request_id": req_id})
        return JSONResponse(
            status_code=500,
            content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
        )

    application.include_router(system_controller.router)
    application.include_router(auth_controller.router)
    application.include_router(booking_controller.router)
    application.include_router(schedule_controller.router)
    application.include_router(ticket_controller.router)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
