# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
The container lives on ``app.state`` so each app instance owns its stores.
"""

from datetime import date
from typing import Callable, Optional

from fastapi import Header, HTTPException, Request

from duty_scheduler.core.config import settings
from duty_scheduler.core.database import TransactionScope, build_engine, init_schema
from duty_scheduler.core.logging import get_logger
from duty_scheduler.models.domain import TeamMember
from duty_scheduler.repositories.booking_repository import (
    BookingRepository,
    SqlBookingRepository,
)
from duty_scheduler.repositories.schedule_repository import (
    ScheduleRepository,
    SqlScheduleRepository,
)
from duty_scheduler.repositories.team_repository import SqlTeamRepository, TeamRepository
from duty_scheduler.repositories.ticket_repository import (
    SqlTicketRepository,
    TicketRepository,
)
from duty_scheduler.repositories.unit_of_work import MemoryUnitOfWork, SqlUnitOfWork
from duty_scheduler.services.booking_service import BookingService
from duty_scheduler.services.directory import TeamDirectory
from duty_scheduler.services.schedule_service import ScheduleService
from duty_scheduler.services.ticket_service import TicketService

logger = get_logger(__name__)


class Container:
    """Repositories plus the services built on top of them."""

    def __init__(
        self,
        team_repo,
        booking_repo,
        schedule_repo,
        ticket_repo,
        unit_of_work,
        clock: Optional[Callable[[], date]] = None,
    ) -> None:
        self.team_repo = team_repo
        self.booking_repo = booking_repo
        self.schedule_repo = schedule_repo
        self.ticket_repo = ticket_repo
        self.unit_of_work = unit_of_work

        self.directory = TeamDirectory(team_repo)
        self.booking_service = BookingService(
            booking_repo=booking_repo,
            schedule_repo=schedule_repo,
            directory=self.directory,
            clock=clock,
            unit_of_work=unit_of_work,
        )
        self.schedule_service = ScheduleService(
            booking_repo=booking_repo,
            schedule_repo=schedule_repo,
            ticket_repo=ticket_repo,
            directory=self.directory,
        )
        self.ticket_service = TicketService(ticket_repo)


def build_memory_container(
    clock: Optional[Callable[[], date]] = None,
    seed: bool = True,
) -> Container:
    booking_repo = BookingRepository()
    schedule_repo = ScheduleRepository()
    container = Container(
        team_repo=TeamRepository(),
        booking_repo=booking_repo,
        schedule_repo=schedule_repo,
        ticket_repo=TicketRepository(),
        unit_of_work=MemoryUnitOfWork(booking_repo, schedule_repo),
        clock=clock,
    )
    if seed:
        container.directory.seed_defaults(settings.TEAM_ACCESS_KEYS)
    return container


def build_sql_container(
    database_url: str,
    clock: Optional[Callable[[], date]] = None,
    seed: bool = True,
) -> Container:
    engine = build_engine(database_url)
    init_schema(engine)
    db = TransactionScope(engine)
    container = Container(
        team_repo=SqlTeamRepository(db),
        booking_repo=SqlBookingRepository(db),
        schedule_repo=SqlScheduleRepository(db),
        ticket_repo=SqlTicketRepository(db),
        unit_of_work=SqlUnitOfWork(db),
        clock=clock,
    )
    if seed:
        container.directory.seed_defaults(settings.TEAM_ACCESS_KEYS)
    return container


def build_container() -> Container:
    """Build the container selected by ``STORAGE_BACKEND``."""
    if settings.STORAGE_BACKEND == "sql":
        logger.info("Using SQL storage backend")
        return build_sql_container(settings.DATABASE_URL, seed=settings.SEED_TEAM_MEMBERS)
    logger.info("Using in-memory storage backend")
    return build_memory_container(seed=settings.SEED_TEAM_MEMBERS)


# ── FastAPI dependency functions ──
def get_container(request: Request) -> Container:
    return request.app.state.container


def get_directory(request: Request) -> TeamDirectory:
    return get_container(request).directory


def get_booking_service(request: Request) -> BookingService:
    return get_container(request).booking_service


def get_schedule_service(request: Request) -> ScheduleService:
    return get_container(request).schedule_service


def get_ticket_service(request: Request) -> TicketService:
    return get_container(request).ticket_service


def get_current_member(
    request: Request,
    x_access_key: Optional[str] = Header(default=None),
) -> TeamMember:
    """Resolve the ``X-Access-Key`` header to exactly one member or reject."""
    if not x_access_key:
        raise HTTPException(status_code=401, detail="Access key required")
    member = get_directory(request).validate_access_key(x_access_key)
    if member is None:
        raise HTTPException(status_code=401, detail="Invalid access key")
    return member
