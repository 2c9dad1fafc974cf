# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Booking ledger — request / cancel weekend duty days.
Every mutation re-resolves the whole month and rewrites its projection.
"""

import threading
import time
from datetime import date
from typing import Any, Callable, Optional

from duty_scheduler.core.config import settings
from duty_scheduler.core.errors import (
    BookingLimitExceeded,
    BookingNotFound,
    DuplicateBooking,
    InvalidDateKind,
    PastDateBooking,
    SchedulingError,
    UnknownMember,
)
from duty_scheduler.core.logging import get_logger
from duty_scheduler.metrics.prometheus import (
    ASSIGNED_DATES,
    BOOKINGS_CANCELLED,
    BOOKINGS_REQUESTED,
    CONFLICTS_DETECTED,
    RESOLVER_DURATION,
    RESOLVER_RUNS,
)
from duty_scheduler.models.domain import Booking, ConflictResolution
from duty_scheduler.repositories.unit_of_work import MemoryUnitOfWork
from duty_scheduler.services.dates import is_weekend, month_of, parse_date
from duty_scheduler.services.directory import TeamDirectory
from duty_scheduler.services.resolver import resolve_month

logger = get_logger(__name__)


class BookingService:
    """Business logic for the booking ledger."""

    def __init__(
        self,
        booking_repo,
        schedule_repo,
        directory: TeamDirectory,
        clock: Optional[Callable[[], date]] = None,
        max_bookings_per_month: Optional[int] = None,
        unit_of_work=None,
    ) -> None:
        self._bookings = booking_repo
        self._schedule = schedule_repo
        self._uow = unit_of_work or MemoryUnitOfWork(booking_repo, schedule_repo)
        self._directory = directory
        self._clock = clock or date.today
        self._limit = (
            settings.MAX_BOOKINGS_PER_MONTH
            if max_bookings_per_month is None
            else max_bookings_per_month
        )
        self._month_locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    # ── Commands ──

    def request_booking(self, user_id: str, date: str) -> dict[str, Any]:
        """
        Book ``date`` for ``user_id`` and re-resolve the month.
        Raises a SchedulingError subclass. On any failure the ledger and the
        projection are left as they were.
        """
        try:
            result = self._request_booking(user_id, date)
        except SchedulingError as exc:
            BOOKINGS_REQUESTED.labels(outcome=type(exc).__name__).inc()
            logger.info("Booking rejected: user=%s, date=%s, reason=%s", user_id, date, exc)
            raise
        BOOKINGS_REQUESTED.labels(outcome="accepted").inc()
        return result

    def _request_booking(self, user_id: str, date: str) -> dict[str, Any]:
        try:
            day = parse_date(date)
        except ValueError as exc:
            raise InvalidDateKind(str(exc)) from exc
        if not is_weekend(day):
            raise InvalidDateKind(
                f"{date} is not a weekend day. Only Saturdays and Sundays can be booked"
            )
        if day < self._clock():
            raise PastDateBooking(f"Cannot book a past date ({date})")
        if self._directory.find_by_name(user_id) is None:
            raise UnknownMember(f"Unknown team member '{user_id}'")

        month = month_of(date)
        with self._lock_for(month), self._uow.begin(month):
            held = self._bookings.get_by_user(user_id, month)
            if len(held) >= self._limit:
                raise BookingLimitExceeded(
                    f"User already has {self._limit} bookings this month"
                )
            if any(b.date == date for b in held):
                raise DuplicateBooking(f"User already booked this day ({date})")

            booking = self._bookings.create(user_id=user_id, date=date, month=month)
            conflicts = self._resolve(month)
        logger.info(
            "Booking created: id=%d, user=%s, date=%s",
            booking.id, user_id, date,
            extra={"month": month, "user_id": user_id, "booking_id": booking.id},
        )
        return {"success": True, "conflicts": conflicts}

    def cancel_booking(self, user_id: str, date: str) -> dict[str, Any]:
        """Remove a member's booking and re-resolve. Raises BookingNotFound."""
        month = month_of(date)
        with self._lock_for(month), self._uow.begin(month):
            booking = next(
                (b for b in self._bookings.get_by_user(user_id, month) if b.date == date),
                None,
            )
            if booking is None:
                raise BookingNotFound(f"Booking not found for {user_id} on {date}")

            self._bookings.delete(booking.id)
            if booking.is_confirmed:
                self._schedule.delete(date)
            self._resolve(month)

        BOOKINGS_CANCELLED.inc()
        logger.info(
            "Booking cancelled: user=%s, date=%s", user_id, date,
            extra={"month": month, "user_id": user_id, "booking_id": booking.id},
        )
        return {"success": True}

    def resolve_conflicts(self, month: str) -> list[ConflictResolution]:
        """Run a full-month resolution on demand."""
        with self._lock_for(month), self._uow.begin(month):
            return self._resolve(month)

    # ── Queries ──

    def list_bookings(self, month: str) -> list[Booking]:
        return self._bookings.get_by_month(month)

    def list_user_bookings(self, user_id: str, month: str) -> list[Booking]:
        return self._bookings.get_by_user(user_id, month)

    # ── Internal ──

    def _lock_for(self, month: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._month_locks.get(month)
            if lock is None:
                lock = self._month_locks[month] = threading.Lock()
            return lock

    def _resolve(self, month: str) -> list[ConflictResolution]:
        """Apply a resolver pass to the ledger and projection. Caller holds the month lock."""
        start = time.perf_counter()
        bookings = self._bookings.get_by_month(month)
        result = resolve_month(bookings, self._directory.priority_map())

        for booking in bookings:
            confirmed, conflicted = result.flags[booking.id]
            if (booking.is_confirmed, booking.is_conflicted) != (confirmed, conflicted):
                self._bookings.update(
                    booking.id, is_confirmed=confirmed, is_conflicted=conflicted
                )

        current = {e.date: e.assigned_to for e in self._schedule.get_by_month(month)}
        if current != result.assignments:
            self._schedule.replace_month(month, result.assignments)

        RESOLVER_RUNS.inc()
        CONFLICTS_DETECTED.inc(len(result.conflicts))
        RESOLVER_DURATION.observe(time.perf_counter() - start)
        ASSIGNED_DATES.set(self._schedule.count())
        logger.info(
            "Month resolved: month=%s, bookings=%d, assigned=%d, conflicts=%d",
            month, len(bookings), len(result.assignments), len(result.conflicts),
            extra={"month": month},
        )
        return result.conflicts
