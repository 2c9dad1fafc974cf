# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Units of work for a month mutation.
The ledger write, the flag updates and the projection rewrite either all
land or none do.
"""

from contextlib import contextmanager
from typing import Iterator

from duty_scheduler.core.database import TransactionScope


class MemoryUnitOfWork:
    """Restores the month's bookings and projection if the body raises."""

    def __init__(self, booking_repo, schedule_repo) -> None:
        self._bookings = booking_repo
        self._schedule = schedule_repo

    @contextmanager
    def begin(self, month: str) -> Iterator[None]:
        saved_bookings = self._bookings.snapshot_month(month)
        saved_schedule = self._schedule.snapshot_month(month)
        try:
            yield
        except BaseException:
            self._bookings.restore_month(month, saved_bookings)
            self._schedule.restore_month(month, saved_schedule)
            raise


class SqlUnitOfWork:
    """Runs every repository call in the body on one database transaction."""

    def __init__(self, db: TransactionScope) -> None:
        self._db = db

    @contextmanager
    def begin(self, month: str) -> Iterator[None]:
        with self._db.transaction():
            yield
