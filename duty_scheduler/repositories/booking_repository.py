# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Booking ledger data access.
Encapsulates all read/write operations on bookings.
NO business rules here — pure CRUD. Reads return bookings in id order,
which is insertion order. A user holds at most one booking per date.
"""

import threading
from typing import Any, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError

from duty_scheduler.core.database import TransactionScope, bookings
from duty_scheduler.core.errors import DuplicateBooking
from duty_scheduler.models.domain import Booking


class BookingRepository:
    """In-memory booking storage."""

    def __init__(self) -> None:
        self._store: dict[int, Booking] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    # ── Read ──

    def get(self, booking_id: int) -> Optional[Booking]:
        booking = self._store.get(booking_id)
        return booking.model_copy() if booking else None

    def get_by_month(self, month: str) -> list[Booking]:
        with self._lock:
            items = sorted(self._store.items())
        return [b.model_copy() for _, b in items if b.month == month]

    def get_by_user(self, user_id: str, month: str) -> list[Booking]:
        return [b for b in self.get_by_month(month) if b.user_id == user_id]

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def create(self, user_id: str, date: str, month: str) -> Booking:
        with self._lock:
            if any(b.user_id == user_id and b.date == date for b in self._store.values()):
                raise DuplicateBooking(f"User already booked this day ({date})")
            booking = Booking(id=self._next_id, user_id=user_id, date=date, month=month)
            self._next_id += 1
            self._store[booking.id] = booking
        return booking.model_copy()

    def update(self, booking_id: int, **changes: Any) -> Booking:
        with self._lock:
            booking = self._store.get(booking_id)
            if booking is None:
                raise KeyError(f"Booking {booking_id} not found")
            updated = booking.model_copy(update=changes)
            self._store[booking_id] = updated
        return updated.model_copy()

    def delete(self, booking_id: int) -> Optional[Booking]:
        with self._lock:
            booking = self._store.pop(booking_id, None)
        return booking.model_copy() if booking else None

    # ── Bulk / internal ──

    def snapshot_month(self, month: str) -> list[Booking]:
        return self.get_by_month(month)

    def restore_month(self, month: str, snapshot: list[Booking]) -> None:
        """Put ``month`` back to ``snapshot``; ids are not reissued."""
        with self._lock:
            for booking_id in [i for i, b in self._store.items() if b.month == month]:
                del self._store[booking_id]
            for booking in snapshot:
                self._store[booking.id] = booking.model_copy()

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._next_id = 1


def _row_to_booking(row) -> Booking:
    return Booking(
        id=row.id,
        user_id=row.user_id,
        date=row.date,
        month=row.month,
        is_confirmed=bool(row.is_confirmed),
        is_conflicted=bool(row.is_conflicted),
    )


class SqlBookingRepository:
    """Booking storage backed by the ``bookings`` table."""

    def __init__(self, db: TransactionScope) -> None:
        self._db = db

    # ── Read ──

    def get(self, booking_id: int) -> Optional[Booking]:
        with self._db.connect() as conn:
            row = conn.execute(select(bookings).where(bookings.c.id == booking_id)).first()
        return _row_to_booking(row) if row else None

    def get_by_month(self, month: str) -> list[Booking]:
        with self._db.connect() as conn:
            rows = conn.execute(
                select(bookings).where(bookings.c.month == month).order_by(bookings.c.id)
            )
            return [_row_to_booking(r) for r in rows]

    def get_by_user(self, user_id: str, month: str) -> list[Booking]:
        with self._db.connect() as conn:
            rows = conn.execute(
                select(bookings)
                .where(bookings.c.month == month, bookings.c.user_id == user_id)
                .order_by(bookings.c.id)
            )
            return [_row_to_booking(r) for r in rows]

    def count(self) -> int:
        with self._db.connect() as conn:
            return conn.execute(select(func.count()).select_from(bookings)).scalar_one()

    # ── Write ──

    def create(self, user_id: str, date: str, month: str) -> Booking:
        try:
            with self._db.begin() as conn:
                result = conn.execute(
                    insert(bookings).values(
                        user_id=user_id,
                        date=date,
                        month=month,
                        is_confirmed=False,
                        is_conflicted=False,
                    )
                )
                booking_id = result.inserted_primary_key[0]
        except IntegrityError as exc:
            raise DuplicateBooking(f"User already booked this day ({date})") from exc
        return Booking(id=booking_id, user_id=user_id, date=date, month=month)

    def update(self, booking_id: int, **changes: Any) -> Booking:
        with self._db.begin() as conn:
            result = conn.execute(
                update(bookings).where(bookings.c.id == booking_id).values(**changes)
            )
            if result.rowcount == 0:
                raise KeyError(f"Booking {booking_id} not found")
            row = conn.execute(select(bookings).where(bookings.c.id == booking_id)).first()
        return _row_to_booking(row)

    def delete(self, booking_id: int) -> Optional[Booking]:
        with self._db.begin() as conn:
            row = conn.execute(select(bookings).where(bookings.c.id == booking_id)).first()
            if row is None:
                return None
            conn.execute(delete(bookings).where(bookings.c.id == booking_id))
        return _row_to_booking(row)

    def clear(self) -> None:
        with self._db.begin() as conn:
            conn.execute(delete(bookings))
