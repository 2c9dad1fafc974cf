# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Final schedule projection data access.
One entry per date; the projection for a month is replaced in bulk.
"""

import threading
from typing import Optional

from sqlalchemy import delete, func, insert, select

from duty_scheduler.core.database import TransactionScope, final_schedule
from duty_scheduler.models.domain import FinalScheduleEntry


class ScheduleRepository:
    """In-memory final schedule storage, keyed by date."""

    def __init__(self) -> None:
        self._store: dict[str, FinalScheduleEntry] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    # ── Read ──

    def get_by_month(self, month: str) -> list[FinalScheduleEntry]:
        with self._lock:
            items = sorted(self._store.items())
        return [e.model_copy() for _, e in items if e.month == month]

    def get_by_date(self, date: str) -> Optional[FinalScheduleEntry]:
        entry = self._store.get(date)
        return entry.model_copy() if entry else None

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def save(self, date: str, assigned_to: str, month: str) -> FinalScheduleEntry:
        with self._lock:
            entry = self._insert(date, assigned_to, month)
        return entry.model_copy()

    def delete(self, date: str) -> Optional[FinalScheduleEntry]:
        with self._lock:
            entry = self._store.pop(date, None)
        return entry.model_copy() if entry else None

    def replace_month(self, month: str, assignments: dict[str, str]) -> None:
        """Drop every entry of ``month`` and recreate it from ``assignments``."""
        with self._lock:
            self._drop_month(month)
            for date, user_id in sorted(assignments.items()):
                self._insert(date, user_id, month)

    # ── Bulk / internal ──

    def snapshot_month(self, month: str) -> list[FinalScheduleEntry]:
        return self.get_by_month(month)

    def restore_month(self, month: str, snapshot: list[FinalScheduleEntry]) -> None:
        with self._lock:
            self._drop_month(month)
            for entry in snapshot:
                self._store[entry.date] = entry.model_copy()

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._next_id = 1

    def _insert(self, date: str, assigned_to: str, month: str) -> FinalScheduleEntry:
        # Caller holds self._lock.
        entry = FinalScheduleEntry(
            id=self._next_id, date=date, assigned_to=assigned_to, month=month
        )
        self._next_id += 1
        self._store[date] = entry
        return entry

    def _drop_month(self, month: str) -> None:
        for date in [d for d, e in self._store.items() if e.month == month]:
            del self._store[date]


def _row_to_entry(row) -> FinalScheduleEntry:
    return FinalScheduleEntry(
        id=row.id, date=row.date, assigned_to=row.assigned_to, month=row.month
    )


class SqlScheduleRepository:
    """Final schedule storage backed by the ``final_schedule`` table."""

    def __init__(self, db: TransactionScope) -> None:
        self._db = db

    def get_by_month(self, month: str) -> list[FinalScheduleEntry]:
        with self._db.connect() as conn:
            rows = conn.execute(
                select(final_schedule)
                .where(final_schedule.c.month == month)
                .order_by(final_schedule.c.date)
            )
            return [_row_to_entry(r) for r in rows]

    def get_by_date(self, date: str) -> Optional[FinalScheduleEntry]:
        with self._db.connect() as conn:
            row = conn.execute(
                select(final_schedule).where(final_schedule.c.date == date)
            ).first()
        return _row_to_entry(row) if row else None

    def count(self) -> int:
        with self._db.connect() as conn:
            return conn.execute(select(func.count()).select_from(final_schedule)).scalar_one()

    def save(self, date: str, assigned_to: str, month: str) -> FinalScheduleEntry:
        with self._db.begin() as conn:
            conn.execute(delete(final_schedule).where(final_schedule.c.date == date))
            result = conn.execute(
                insert(final_schedule).values(date=date, assigned_to=assigned_to, month=month)
            )
            entry_id = result.inserted_primary_key[0]
        return FinalScheduleEntry(id=entry_id, date=date, assigned_to=assigned_to, month=month)

    def delete(self, date: str) -> Optional[FinalScheduleEntry]:
        with self._db.begin() as conn:
            row = conn.execute(
                select(final_schedule).where(final_schedule.c.date == date)
            ).first()
            if row is None:
                return None
            conn.execute(delete(final_schedule).where(final_schedule.c.date == date))
        return _row_to_entry(row)

    def replace_month(self, month: str, assignments: dict[str, str]) -> None:
        """Drop every entry of ``month`` and recreate it in one transaction."""
        with self._db.begin() as conn:
            conn.execute(delete(final_schedule).where(final_schedule.c.month == month))
            if assignments:
                conn.execute(
                    insert(final_schedule),
                    [
                        {"date": date, "assigned_to": user_id, "month": month}
                        for date, user_id in sorted(assignments.items())
                    ],
                )

    def clear(self) -> None:
        with self._db.begin() as conn:
            conn.execute(delete(final_schedule))
