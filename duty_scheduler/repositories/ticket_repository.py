# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Duty ticket data access.
"""

import threading
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import delete, func, insert, select, update

from duty_scheduler.core.database import TransactionScope, tickets
from duty_scheduler.models.domain import Ticket


class TicketRepository:
    """In-memory ticket storage."""

    def __init__(self) -> None:
        self._store: dict[int, Ticket] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    # ── Read ──

    def get(self, ticket_id: int) -> Optional[Ticket]:
        ticket = self._store.get(ticket_id)
        return ticket.model_copy() if ticket else None

    def get_by_date(self, date: str) -> list[Ticket]:
        with self._lock:
            items = sorted(self._store.items())
        return [t.model_copy() for _, t in items if t.date == date]

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def create(
        self,
        date: str,
        ticket_ids: list[str],
        priority: str,
        status: str,
        notes: Optional[str],
        created_by: str,
    ) -> Ticket:
        with self._lock:
            ticket = Ticket(
                id=self._next_id,
                date=date,
                ticket_ids=list(ticket_ids),
                priority=priority,
                status=status,
                notes=notes,
                created_by=created_by,
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            self._next_id += 1
            self._store[ticket.id] = ticket
        return ticket.model_copy()

    def update(self, ticket_id: int, **changes: Any) -> Optional[Ticket]:
        changes["updated_at"] = datetime.now(timezone.utc).isoformat()
        with self._lock:
            ticket = self._store.get(ticket_id)
            if ticket is None:
                return None
            updated = ticket.model_copy(update=changes)
            self._store[ticket_id] = updated
        return updated.model_copy()

    def delete(self, ticket_id: int) -> Optional[Ticket]:
        with self._lock:
            ticket = self._store.pop(ticket_id, None)
        return ticket.model_copy() if ticket else None

    # ── Bulk / internal ──

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._next_id = 1


def _row_to_ticket(row) -> Ticket:
    return Ticket(
        id=row.id,
        date=row.date,
        ticket_ids=list(row.ticket_ids or []),
        priority=row.priority,
        status=row.status,
        notes=row.notes,
        created_by=row.created_by,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlTicketRepository:
    """Ticket storage backed by the ``tickets`` table."""

    def __init__(self, db: TransactionScope) -> None:
        self._db = db

    def get(self, ticket_id: int) -> Optional[Ticket]:
        with self._db.connect() as conn:
            row = conn.execute(select(tickets).where(tickets.c.id == ticket_id)).first()
        return _row_to_ticket(row) if row else None

    def get_by_date(self, date: str) -> list[Ticket]:
        with self._db.connect() as conn:
            rows = conn.execute(
                select(tickets).where(tickets.c.date == date).order_by(tickets.c.id)
            )
            return [_row_to_ticket(r) for r in rows]

    def count(self) -> int:
        with self._db.connect() as conn:
            return conn.execute(select(func.count()).select_from(tickets)).scalar_one()

    def create(
        self,
        date: str,
        ticket_ids: list[str],
        priority: str,
        status: str,
        notes: Optional[str],
        created_by: str,
    ) -> Ticket:
        created_at = datetime.now(timezone.utc).isoformat()
        with self._db.begin() as conn:
            result = conn.execute(
                insert(tickets).values(
                    date=date,
                    ticket_ids=list(ticket_ids),
                    priority=priority,
                    status=status,
                    notes=notes,
                    created_by=created_by,
                    created_at=created_at,
                )
            )
            ticket_id = result.inserted_primary_key[0]
        return Ticket(
            id=ticket_id,
            date=date,
            ticket_ids=list(ticket_ids),
            priority=priority,
            status=status,
            notes=notes,
            created_by=created_by,
            created_at=created_at,
        )

    def update(self, ticket_id: int, **changes: Any) -> Optional[Ticket]:
        changes["updated_at"] = datetime.now(timezone.utc).isoformat()
        with self._db.begin() as conn:
            result = conn.execute(
                update(tickets).where(tickets.c.id == ticket_id).values(**changes)
            )
            if result.rowcount == 0:
                return None
            row = conn.execute(select(tickets).where(tickets.c.id == ticket_id)).first()
        return _row_to_ticket(row)

    def delete(self, ticket_id: int) -> Optional[Ticket]:
        with self._db.begin() as conn:
            row = conn.execute(select(tickets).where(tickets.c.id == ticket_id)).first()
            if row is None:
                return None
            conn.execute(delete(tickets).where(tickets.c.id == ticket_id))
        return _row_to_ticket(row)

    def clear(self) -> None:
        with self._db.begin() as conn:
            conn.execute(delete(tickets))
