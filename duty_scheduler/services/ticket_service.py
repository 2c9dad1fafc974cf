# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Duty ticket log — incidents worked on a duty date.
"""

from typing import Any, Optional

from duty_scheduler.core.errors import TicketNotFound
from duty_scheduler.core.logging import get_logger
from duty_scheduler.metrics.prometheus import TICKETS_CREATED
from duty_scheduler.models.domain import TICKET_PRIORITIES, TICKET_STATUSES, Ticket

logger = get_logger(__name__)


def normalise_ticket_ids(ticket_ids: list[str]) -> list[str]:
    return [t.strip() for t in ticket_ids if t and t.strip()]


class TicketService:
    """Business logic for the duty ticket log."""

    def __init__(self, ticket_repo) -> None:
        self._tickets = ticket_repo

    def list_tickets(self, date: str) -> list[Ticket]:
        return self._tickets.get_by_date(date)

    def create_ticket(
        self,
        date: str,
        ticket_ids: list[str],
        created_by: str,
        priority: str = "P3",
        status: str = "open",
        notes: Optional[str] = None,
    ) -> Ticket:
        """Log a ticket. Raises ValueError on bad input."""
        ids = normalise_ticket_ids(ticket_ids)
        if not ids:
            raise ValueError("At least one ticket ID is required")
        self._check_enums(priority, status)

        ticket = self._tickets.create(
            date=date,
            ticket_ids=ids,
            priority=priority,
            status=status,
            notes=notes,
            created_by=created_by,
        )
        TICKETS_CREATED.labels(priority=priority).inc()
        logger.info(
            "Ticket created: id=%d, date=%s, tickets=%s, by=%s",
            ticket.id, date, ",".join(ids), created_by,
        )
        return ticket

    def update_ticket(self, ticket_id: int, changes: dict[str, Any]) -> Ticket:
        """Apply a partial update. Raises TicketNotFound / ValueError."""
        changes = {k: v for k, v in changes.items() if v is not None}
        if "ticket_ids" in changes:
            changes["ticket_ids"] = normalise_ticket_ids(changes["ticket_ids"])
            if not changes["ticket_ids"]:
                raise ValueError("At least one ticket ID is required")
        self._check_enums(changes.get("priority"), changes.get("status"))

        ticket = self._tickets.update(ticket_id, **changes)
        if ticket is None:
            raise TicketNotFound(f"Ticket {ticket_id} not found")
        logger.info("Ticket updated: id=%d, fields=%s", ticket_id, sorted(changes))
        return ticket

    def delete_ticket(self, ticket_id: int) -> dict[str, Any]:
        if self._tickets.delete(ticket_id) is None:
            raise TicketNotFound(f"Ticket {ticket_id} not found")
        logger.info("Ticket deleted: id=%d", ticket_id)
        return {"success": True}

    @staticmethod
    def _check_enums(priority: Optional[str], status: Optional[str]) -> None:
        if priority is not None and priority not in TICKET_PRIORITIES:
            raise ValueError(f"priority must be one of {TICKET_PRIORITIES}")
        if status is not None and status not in TICKET_STATUSES:
            raise ValueError(f"status must be one of {TICKET_STATUSES}")
