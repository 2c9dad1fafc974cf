# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Schedule queries — monthly view, per-user status, export snapshot.
Read-only: nothing here mutates the ledger or the projection.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from duty_scheduler.core.config import settings
from duty_scheduler.models.domain import MonthlySchedule, UserBookingStatus
from duty_scheduler.services.dates import day_name, parse_date, weekend_dates
from duty_scheduler.services.directory import TeamDirectory
from duty_scheduler.services.resolver import resolve_month


class ScheduleService:
    """Aggregates ledger and projection state into client-facing views."""

    def __init__(
        self,
        booking_repo,
        schedule_repo,
        ticket_repo,
        directory: TeamDirectory,
        max_bookings_per_month: Optional[int] = None,
    ) -> None:
        self._bookings = booking_repo
        self._schedule = schedule_repo
        self._tickets = ticket_repo
        self._directory = directory
        self._limit = (
            settings.MAX_BOOKINGS_PER_MONTH
            if max_bookings_per_month is None
            else max_bookings_per_month
        )

    def get_monthly_schedule(self, month: str) -> MonthlySchedule:
        bookings = self._bookings.get_by_month(month)
        assignments = {e.date: e.assigned_to for e in self._schedule.get_by_month(month)}
        conflicts = resolve_month(bookings, self._directory.priority_map()).conflicts

        user_statuses: list[UserBookingStatus] = []
        for member in self._directory.list_members():
            held = sorted(
                (b for b in bookings if b.user_id == member.name),
                key=lambda b: b.date,
            )
            confirmed = sum(1 for b in held if b.is_confirmed)
            conflicted = sum(1 for b in held if b.is_conflicted)
            user_statuses.append(
                UserBookingStatus(
                    user_id=member.name,
                    confirmed_days=confirmed,
                    conflicted_days=conflicted,
                    remaining_days=max(0, self._limit - confirmed),
                    bookings=held,
                )
            )

        return MonthlySchedule(
            month=month,
            assignments=assignments,
            conflicts=conflicts,
            user_statuses=user_statuses,
        )

    def export_schedule(self, month: str) -> dict[str, Any]:
        """Point-in-time snapshot of a month. Access keys are never exported."""
        schedule = self.get_monthly_schedule(month)
        calendar_rows = [
            {
                "date": d,
                "dayOfWeek": day_name(parse_date(d)),
                "assignedTo": schedule.assignments.get(d),
            }
            for d in weekend_dates(month)
        ]
        tickets = {
            d: [t.model_dump(by_alias=True) for t in self._tickets.get_by_date(d)]
            for d in sorted(schedule.assignments)
        }
        return {
            "month": month,
            "teamMembers": [m.public() for m in self._directory.list_members()],
            "schedule": schedule.assignments,
            "conflicts": [c.model_dump(by_alias=True) for c in schedule.conflicts],
            "userStatuses": [s.model_dump(by_alias=True) for s in schedule.user_statuses],
            "calendar": calendar_rows,
            "tickets": tickets,
            "exportedAt": datetime.now(timezone.utc).isoformat(),
        }
