# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain errors — every rule violation the scheduler can report to a user.
Controllers translate these into HTTP responses; services only raise them.
"""


class SchedulingError(Exception):
    """Base class for recoverable, user-facing scheduling failures."""

    default_message = "Scheduling request rejected"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidDateKind(SchedulingError):
    default_message = "Date is not a weekend day. Only Saturdays and Sundays can be booked"


class PastDateBooking(SchedulingError):
    default_message = "Cannot book a past date"


class BookingLimitExceeded(SchedulingError):
    default_message = "User already has 2 bookings this month"


class DuplicateBooking(SchedulingError):
    default_message = "User already booked this day"


class UnknownMember(SchedulingError):
    default_message = "Unknown team member"


class BookingNotFound(SchedulingError):
    default_message = "Booking not found"


class TicketNotFound(SchedulingError):
    default_message = "Ticket not found"
