# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Conflict resolution — pure computation, no side effects.
"""

import sys
from collections import defaultdict
from dataclasses import dataclass, field

from duty_scheduler.models.domain import Booking, ConflictResolution

# Members missing from the directory rank after every known member.
UNRANKED = sys.maxsize


@dataclass
class MonthResolution:
    """Outcome of one full-month resolver pass."""
    flags: dict[int, tuple[bool, bool]] = field(default_factory=dict)
    assignments: dict[str, str] = field(default_factory=dict)
    conflicts: list[ConflictResolution] = field(default_factory=list)


def resolve_month(
    bookings: list[Booking],
    priorities: dict[str, int],
) -> MonthResolution:
    """
    Decide a single winner per date by member priority.

    ``flags`` maps booking id -> (is_confirmed, is_conflicted) for every
    input booking. Bookings on the same date are ranked by priority; equal
    priorities keep insertion (id) order. Dates are visited in ascending
    order so the output is deterministic for a given input.
    Pure function — no I/O, no metrics, no logging.
    """
    by_date: dict[str, list[Booking]] = defaultdict(list)
    for booking in sorted(bookings, key=lambda b: b.id):
        by_date[booking.date].append(booking)

    result = MonthResolution()
    for date in sorted(by_date):
        ranked = sorted(
            by_date[date], key=lambda b: priorities.get(b.user_id, UNRANKED)
        )
        winner, losers = ranked[0], ranked[1:]

        result.flags[winner.id] = (True, False)
        for loser in losers:
            result.flags[loser.id] = (False, True)
        result.assignments[date] = winner.user_id

        if losers:
            result.conflicts.append(
                ConflictResolution(
                    date=date,
                    winner=winner.user_id,
                    losers=[loser.user_id for loser in losers],
                )
            )
    return result
