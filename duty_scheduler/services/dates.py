# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Calendar helpers — pure computation, no side effects.
Dates travel as ``YYYY-MM-DD`` strings and months as ``YYYY-MM``.
"""

import calendar
import re
from datetime import date, datetime

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")

DAY_NAMES: tuple[str, ...] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


def parse_date(value: str) -> date:
    """Parse ``YYYY-MM-DD``. Raises ValueError on malformed or impossible dates."""
    if not DATE_PATTERN.match(value):
        raise ValueError(f"Invalid date '{value}'. Use YYYY-MM-DD")
    return datetime.strptime(value, "%Y-%m-%d").date()


def is_valid_date(value: str) -> bool:
    try:
        parse_date(value)
    except ValueError:
        return False
    return True


def is_valid_month(value: str) -> bool:
    if not MONTH_PATTERN.match(value):
        return False
    return 1 <= int(value[5:7]) <= 12


def month_of(value: str) -> str:
    return value[:7]


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def day_name(day: date) -> str:
    return DAY_NAMES[day.weekday()]


def weekend_dates(month: str) -> list[str]:
    """Every Saturday and Sunday of ``month``, ascending."""
    year, mon = int(month[:4]), int(month[5:7])
    _, days_in_month = calendar.monthrange(year, mon)
    return [
        date(year, mon, d).isoformat()
        for d in range(1, days_in_month + 1)
        if is_weekend(date(year, mon, d))
    ]
