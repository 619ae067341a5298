"""Date utilities for lifeboard.

Pure functions for date range calculations and formatting. All arithmetic
works on calendar dates; day differences use proleptic ordinals so no
time-of-day or daylight saving shift can leak into the result.
"""

import calendar
from collections.abc import Iterator
from datetime import date, datetime, timedelta

from lifeboard.domain.models import Month


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return since, until, label


def parse_month(month: Month) -> date:
    """Parse a YYYY-MM month into the date of its first day.

    Raises:
        ValueError: If the month is not in YYYY-MM format.
    """
    return datetime.strptime(month, "%Y-%m").date()


def month_of(day: date) -> Month:
    """Return the YYYY-MM month containing a day."""
    return Month(day.strftime("%Y-%m"))


def last_day_of_month(year: int, month: int) -> int:
    """Return the number of days in a month (28-31)."""
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping the day to the length of the month.

    A target day of 31 in February resolves to the 28th (or 29th).
    """
    return date(year, month, min(day, last_day_of_month(year, month)))


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping to the target month's length."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    return clamp_day(year, month + 1, day.day)


def month_bounds(month: Month) -> tuple[date, date]:
    """Return the first and last day of a month (both inclusive)."""
    first = parse_month(month)
    return first, first.replace(day=last_day_of_month(first.year, first.month))


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative if end is earlier)."""
    return end.toordinal() - start.toordinal()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day in [start, end] inclusive. Nothing if end < start."""
    for ordinal in range(start.toordinal(), end.toordinal() + 1):
        yield date.fromordinal(ordinal)


def calendar_weeks(month: Month) -> list[list[date | None]]:
    """Lay out a month as Sunday-first weeks.

    Days outside the month are None, so every week has exactly 7 slots.
    """
    first = parse_month(month)
    cal = calendar.Calendar(firstweekday=calendar.SUNDAY)
    weeks = cal.monthdatescalendar(first.year, first.month)
    return [[d if d.month == first.month else None for d in week] for week in weeks]


def ordinal_suffix(day: int) -> str:
    """Format a day of month with its English ordinal suffix (1st, 2nd, 15th)."""
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"
