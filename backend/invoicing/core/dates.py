"""Calendar arithmetic shared by billing periods and phase durations."""

import calendar as cal
from datetime import datetime


def add_months(dt: datetime, months: int) -> datetime:
    """Add months to a datetime, clamping to last day of month."""
    month = dt.month - 1 + months
    year = dt.year + month // 12
    month = month % 12 + 1
    max_day = cal.monthrange(year, month)[1]
    day = min(dt.day, max_day)
    return dt.replace(year=year, month=month, day=day)


def with_day_of_month(dt: datetime, day: int) -> datetime:
    """Move ``dt`` to ``day`` within its own month, clamped to the month's end."""
    max_day = cal.monthrange(dt.year, dt.month)[1]
    return dt.replace(day=min(day, max_day))


def add_months_on_day(dt: datetime, months: int, day: int) -> datetime:
    """Add months, then pin the result to ``day`` (clamped).

    Unlike chaining :func:`add_months`, this does not lose a 29th-31st anchor
    after passing through a shorter month.
    """
    return with_day_of_month(add_months(dt.replace(day=1), months), day)


def months_between(start: datetime, end: datetime) -> int:
    """Whole months from ``start`` to ``end``; negative when ``end`` is earlier."""
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if months > 0 and add_months(start, months) > end:
        months -= 1
    elif months < 0 and add_months(start, months) < end:
        months += 1
    return months


def days_between(start: datetime, end: datetime) -> int:
    """Whole calendar days from ``start`` to ``end``."""
    return (end.date() - start.date()).days
