"""
Date-interval arithmetic for partial months.

All intervals are inclusive of both end dates.
"""
import calendar
from datetime import date
from typing import Iterator, Optional, Tuple

from dateutil.relativedelta import relativedelta


def days_in_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def month_bounds(day: date) -> Tuple[date, date]:
    """First and last day of the calendar month containing ``day``."""
    return day.replace(day=1), day.replace(day=days_in_month(day))


def overlap_days(start: date, end: date, other_start: date, other_end: date) -> int:
    lo = max(start, other_start)
    hi = min(end, other_end)
    if lo > hi:
        return 0
    return (hi - lo).days + 1


def proration_factor(
    month: date,
    period_start: date,
    period_end: date,
    window_start: Optional[date] = None,
    window_end: Optional[date] = None,
) -> float:
    """
    Fraction of ``month`` covered by the window clamped to the arrear period.

    An unspecified window side defaults to the period boundary, so calling
    without a window gives the plain month-to-period factor.
    """
    effective_from = max(window_start, period_start) if window_start else period_start
    effective_to = min(window_end, period_end) if window_end else period_end
    month_start, month_end = month_bounds(month)
    days = overlap_days(effective_from, effective_to, month_start, month_end)
    return days / days_in_month(month)


def iter_months(start: date, end: date) -> Iterator[date]:
    """First day of every calendar month from the one containing ``start`` through ``end``."""
    current = start.replace(day=1)
    while current <= end:
        yield current
        current += relativedelta(months=1)
