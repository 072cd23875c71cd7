"""
Month-by-month basic pay resolution for one side of the statement.

``resolve_month_basic`` is a pure step: the statement builder threads the
returned tracker into the next month's call.
"""
from datetime import date
from typing import NamedTuple, Optional

from pay_levels import next_basic_value
from proration import days_in_month, month_bounds
from schemas import SalaryComponentSide


class MonthBasic(NamedTuple):
    basic: float    # basic for this month, blended when a change falls mid-month
    tracker: float  # full value carried into the next month


def _month_key(day: date):
    return day.year, day.month


def fixed_pay_active(side: SalaryComponentSide, month: date) -> bool:
    if side.fixed_basic_pay is None:
        return False
    if side.fixed_basic_pay_from and _month_key(month) < _month_key(side.fixed_basic_pay_from):
        return False
    if side.fixed_basic_pay_to and _month_key(month) > _month_key(side.fixed_basic_pay_to):
        return False
    return True


def increment_trigger(side: SalaryComponentSide, month: date, period_start: date) -> Optional[date]:
    """Date in ``month`` on which the annual increment falls, if any."""
    if side.increment_date is not None:
        if _month_key(side.increment_date) == _month_key(month):
            return side.increment_date
        return None

    if month.month != side.increment_month:
        return None
    trigger = date(month.year, side.increment_month, 1)
    if trigger < period_start:
        return None
    return trigger


def _blend(before: float, after: float, change_day: date) -> float:
    """Monthly value when ``after`` takes effect on ``change_day``."""
    total_days = days_in_month(change_day)
    days_before = change_day.day - 1
    days_after = total_days - days_before
    return (before * days_before + after * days_after) / total_days


def resolve_month_basic(
    side: SalaryComponentSide,
    month: date,
    tracker: float,
    period_start: date,
    apply_refixation: bool = False,
) -> MonthBasic:
    if fixed_pay_active(side, month):
        return MonthBasic(side.fixed_basic_pay, side.fixed_basic_pay)

    basic = tracker
    trigger = increment_trigger(side, month, period_start)
    if trigger is not None:
        incremented = next_basic_value(side.cpc, side.pay_level, tracker)
        if trigger.day > 1:
            basic = _blend(tracker, incremented, trigger)
        else:
            basic = incremented
        tracker = incremented

    if apply_refixation and side.refixed_basic_pay is not None and side.refixed_basic_pay_date:
        refix_date = side.refixed_basic_pay_date
        month_start, month_end = month_bounds(month)
        if month_start <= refix_date <= month_end:
            basic = _blend(basic, side.refixed_basic_pay, refix_date)
            tracker = side.refixed_basic_pay

    return MonthBasic(basic, tracker)
