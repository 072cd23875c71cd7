"""
Allowance amounts for one side of the statement in one month.

Failures to resolve a rate are not errors: the allowance simply contributes
nothing for that month.
"""
from datetime import date
from typing import Optional, Tuple

from money import rd
from proration import proration_factor
from rates import select_rate
from schemas import AllowanceConfig, ComponentBreakdown, RateEntry, RateTables, SalaryComponentSide


def fixed_rate_active(cfg: AllowanceConfig, month: date, period_start: date, period_end: date) -> bool:
    if cfg.fixed_rate is None:
        return False
    return proration_factor(month, period_start, period_end, cfg.fixed_rate_from, cfg.fixed_rate_to) > 0


def window_factor(cfg, month: date, period_start: date, period_end: date) -> float:
    return proration_factor(month, period_start, period_end, cfg.from_date, cfg.to_date)


def resolve_rate(
    cfg: AllowanceConfig,
    table,
    month: date,
    on: date,
    period_start: date,
    period_end: date,
    **criteria,
) -> Tuple[float, Optional[RateEntry]]:
    """Fixed override when active this month, otherwise the rate table entry."""
    if fixed_rate_active(cfg, month, period_start, period_end):
        return cfg.fixed_rate, None
    entry = select_rate(table, on, **criteria)
    if entry is None:
        return 0.0, None
    return entry.rate, entry


def effective_da_rate(
    cfg: AllowanceConfig, table, month: date, on: date, period_start: date, period_end: date
) -> Optional[float]:
    """DA rate in force for the month, or None when neither an override nor a table entry applies."""
    rate, entry = resolve_rate(cfg, table, month, on, period_start, period_end)
    if entry is None and not fixed_rate_active(cfg, month, period_start, period_end):
        return None
    return rate


def compute_breakdown(
    side: SalaryComponentSide,
    month: date,
    basic_for_month: float,
    tracker_basic: float,
    period_start: date,
    period_end: date,
    rates: RateTables,
) -> ComponentBreakdown:
    month_factor = proration_factor(month, period_start, period_end)
    # Rates are looked up on the first day of the month that lies in the period
    on = max(month, period_start)

    npa = 0.0
    if side.npa.applicable and window_factor(side.npa, month, period_start, period_end) > 0:
        npa_rate, _ = resolve_rate(side.npa, rates.npa, month, on, period_start, period_end)
        npa = basic_for_month * npa_rate / 100 * month_factor

    # HRA slabs and TA follow the DA rate in force even when DA itself is not drawn
    da_rate = effective_da_rate(side.da, rates.da, month, on, period_start, period_end)

    da = 0.0
    if side.da.applicable and da_rate is not None and window_factor(side.da, month, period_start, period_end) > 0:
        da = (basic_for_month * month_factor + npa) * da_rate / 100

    hra = 0.0
    hra_factor = window_factor(side.hra, month, period_start, period_end)
    if side.hra.applicable and hra_factor > 0:
        hra_rate, entry = resolve_rate(
            side.hra, rates.hra, month, on, period_start, period_end, da_rate=da_rate
        )
        full_month_hra = basic_for_month * hra_rate / 100
        if entry is not None and entry.min_amount and full_month_hra < entry.min_amount:
            full_month_hra = entry.min_amount
        hra = full_month_hra * hra_factor

    ta = 0.0
    ta_factor = window_factor(side.ta, month, period_start, period_end)
    if side.ta.applicable and ta_factor > 0:
        ta_base, _ = resolve_rate(
            side.ta, rates.ta, month, on, period_start, period_end,
            basic_pay=tracker_basic, pay_level=side.pay_level,
        )
        full_month_ta = ta_base * (1 + (da_rate or 0) / 100)
        if side.ta.double_ta:
            full_month_ta *= 2
        ta = full_month_ta * ta_factor

    other = 0.0
    if side.other.amount > 0:
        other = side.other.amount * window_factor(side.other, month, period_start, period_end)

    parts = {
        "basic": rd(basic_for_month * month_factor),
        "da": rd(da),
        "hra": rd(hra),
        "npa": rd(npa),
        "ta": rd(ta),
        "other": rd(other),
    }
    return ComponentBreakdown(**parts, total=sum(parts.values()))
