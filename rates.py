"""
Rate table lookup shared by every allowance.

Each allowance passes only the dimensions that matter to it: DA and NPA look up
by date alone, HRA adds the concurrent DA rate, TA adds basic pay and pay level.
"""
from datetime import date
from typing import Optional, Sequence

from pay_levels import pay_level_ordinal
from schemas import RateEntry


def _date_matches(entry: RateEntry, on: date) -> bool:
    if on < entry.from_date:
        return False
    return entry.to_date is None or on <= entry.to_date


def _da_band_matches(entry: RateEntry, da_rate: Optional[float]) -> bool:
    if da_rate is None or entry.da_rate_from is None or entry.da_rate_to is None:
        return True
    return entry.da_rate_from <= da_rate <= entry.da_rate_to


def _basic_matches(entry: RateEntry, basic_pay: Optional[float]) -> bool:
    if basic_pay is None:
        return True
    # A zero/empty range means the entry is not restricted by basic pay
    if not (entry.basic_from and entry.basic_to and entry.basic_from > 0 and entry.basic_to > 0):
        return True
    return entry.basic_from <= basic_pay <= entry.basic_to


def _pay_level_matches(entry: RateEntry, pay_level: Optional[str]) -> bool:
    if not pay_level or not entry.pay_level_from or not entry.pay_level_to:
        return True
    lo = pay_level_ordinal(entry.pay_level_from)
    hi = pay_level_ordinal(entry.pay_level_to)
    level = pay_level_ordinal(pay_level)
    if lo is None or hi is None or level is None:
        return False
    return lo <= level <= hi


def select_rate(
    table: Sequence[RateEntry],
    on: date,
    basic_pay: Optional[float] = None,
    pay_level: Optional[str] = None,
    da_rate: Optional[float] = None,
) -> Optional[RateEntry]:
    """Most recent (and, with ``da_rate``, most specific DA band) entry applicable on ``on``."""
    candidates = [
        entry for entry in table
        if _date_matches(entry, on)
        and _da_band_matches(entry, da_rate)
        and _basic_matches(entry, basic_pay)
        and _pay_level_matches(entry, pay_level)
    ]
    if not candidates:
        return None

    candidates.sort(key=lambda e: e.from_date, reverse=True)
    if da_rate is not None:
        # Stable: entries in the same DA band keep the most-recent-first order
        candidates.sort(
            key=lambda e: e.da_rate_from if e.da_rate_from is not None else float("-inf"),
            reverse=True,
        )
    return candidates[0]
