"""
Pay levels and pay matrix progression for the 6th and 7th CPC.

The 7th CPC matrix cells step by 3% rounded to the nearest hundred, starting
from each level's entry pay. 6th CPC levels are pay band / grade pay pairs and
carry no cells; their increment is 3% of basic.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, List, Optional, Tuple

from money import rd


SIXTH_CPC_LEVELS: Tuple[str, ...] = (
    "PB-1S/1300", "PB-1S/1400", "PB-1S/1600", "PB-1S/1650",
    "PB-1/1800", "PB-1/1900", "PB-1/2000", "PB-1/2400", "PB-1/2800",
    "PB-2/4200", "PB-2/4600", "PB-2/4800", "PB-2/5400",
    "PB-3/5400", "PB-3/6600", "PB-3/7600",
    "PB-4/8700", "PB-4/8900", "PB-4/10000",
    "HAG", "HAG+", "Apex", "Cabinet Secretary",
)

# (level, entry pay, number of cells)
_SEVENTH_CPC_ENTRY_PAY: Tuple[Tuple[str, int, int], ...] = (
    ("1", 18000, 40), ("2", 19900, 40), ("3", 21700, 40), ("4", 25500, 40),
    ("5", 29200, 40), ("6", 35400, 40), ("7", 44900, 40), ("8", 47600, 40),
    ("9", 53100, 40), ("10", 56100, 40), ("11", 67700, 39), ("12", 78800, 34),
    ("13", 123100, 23), ("13A", 131100, 22), ("14", 144200, 21), ("15", 182200, 8),
    ("16", 205400, 4), ("17", 225000, 1), ("18", 250000, 1),
)


def _round_to_hundred(value: Decimal) -> int:
    return int((value / 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)) * 100


def _build_cells(entry_pay: int, count: int) -> Tuple[int, ...]:
    cells = [entry_pay]
    while len(cells) < count:
        cells.append(_round_to_hundred(Decimal(cells[-1]) * Decimal("1.03")))
    return tuple(cells)


SEVENTH_CPC_MATRIX: Dict[str, Tuple[int, ...]] = {
    level: _build_cells(entry_pay, count) for level, entry_pay, count in _SEVENTH_CPC_ENTRY_PAY
}

SEVENTH_CPC_LEVELS: Tuple[str, ...] = tuple(SEVENTH_CPC_MATRIX)

PAY_LEVELS: Dict[str, Tuple[str, ...]] = {
    "6th": SIXTH_CPC_LEVELS,
    "7th": SEVENTH_CPC_LEVELS,
}

PROGRESSIONS: Dict[str, Dict[str, Tuple[int, ...]]] = {
    "6th": {},
    "7th": SEVENTH_CPC_MATRIX,
}


def _build_level_order() -> Dict[str, int]:
    # 6th CPC levels first, then 7th; a key seen twice keeps its first position
    order: Dict[str, int] = {}
    for position, level in enumerate(SIXTH_CPC_LEVELS + SEVENTH_CPC_LEVELS):
        order.setdefault(level, position)
    return order


PAY_LEVEL_ORDER: Dict[str, int] = _build_level_order()


def pay_level_ordinal(level: Optional[str]) -> Optional[int]:
    if not level:
        return None
    return PAY_LEVEL_ORDER.get(level.strip())


def pay_level_label(cpc: str, level: str) -> str:
    return f"Level {level}" if cpc == "7th" else level


def find_progression(cpc: str, pay_level: str) -> Optional[Tuple[int, ...]]:
    """Cells for ``pay_level``, trying each part of a composite key like ``13/13A``."""
    table = PROGRESSIONS.get(cpc, {})
    key = (pay_level or "").strip()
    if key in table:
        return table[key]
    for part in key.split("/"):
        if part.strip() in table:
            return table[part.strip()]
    return None


def next_cell_value(cpc: str, pay_level: str, current: float) -> float:
    cells = find_progression(cpc, pay_level)
    if not cells:
        return current
    try:
        position = cells.index(current)
    except ValueError:
        return current
    if position + 1 >= len(cells):
        return current
    return cells[position + 1]


def three_percent_increment(cpc: str, pay_level: str, current: float) -> float:
    return rd(current * 1.03)


INCREMENT_STRATEGIES: Dict[str, Callable[[str, str, float], float]] = {
    "6th": three_percent_increment,
    "7th": next_cell_value,
}


def next_basic_value(cpc: str, pay_level: str, current: float) -> float:
    """Basic pay after one annual increment; unchanged when it cannot be resolved."""
    strategy = INCREMENT_STRATEGIES.get(cpc)
    if strategy is None:
        return current
    return strategy(cpc, pay_level, current)


def level_options(cpc: str) -> List[Tuple[str, str]]:
    return [(level, pay_level_label(cpc, level)) for level in PAY_LEVELS.get(cpc, ())]
