"""
Currency rounding shared by the increment and allowance calculations.
"""
from decimal import Decimal, ROUND_HALF_UP


# Helper to round half-up to whole currency units
rd = lambda x: int(Decimal(str(x or 0)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
