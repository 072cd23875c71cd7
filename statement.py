"""
Arrear statement builder.

Walks the calendar months of the arrear period, advancing the drawn and due
basic pay trackers and computing both sides' allowances for each month.
"""
import logging
from datetime import date

from allowances import compute_breakdown
from basic_pay import resolve_month_basic
from proration import month_bounds, overlap_days, iter_months
from schemas import (
    ArrearRequest,
    EmployeeInfo,
    MonthlyRow,
    RateTables,
    SalaryComponentSide,
    Statement,
    StatementTotals,
)

logger = logging.getLogger(__name__)


class ArrearCalculationError(Exception):
    """Raised when a statement cannot be produced; no partial statement is returned."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def _initial_tracker(side: SalaryComponentSide, period_start: date, apply_refixation: bool) -> float:
    # A refixation effective before the period has already taken effect
    if (
        apply_refixation
        and side.refixed_basic_pay is not None
        and side.refixed_basic_pay_date
        and side.refixed_basic_pay_date < period_start.replace(day=1)
    ):
        return side.refixed_basic_pay
    return side.basic_pay


def _build(request: ArrearRequest, rates: RateTables) -> Statement:
    start, end = request.from_date, request.to_date
    drawn_tracker = _initial_tracker(request.paid, start, apply_refixation=False)
    due_tracker = _initial_tracker(request.to_be_paid, start, apply_refixation=True)

    rows = []
    totals = StatementTotals()
    for month in iter_months(start, end):
        month_start, month_end = month_bounds(month)
        days = overlap_days(start, end, month_start, month_end)
        if days == 0:
            continue

        drawn_basic, drawn_tracker = resolve_month_basic(request.paid, month, drawn_tracker, start)
        due_basic, due_tracker = resolve_month_basic(
            request.to_be_paid, month, due_tracker, start, apply_refixation=True
        )

        drawn = compute_breakdown(request.paid, month, drawn_basic, drawn_tracker, start, end, rates)
        due = compute_breakdown(request.to_be_paid, month, due_basic, due_tracker, start, end, rates)

        row = MonthlyRow(
            month=month.strftime("%b %Y"),
            month_start=month_start,
            days=days,
            drawn=drawn,
            due=due,
            difference=due.total - drawn.total,
        )
        logger.debug(
            "%s: drawn basic=%s total=%s, due basic=%s total=%s",
            row.month, drawn.basic, drawn.total, due.basic, due.total,
        )
        rows.append(row)
        totals.drawn_total += drawn.total
        totals.due_total += due.total
        totals.difference_total += row.difference

    return Statement(
        employee=EmployeeInfo(
            employee_id=request.employee_id,
            employee_name=request.employee_name,
            designation=request.designation,
            department=request.department,
            pay_fixation_ref=request.pay_fixation_ref,
        ),
        from_date=start,
        to_date=end,
        rows=rows,
        totals=totals,
    )


def build_statement(request: ArrearRequest, rates: RateTables) -> Statement:
    """
    Month-by-month statement of amounts drawn, due and the difference.

    Totals are sums of the already-rounded row totals, so the footer always
    matches the visible rows.
    """
    logger.info(
        "Calculating arrears for %s from %s to %s",
        request.employee_id, request.from_date, request.to_date,
    )
    try:
        statement = _build(request, rates)
    except Exception as e:
        logger.exception("Arrear calculation failed for %s", request.employee_id)
        raise ArrearCalculationError(str(e) or e.__class__.__name__) from e

    logger.info(
        "Arrear statement for %s: %d months, difference %s",
        request.employee_id, len(statement.rows), statement.totals.difference_total,
    )
    return statement
