"""
Billing Cycle & Risk Engine for FleetGuard.

Derives a driver's current weekly billing period, rent arrears, violation
cost and risk tier from a DriverRecord and an explicit reference date.

Every function here is pure: no clock reads beyond the documented default,
no I/O and no shared state. Malformed input never raises; it degrades to
zero amounts or to the reference date as the bill date.
"""

import math
from datetime import date, datetime, timedelta
from typing import Optional, Tuple, Union

from src.domain.entities.driver import DriverRecord
from src.utils.date_utils import format_slash_date, parse_calendar_date, with_day_of_month

from .constants import (
    DAYS_PER_PERIOD,
    INSTALLMENTS_PER_CYCLE,
    LEGACY_RENT_TOTAL_THRESHOLD,
    LEGACY_TOTAL_DEBT_THRESHOLD,
    SEVERE_DEBT_THRESHOLD,
    VIOLATION_POINT_FEE,
    WEEKLY_DUE_OFFSETS,
)
from .models import HighlightRule, RiskLevel, RiskStatus


def clamp_amount(value) -> float:
    """Clamp a money/count field to a finite, non-negative float."""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def _as_reference_date(reference_date: Union[date, datetime, None]) -> date:
    if reference_date is None:
        return date.today()
    if isinstance(reference_date, datetime):
        return reference_date.date()
    return reference_date


def compute_billing_anchor(
    contract_start_date: Optional[date],
    reference_date: date,
) -> date:
    """
    Compute the bill date (cycle anchor) that covers the reference date.

    The anchor floats with the contract's day-of-month D: it is D of the
    reference month when the reference date is on or after it, otherwise D
    of the previous month. D is clamped to the length of shorter months, so
    a contract signed on the 31st bills on Feb 28/29 and on Apr 30.

    Args:
        contract_start_date: Contract start; None falls back to the reference date
        reference_date: The "today" to evaluate against

    Returns:
        Anchor date, always on or before reference_date
    """
    if contract_start_date is None:
        return reference_date

    contract_day = contract_start_date.day
    anchor = with_day_of_month(reference_date, contract_day)
    if anchor > reference_date:
        anchor = with_day_of_month(reference_date, contract_day, months=-1)
    return anchor


def compute_cycle_bounds(
    contract_start_date: Optional[date],
    reference_date: date,
) -> Tuple[date, date]:
    """
    Compute the inclusive [anchor, end] window of the current monthly cycle.

    The end is the day before the next anchor, computed with the same
    day-of-month clamping, so consecutive cycles neither overlap nor leave a
    gap.
    """
    anchor = compute_billing_anchor(contract_start_date, reference_date)
    contract_day = contract_start_date.day if contract_start_date else anchor.day
    next_anchor = with_day_of_month(anchor, contract_day, months=1)
    return anchor, next_anchor - timedelta(days=1)


def due_day_offsets(total_days_in_cycle: int) -> Tuple[int, ...]:
    """Zero-based day offsets of the four weekly payment checkpoints."""
    return WEEKLY_DUE_OFFSETS + (total_days_in_cycle - 1,)


def calculate_violation_cost(record: DriverRecord) -> float:
    """Demerit points times the per-point processing fee, plus fines."""
    return clamp_amount(
        clamp_amount(record.violation_points) * VIOLATION_POINT_FEE + clamp_amount(record.violation_fine)
    )


def classify_risk(
    total_debt: float,
    unpaid_rent: float,
    weekly_rent: float,
    rule: HighlightRule = HighlightRule.SMART_TIERED,
) -> RiskLevel:
    """
    Map debt figures to a risk tier.

    Rules:
        smart_tiered: severe when total_debt >= 1300, high when at least one
            weekly installment (or any carried-over arrears with no rent
            configured) is unpaid.
        rent_total_1000 (deprecated): high when unpaid_rent >= 1000.
        total_1200 (deprecated): high when total_debt >= 1200.

    Args:
        total_debt: Settlement debt (pro-rated rent + violations + arrears)
        unpaid_rent: Stepped rent arrears including carried-over arrears
        weekly_rent: One weekly installment
        rule: Highlight rule

    Returns:
        RiskLevel
    """
    if rule is HighlightRule.RENT_TOTAL_1000:
        return RiskLevel.HIGH if unpaid_rent >= LEGACY_RENT_TOTAL_THRESHOLD else RiskLevel.NORMAL

    if rule is HighlightRule.TOTAL_1200:
        return RiskLevel.HIGH if total_debt >= LEGACY_TOTAL_DEBT_THRESHOLD else RiskLevel.NORMAL

    if total_debt >= SEVERE_DEBT_THRESHOLD:
        return RiskLevel.SEVERE
    if unpaid_rent > 0 and unpaid_rent >= weekly_rent:
        return RiskLevel.HIGH
    return RiskLevel.NORMAL


def compute_status(
    record: DriverRecord,
    rule: Union[HighlightRule, str, None] = HighlightRule.SMART_TIERED,
    reference_date: Union[date, datetime, None] = None,
) -> RiskStatus:
    """
    Compute the billing and risk snapshot of a record.

    Batch callers should pass the same reference_date for every record so a
    day rollover cannot split the batch. When omitted, today's local date is
    used.

    Args:
        record: Driver lease record
        rule: Highlight rule or its identifier; unknown values mean smart_tiered
        reference_date: The "today" to evaluate against

    Returns:
        RiskStatus snapshot
    """
    rule = HighlightRule.parse(rule)
    today = _as_reference_date(reference_date)
    contract_start = parse_calendar_date(record.contract_start_date)

    anchor, cycle_end = compute_cycle_bounds(contract_start, today)
    period_range = f"{format_slash_date(anchor)}-{format_slash_date(cycle_end)}"

    total_days_in_cycle = (cycle_end - anchor).days + 1
    day_diff = max(0, (today - anchor).days)
    passed_days = day_diff + 1

    total_payable = clamp_amount(record.total_payable)
    actual_paid = clamp_amount(record.actual_paid)
    overdue = clamp_amount(record.overdue_rent_amount)

    weekly_rent = total_payable / INSTALLMENTS_PER_CYCLE
    violation_cost = calculate_violation_cost(record)

    due_days = due_day_offsets(total_days_in_cycle)
    is_due_day = day_diff in due_days
    is_pre_due_day = day_diff in {d - 1 for d in due_days}
    is_reminded = parse_calendar_date(record.last_reminded_date) == today

    # Stepped obligation: whole checkpoints passed, one installment each
    checkpoints_passed = sum(1 for d in due_days if day_diff >= d)
    expected_paid = weekly_rent * checkpoints_passed
    unpaid_rent = clamp_amount(max(0.0, expected_paid - actual_paid) + overdue)

    # Settlement debt: continuous daily pro-ration
    rent_accrued_today = clamp_amount(total_payable / total_days_in_cycle * passed_days)
    if actual_paid >= rent_accrued_today:
        current_settlement_debt = violation_cost
    else:
        current_settlement_debt = (rent_accrued_today - actual_paid) + violation_cost

    # Sums of huge finite inputs can still overflow to inf
    total_debt = clamp_amount(current_settlement_debt + overdue)

    risk_level = classify_risk(total_debt, unpaid_rent, weekly_rent, rule)

    return RiskStatus(
        period_range=period_range,
        current_period=min(INSTALLMENTS_PER_CYCLE, day_diff // DAYS_PER_PERIOD + 1),
        unpaid_rent=unpaid_rent,
        total_debt=total_debt,
        arrears_amount=total_debt,
        real_time_arrears=total_debt,
        violation_cost=violation_cost,
        risk_level=risk_level,
        is_due_day=is_due_day,
        is_pre_due_day=is_pre_due_day,
        is_reminded=is_reminded,
        computed_bill_date=anchor.isoformat(),
        expected_paid=expected_paid,
        current_cycle_arrears=unpaid_rent,
        day_diff=day_diff,
        total_days_in_cycle=total_days_in_cycle,
        weekly_rent=weekly_rent,
        rent_accrued_today=rent_accrued_today,
    )
