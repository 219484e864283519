"""Weekly installment schedule of the current billing cycle."""

from datetime import date, timedelta
from typing import List, Optional

from src.domain.entities.driver import DriverRecord
from src.utils.date_utils import parse_calendar_date

from .constants import INSTALLMENTS_PER_CYCLE
from .engine import clamp_amount, compute_cycle_bounds, due_day_offsets
from .models import WeeklyInstallment


def build_weekly_schedule(
    record: DriverRecord,
    reference_date: Optional[date] = None,
) -> List[WeeklyInstallment]:
    """
    Generate the four weekly checkpoints of the cycle containing reference_date.

    Each checkpoint expects a cumulative quarter of total_payable
    (25%, 50%, 75%, 100%). The last checkpoint falls on the last day of the
    cycle, so it absorbs month-length differences.

    Args:
        record: Driver lease record
        reference_date: The "today" to evaluate against (defaults to today)

    Returns:
        List of WeeklyInstallment in checkpoint order

    Example:
        total_payable 3600, actual_paid 900, cycle 2025/04/01-2025/04/30
        -> Apr 7 (900, covered), Apr 14 (1800), Apr 21 (2700), Apr 30 (3600)
    """
    reference_date = reference_date or date.today()
    anchor, cycle_end = compute_cycle_bounds(
        parse_calendar_date(record.contract_start_date),
        reference_date,
    )
    total_days = (cycle_end - anchor).days + 1
    day_diff = (reference_date - anchor).days

    weekly_rent = clamp_amount(record.total_payable) / INSTALLMENTS_PER_CYCLE
    actual_paid = clamp_amount(record.actual_paid)

    installments = []
    for week, offset in enumerate(due_day_offsets(total_days), start=1):
        cumulative_due = weekly_rent * week
        installments.append(
            WeeklyInstallment(
                week=week,
                due_date=anchor + timedelta(days=offset),
                cumulative_due=cumulative_due,
                covered=actual_paid >= cumulative_due,
                passed=day_diff >= offset,
            )
        )

    return installments
