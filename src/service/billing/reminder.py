"""
Reminder quoting for collection messages.

A due-tomorrow reminder must quote the obligation that will exist tomorrow,
one installment more than today's stepped arrears.
"""

from typing import Optional

from src.domain.entities.driver import DriverRecord

from .engine import clamp_amount
from .models import ReminderQuote, RiskStatus


def expected_due_amount(record: DriverRecord, status: RiskStatus) -> float:
    """
    Amount to quote in a payment reminder.

    Due tomorrow:
        max(0, expected_paid + weekly_rent - actual_paid) + overdue_rent_amount
    Otherwise:
        unpaid_rent

    Args:
        record: Driver lease record
        status: Its RiskStatus on the reminder date

    Returns:
        Amount in currency units, never negative
    """
    if status.is_pre_due_day:
        tomorrow_obligation = status.expected_paid + status.weekly_rent
        shortfall = max(0.0, tomorrow_obligation - clamp_amount(record.actual_paid))
        return clamp_amount(shortfall + clamp_amount(record.overdue_rent_amount))
    return status.unpaid_rent


def build_reminder_quote(record: DriverRecord, status: RiskStatus) -> Optional[ReminderQuote]:
    """Reminder kind and amount, or None when no checkpoint is today or tomorrow."""
    kind = status.reminder_kind
    if kind is None:
        return None
    return ReminderQuote(kind=kind, amount=expected_due_amount(record, status))


def should_remind(status: RiskStatus) -> bool:
    """A reminder is pending when a checkpoint is today or tomorrow and nobody chased yet."""
    return status.reminder_kind is not None and not status.is_reminded
