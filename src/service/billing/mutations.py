"""
Record updates invoked by collaborators.

Both helpers return a new DriverRecord and leave the input untouched, so a
status computed from the old record stays valid for that snapshot.
"""

from dataclasses import replace
from datetime import date
from typing import Optional

from src.domain.entities.driver import DriverRecord, LeaseMode
from src.utils.date_utils import parse_calendar_date


def toggle_reminder(record: DriverRecord, reference_date: date) -> DriverRecord:
    """
    Mark the record as chased on reference_date, or clear the mark if it
    was already set for that day.
    """
    if parse_calendar_date(record.last_reminded_date) == reference_date:
        return replace(record, last_reminded_date=None)
    return replace(record, last_reminded_date=reference_date)


def apply_sync_update(
    record: DriverRecord,
    actual_paid: Optional[float] = None,
    overdue_rent_amount: Optional[float] = None,
    violation_count: Optional[int] = None,
    violation_points: Optional[int] = None,
    violation_fine: Optional[float] = None,
    violation_mode: Optional[LeaseMode] = None,
) -> DriverRecord:
    """
    Apply figures fetched by the external rent/violation sync.

    Only the fields that were fetched (not None) are replaced.
    """
    changes = {
        "actual_paid": actual_paid,
        "overdue_rent_amount": overdue_rent_amount,
        "violation_count": violation_count,
        "violation_points": violation_points,
        "violation_fine": violation_fine,
        "violation_mode": LeaseMode.parse(violation_mode, default=record.violation_mode)
        if violation_mode is not None else None,
    }
    return replace(record, **{key: value for key, value in changes.items() if value is not None})
