"""Driver lease record entity."""

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Mapping, Optional

from src.utils.date_utils import parse_calendar_date


class LeaseMode(str, Enum):
    """Billing tariff / account a lease belongs to."""

    KUAIKUAI = "kuaikuai"
    KUAIWEN = "kuaiwen"

    @classmethod
    def parse(cls, value: Any, default: Optional["LeaseMode"] = None) -> "LeaseMode":
        """Resolve a raw mode string, falling back to ``default`` (or KUAIKUAI)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return default if default is not None else cls.KUAIKUAI


def _to_number(value: Any) -> float:
    """Coerce a loosely typed numeric field, mapping junk and NaN/inf to 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _to_count(value: Any) -> int:
    return int(_to_number(value))


@dataclass
class DriverRecord:
    """
    One lease contract snapshot.

    Money fields are plain currency units (not cents). The record belongs to
    exactly one ledger/profile, which the billing engine never needs.

    Attributes:
        id: Opaque unique key
        contract_start_date: Billing anchor; None when missing or unparseable
        total_payable: Full rent for the current monthly cycle
        actual_paid: Cumulative amount paid toward the current cycle
        overdue_rent_amount: Unpaid balance carried over from prior cycles
        violation_*: Current, unresolved traffic violations
        history_violation_*: Resolved violations, display only
        last_reminded_date: Day the driver was last chased for payment
    """

    id: str
    name: str
    license_plate: str
    contract_start_date: Optional[date] = None
    rent_duration: str = ""
    mode: LeaseMode = LeaseMode.KUAIKUAI
    violation_mode: Optional[LeaseMode] = None
    total_payable: float = 0.0
    actual_paid: float = 0.0
    overdue_rent_amount: float = 0.0
    violation_count: int = 0
    violation_points: int = 0
    violation_fine: float = 0.0
    violation_deadline: Optional[date] = None
    history_violation_count: int = 0
    history_violation_points: int = 0
    history_violation_fine: float = 0.0
    last_reminded_date: Optional[date] = None

    def __post_init__(self) -> None:
        if self.violation_mode is None:
            self.violation_mode = self.mode

    @property
    def has_divergent_violation_mode(self) -> bool:
        """Violations are queried under a different account than rent."""
        return self.violation_mode != self.mode

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DriverRecord":
        """
        Build a record from a camelCase payload (import files, sync results).

        Unknown modes fall back to the defaults, unparseable dates become
        None and corrupt numbers become 0.
        """
        mode = LeaseMode.parse(data.get("mode"))
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            license_plate=str(data.get("licensePlate") or ""),
            contract_start_date=parse_calendar_date(data.get("contractStartDate")),
            rent_duration=str(data.get("rentDuration") or ""),
            mode=mode,
            violation_mode=LeaseMode.parse(data.get("violationMode"), default=mode),
            total_payable=_to_number(data.get("totalPayable")),
            actual_paid=_to_number(data.get("actualPaid")),
            overdue_rent_amount=_to_number(data.get("overdueRentAmount")),
            violation_count=_to_count(data.get("violationCount")),
            violation_points=_to_count(data.get("violationPoints")),
            violation_fine=_to_number(data.get("violationFine")),
            violation_deadline=parse_calendar_date(data.get("violationDeadline")),
            history_violation_count=_to_count(data.get("historyViolationCount")),
            history_violation_points=_to_count(data.get("historyViolationPoints")),
            history_violation_fine=_to_number(data.get("historyViolationFine")),
            last_reminded_date=parse_calendar_date(data.get("lastRemindedDate")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "licensePlate": self.license_plate,
            "contractStartDate": self.contract_start_date.isoformat() if self.contract_start_date else None,
            "rentDuration": self.rent_duration,
            "mode": self.mode.value,
            "violationMode": self.violation_mode.value,
            "totalPayable": self.total_payable,
            "actualPaid": self.actual_paid,
            "overdueRentAmount": self.overdue_rent_amount,
            "violationCount": self.violation_count,
            "violationPoints": self.violation_points,
            "violationFine": self.violation_fine,
            "violationDeadline": self.violation_deadline.isoformat() if self.violation_deadline else None,
            "historyViolationCount": self.history_violation_count,
            "historyViolationPoints": self.history_violation_points,
            "historyViolationFine": self.history_violation_fine,
            "lastRemindedDate": self.last_reminded_date.isoformat() if self.last_reminded_date else None,
        }
