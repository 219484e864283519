"""
Data models for the billing engine.

These are value objects computed fresh from a DriverRecord and a reference
date. None of them carry identity or are ever persisted.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional


class RiskLevel(str, Enum):
    """Risk tier driving card highlighting and sort priority."""
    NORMAL = "normal"
    HIGH = "high"
    SEVERE = "severe"


class HighlightRule(str, Enum):
    """
    Rule used to classify a record into a risk tier.

    SMART_TIERED is the production rule. The other two are kept so stored
    preferences from older versions still resolve; they are deprecated.
    """
    SMART_TIERED = "smart_tiered"
    RENT_TOTAL_1000 = "rent_total_1000"  # deprecated
    TOTAL_1200 = "total_1200"  # deprecated

    @property
    def is_legacy(self) -> bool:
        return self is not HighlightRule.SMART_TIERED

    @classmethod
    def parse(cls, value: Any) -> "HighlightRule":
        """Resolve a rule identifier, defaulting to SMART_TIERED for unknown values."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.SMART_TIERED


class ReminderKind(str, Enum):
    """Which collection reminder applies on the reference date."""
    DUE_TODAY = "due_today"
    DUE_TOMORROW = "due_tomorrow"


@dataclass(frozen=True)
class RiskStatus:
    """
    Billing and risk snapshot for one record on one reference date.

    Two debt figures are kept side by side and must not be conflated:

    Attributes:
        unpaid_rent: Stepped arrears. Weekly installments whose checkpoint has
            passed, minus payments, plus carried-over arrears. Drives the
            high-risk tier and reminder quotes.
        total_debt: Settlement debt. Daily pro-rated rent minus payments, plus
            violation cost and carried-over arrears. Drives sorting,
            filtering and the severe tier.
        arrears_amount / real_time_arrears: Aliases of total_debt.
        expected_paid: Stepped theoretical obligation as of the reference date.
        current_cycle_arrears: Alias of unpaid_rent.
        period_range: Current billing cycle as "YYYY/MM/DD-YYYY/MM/DD".
        current_period: Week of the cycle (1-4).
        computed_bill_date: Cycle anchor as an ISO date string.
        day_diff: Zero-based day offset of the reference date in the cycle.
    """
    period_range: str
    current_period: int
    unpaid_rent: float
    total_debt: float
    arrears_amount: float
    real_time_arrears: float
    violation_cost: float
    risk_level: RiskLevel
    is_due_day: bool
    is_pre_due_day: bool
    is_reminded: bool
    computed_bill_date: str
    expected_paid: float
    current_cycle_arrears: float
    day_diff: int
    total_days_in_cycle: int
    weekly_rent: float
    rent_accrued_today: float

    @property
    def is_arrears(self) -> bool:
        return self.total_debt > 0

    @property
    def is_high_risk(self) -> bool:
        return self.risk_level in (RiskLevel.HIGH, RiskLevel.SEVERE)

    @property
    def reminder_kind(self) -> Optional[ReminderKind]:
        if self.is_due_day:
            return ReminderKind.DUE_TODAY
        if self.is_pre_due_day:
            return ReminderKind.DUE_TOMORROW
        return None

    def to_dict(self) -> dict:
        return {
            "period_range": self.period_range,
            "current_period": self.current_period,
            "unpaid_rent": self.unpaid_rent,
            "total_debt": self.total_debt,
            "arrears_amount": self.arrears_amount,
            "real_time_arrears": self.real_time_arrears,
            "violation_cost": self.violation_cost,
            "risk_level": self.risk_level.value,
            "is_due_day": self.is_due_day,
            "is_pre_due_day": self.is_pre_due_day,
            "is_reminded": self.is_reminded,
            "is_arrears": self.is_arrears,
            "is_high_risk": self.is_high_risk,
            "computed_bill_date": self.computed_bill_date,
            "expected_paid": self.expected_paid,
            "current_cycle_arrears": self.current_cycle_arrears,
            "day_diff": self.day_diff,
            "total_days_in_cycle": self.total_days_in_cycle,
            "weekly_rent": self.weekly_rent,
            "rent_accrued_today": self.rent_accrued_today,
        }


@dataclass(frozen=True)
class ReminderQuote:
    """Amount to quote in a collection reminder."""
    kind: ReminderKind
    amount: float


@dataclass(frozen=True)
class WeeklyInstallment:
    """
    One weekly checkpoint of the current cycle.

    Attributes:
        week: 1-4
        due_date: Calendar date of the checkpoint
        cumulative_due: Rent expected to be paid by this checkpoint
        covered: Whether actual_paid already reaches cumulative_due
        passed: Whether the reference date is on or after the checkpoint
    """
    week: int
    due_date: date
    cumulative_due: float
    covered: bool
    passed: bool


@dataclass(frozen=True)
class Highlight:
    """Card highlight for a record: a label key and its accent color."""
    label: Optional[str]
    accent_color: str
