"""Data transfer objects for billing status and board operations."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from src.domain.entities.driver import DriverRecord
from src.service.billing import (
    FilterConfig,
    Highlight,
    HighlightRule,
    ReminderQuote,
    RiskStatus,
    TierCounts,
    WeeklyInstallment,
)


@dataclass(frozen=True)
class StatusReport:
    """Everything a card needs for one record."""

    record: DriverRecord
    status: RiskStatus
    reference_date: date
    highlight: Highlight
    reminder: Optional[ReminderQuote]
    schedule: List[WeeklyInstallment]
    rank_score: float


@dataclass(frozen=True)
class BoardRequest:
    """Input for ranking a set of records against one reference date."""

    records: Sequence[DriverRecord]
    rule: HighlightRule = HighlightRule.SMART_TIERED
    reference_date: Optional[date] = None
    hide_remind_status: bool = False
    search: Optional[str] = None
    filters: FilterConfig = field(default_factory=FilterConfig)
    tier: Optional[str] = None

    def duplicate_ids(self) -> List[str]:
        counts = Counter(record.id for record in self.records)
        return sorted(record_id for record_id, n in counts.items() if n > 1)

    def validate(self) -> List[str]:
        errors = []

        for name in ("min_arrears", "min_violation_cost", "min_total_debt"):
            value = getattr(self.filters, name)
            if value is not None and value < 0:
                errors.append(f"{name} must not be negative")

        if any(not record.id for record in self.records):
            errors.append("every record needs an id")

        return errors


@dataclass(frozen=True)
class BoardRow:
    """One ranked record on the board."""

    record: DriverRecord
    status: RiskStatus
    highlight: Highlight
    reminder: Optional[ReminderQuote]
    rank_score: float


@dataclass(frozen=True)
class BoardResult:
    """
    Ranked and filtered board.

    counts are taken after search and amount filters but before the tier
    filter, so the tier badges stay stable while a tier is selected.
    """

    reference_date: date
    rule: HighlightRule
    rows: List[BoardRow]
    counts: TierCounts
