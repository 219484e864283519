"""
Search and filter layer for the collection board.

Filters only read RiskStatus figures; statuses must come from the same
reference date as the ranking they feed.
"""

from dataclasses import dataclass
from typing import Optional, Union

from src.domain.entities.driver import DriverRecord

from .models import RiskLevel, RiskStatus

DUE_FILTER = "due"

TierFilter = Union[RiskLevel, str, None]


def _normalize(text: str) -> str:
    return "".join(text.split()).lower()


def matches_search(search_term: Optional[str], record: DriverRecord) -> bool:
    """
    Case-insensitive substring match on driver name or license plate.

    Whitespace is ignored on both sides, so "粤A DX" matches "粤ADX8576".
    An empty term matches everything.
    """
    if not search_term or not search_term.strip():
        return True
    target = _normalize(search_term)
    return target in _normalize(record.name) or target in _normalize(record.license_plate)


@dataclass(frozen=True)
class FilterConfig:
    """
    Minimum-amount filters. None disables a filter.

    Attributes:
        min_arrears: Minimum arrears_amount (settlement debt)
        min_violation_cost: Minimum violation cost
        min_total_debt: Minimum total debt
    """
    min_arrears: Optional[float] = None
    min_violation_cost: Optional[float] = None
    min_total_debt: Optional[float] = None

    @property
    def is_active(self) -> bool:
        return any(
            value is not None
            for value in (self.min_arrears, self.min_violation_cost, self.min_total_debt)
        )

    def matches(self, status: RiskStatus) -> bool:
        if self.min_arrears is not None and status.arrears_amount < self.min_arrears:
            return False
        if self.min_violation_cost is not None and status.violation_cost < self.min_violation_cost:
            return False
        if self.min_total_debt is not None and status.total_debt < self.min_total_debt:
            return False
        return True


def parse_tier_filter(value: TierFilter) -> TierFilter:
    """Resolve a tier filter: a RiskLevel, "due", or None for no filter."""
    if value is None or isinstance(value, RiskLevel):
        return value
    text = str(value).strip().lower()
    if not text:
        return None
    if text == DUE_FILTER:
        return DUE_FILTER
    try:
        return RiskLevel(text)
    except ValueError:
        return None


def matches_tier(status: RiskStatus, tier: TierFilter) -> bool:
    """Whether a status belongs to the selected tier ("due" means due today)."""
    tier = parse_tier_filter(tier)
    if tier is None:
        return True
    if tier == DUE_FILTER:
        return status.is_due_day
    return status.risk_level is tier
