"""
Ranking and aggregation for the collection board.

Orders records so that unreminded due-today drivers come first, then
unreminded due-tomorrow, then severe, then high risk, each tier by
descending debt.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from src.domain.entities.driver import DriverRecord

from .constants import (
    RANK_WEIGHT_DUE_TODAY,
    RANK_WEIGHT_DUE_TOMORROW,
    RANK_WEIGHT_HIGH,
    RANK_WEIGHT_SEVERE,
)
from .engine import compute_status
from .models import HighlightRule, RiskLevel, RiskStatus


def rank_score(
    record: DriverRecord,
    status: RiskStatus,
    hide_remind_weighting: bool = False,
) -> float:
    """
    Compute the descending sort key of a record.

    Args:
        record: The record the status was computed from
        status: Its RiskStatus
        hide_remind_weighting: Drop the due-today/due-tomorrow boost
            (the "hide reminder status" toggle). Risk tier and debt
            contributions are unaffected.

    Returns:
        Sort key, higher sorts first
    """
    score = 0.0

    if not hide_remind_weighting and not status.is_reminded:
        if status.is_due_day:
            score += RANK_WEIGHT_DUE_TODAY
        if status.is_pre_due_day:
            score += RANK_WEIGHT_DUE_TOMORROW

    if status.risk_level is RiskLevel.SEVERE:
        score += RANK_WEIGHT_SEVERE
    elif status.risk_level is RiskLevel.HIGH:
        score += RANK_WEIGHT_HIGH

    return score + status.total_debt


@dataclass(frozen=True)
class RankedRecord:
    """A record with its status and sort key."""
    record: DriverRecord
    status: RiskStatus
    score: float


@dataclass(frozen=True)
class TierCounts:
    """Badge counts shown above the board."""
    severe: int
    high: int
    due: int
    total: int

    def to_dict(self) -> Dict[str, int]:
        return {"severe": self.severe, "high": self.high, "due": self.due, "total": self.total}


def evaluate_records(
    records: Iterable[DriverRecord],
    rule: HighlightRule,
    reference_date: date,
) -> List[Tuple[DriverRecord, RiskStatus]]:
    """Compute the status of every record against one reference date."""
    return [(record, compute_status(record, rule, reference_date)) for record in records]


def rank_evaluated(
    evaluated: Sequence[Tuple[DriverRecord, RiskStatus]],
    hide_remind_weighting: bool = False,
) -> List[RankedRecord]:
    """
    Sort evaluated records by descending rank score.

    The sort is stable: records with equal scores keep their input order,
    so sorting an already sorted board is a no-op.
    """
    ranked = [
        RankedRecord(record=record, status=status, score=rank_score(record, status, hide_remind_weighting))
        for record, status in evaluated
    ]
    ranked.sort(key=lambda item: item.score, reverse=True)
    return ranked


def rank_records(
    records: Iterable[DriverRecord],
    rule: HighlightRule = HighlightRule.SMART_TIERED,
    reference_date: Optional[date] = None,
    hide_remind_weighting: bool = False,
) -> List[RankedRecord]:
    """Evaluate and rank records in one step, reading the clock at most once."""
    reference_date = reference_date or date.today()
    return rank_evaluated(evaluate_records(records, rule, reference_date), hide_remind_weighting)


def count_by_tier(statuses: Iterable[RiskStatus]) -> TierCounts:
    """Count severe, high and due-today records."""
    severe = high = due = total = 0
    for status in statuses:
        total += 1
        if status.risk_level is RiskLevel.SEVERE:
            severe += 1
        elif status.risk_level is RiskLevel.HIGH:
            high += 1
        if status.is_due_day:
            due += 1
    return TierCounts(severe=severe, high=high, due=due, total=total)
