"""
Billing Cycle & Risk Engine for FleetGuard
"""

from .models import (
    RiskLevel,
    HighlightRule,
    ReminderKind,
    RiskStatus,
    ReminderQuote,
    WeeklyInstallment,
    Highlight,
)
from .settings import DisplaySettings, display_settings
from .engine import (
    compute_billing_anchor,
    compute_cycle_bounds,
    due_day_offsets,
    calculate_violation_cost,
    classify_risk,
    compute_status,
)
from .ranking import (
    RankedRecord,
    TierCounts,
    rank_score,
    evaluate_records,
    rank_evaluated,
    rank_records,
    count_by_tier,
)
from .reminder import expected_due_amount, build_reminder_quote, should_remind
from .filters import FilterConfig, matches_search, matches_tier, parse_tier_filter
from .highlight import resolve_highlight
from .schedule import build_weekly_schedule
from .mutations import toggle_reminder, apply_sync_update

__all__ = [
    # Settings
    "DisplaySettings",
    "display_settings",
    # Models
    "RiskLevel",
    "HighlightRule",
    "ReminderKind",
    "RiskStatus",
    "ReminderQuote",
    "WeeklyInstallment",
    "Highlight",
    # Engine
    "compute_billing_anchor",
    "compute_cycle_bounds",
    "due_day_offsets",
    "calculate_violation_cost",
    "classify_risk",
    "compute_status",
    # Ranking
    "RankedRecord",
    "TierCounts",
    "rank_score",
    "evaluate_records",
    "rank_evaluated",
    "rank_records",
    "count_by_tier",
    # Reminders
    "expected_due_amount",
    "build_reminder_quote",
    "should_remind",
    # Search / Filters
    "FilterConfig",
    "matches_search",
    "matches_tier",
    "parse_tier_filter",
    # Highlight
    "resolve_highlight",
    # Schedule
    "build_weekly_schedule",
    # Mutations
    "toggle_reminder",
    "apply_sync_update",
]
