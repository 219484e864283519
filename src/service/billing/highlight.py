"""Card highlight resolution: maps a RiskStatus to a label and accent color."""

from .models import Highlight, RiskLevel, RiskStatus
from .settings import DisplaySettings, display_settings

LABEL_DUE_TODAY = "due_today"
LABEL_DUE_TOMORROW = "due_tomorrow"
LABEL_SEVERE = "severe"
LABEL_HIGH = "high"


def resolve_highlight(
    status: RiskStatus,
    settings: DisplaySettings = display_settings,
    hide_remind_status: bool = False,
) -> Highlight:
    """
    Pick the card highlight for a status.

    Precedence: unreminded due-today, unreminded due-tomorrow, severe, high.
    With hide_remind_status the due-day states are ignored entirely.
    """
    pending = not status.is_reminded and not hide_remind_status

    if pending and status.is_due_day:
        return Highlight(label=LABEL_DUE_TODAY, accent_color=settings.due_today_color)
    if pending and status.is_pre_due_day:
        return Highlight(label=LABEL_DUE_TOMORROW, accent_color=settings.due_color)
    if status.risk_level is RiskLevel.SEVERE:
        return Highlight(label=LABEL_SEVERE, accent_color=settings.severe_color)
    if status.risk_level is RiskLevel.HIGH:
        return Highlight(label=LABEL_HIGH, accent_color=settings.risk_color)
    return Highlight(label=None, accent_color=settings.default_color)
