"""
Display Settings for the FleetGuard collection board.

Colors and the highlight rule are user preferences. They are passed into the
engine and highlight resolution explicitly; nothing reads them ambiently.
Business thresholds are not here, see constants.py.

Environment variables use the DISPLAY_ prefix:
    DISPLAY_HIGHLIGHT_RULE=smart_tiered
    DISPLAY_SEVERE_COLOR=#7e22ce
    DISPLAY_HIDE_REMIND_STATUS=false

Usage:
    from src.service.billing.settings import display_settings

    rule = display_settings.highlight_rule

    # Or per-request overrides
    custom = DisplaySettings(highlight_rule="total_1200")
"""

import re
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import HighlightRule

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


class DisplaySettings(BaseSettings):
    """
    Card colors and highlight rule.

    All settings can be overridden via environment variables with DISPLAY_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="DISPLAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    highlight_rule: HighlightRule = Field(
        default=HighlightRule.SMART_TIERED,
        description="Risk classification rule; unknown identifiers fall back to smart_tiered",
    )
    hide_remind_status: bool = Field(
        default=False,
        description="Suppress due-today/due-tomorrow highlighting and sort boost",
    )

    risk_color: str = Field(default="#ef4444", description="Accent for high risk")
    severe_color: str = Field(default="#7e22ce", description="Accent for severe risk")
    due_color: str = Field(default="#f59e0b", description="Accent for unreminded due-tomorrow")
    due_today_color: str = Field(default="#0000ff", description="Accent for unreminded due-today")
    default_color: str = Field(default="#3b82f6", description="Accent with no highlight")

    @field_validator("highlight_rule", mode="before")
    @classmethod
    def resolve_highlight_rule(cls, v) -> HighlightRule:
        """Map stale or unknown rule identifiers to the production rule."""
        return HighlightRule.parse(v)

    @field_validator("risk_color", "severe_color", "due_color", "due_today_color", "default_color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Colors must be #rgb or #rrggbb."""
        if not _HEX_COLOR.match(v):
            raise ValueError(f"Invalid hex color: {v}")
        return v.lower()


@lru_cache
def get_display_settings() -> DisplaySettings:
    """Get cached display settings instance."""
    return DisplaySettings()


display_settings = get_display_settings()
