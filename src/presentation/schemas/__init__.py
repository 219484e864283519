"""Pydantic schemas for API request/response validation."""

from .driver import DriverRecordSchema
from .status import (
    StatusRequestSchema,
    StatusResponseSchema,
    RiskStatusSchema,
    HighlightSchema,
    ReminderSchema,
    WeeklyInstallmentSchema,
)
from .board import (
    FilterSchema,
    BoardRequestSchema,
    BoardResponseSchema,
    BoardRowSchema,
    TierCountsSchema,
    ReminderToggleRequestSchema,
    ReminderToggleResponseSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "DriverRecordSchema",
    "StatusRequestSchema",
    "StatusResponseSchema",
    "RiskStatusSchema",
    "HighlightSchema",
    "ReminderSchema",
    "WeeklyInstallmentSchema",
    "FilterSchema",
    "BoardRequestSchema",
    "BoardResponseSchema",
    "BoardRowSchema",
    "TierCountsSchema",
    "ReminderToggleRequestSchema",
    "ReminderToggleResponseSchema",
    "ErrorResponseSchema",
]
