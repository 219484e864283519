"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends

from src.application.services import BillingService
from src.domain.interfaces import ReferenceClock
from src.infrastructure.clock import SystemClock
from src.service.billing import DisplaySettings
from src.service.billing.settings import get_display_settings


def get_reference_clock() -> ReferenceClock:
    """Get the wall-clock reference clock."""
    return SystemClock()


def get_display() -> DisplaySettings:
    """Get the display settings."""
    return get_display_settings()


def get_billing_service(
    clock: Annotated[ReferenceClock, Depends(get_reference_clock)],
    display: Annotated[DisplaySettings, Depends(get_display)],
) -> BillingService:
    """Get a BillingService instance."""
    return BillingService(clock=clock, display=display)
