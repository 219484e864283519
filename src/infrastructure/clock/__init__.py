"""Reference clock implementations."""

from .system_clock import FixedClock, SystemClock

__all__ = ["FixedClock", "SystemClock"]
