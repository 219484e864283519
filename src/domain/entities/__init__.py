"""Domain Entities - Core business objects."""

from .driver import DriverRecord, LeaseMode

__all__ = [
    "DriverRecord",
    "LeaseMode",
]
