"""
Domain Interfaces (Ports)
"""

from .clock import ReferenceClock

__all__ = [
    "ReferenceClock",
]
