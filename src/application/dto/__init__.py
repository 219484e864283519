"""Data Transfer Objects for application layer."""

from .billing import BoardRequest, BoardResult, BoardRow, StatusReport

__all__ = [
    "BoardRequest",
    "BoardResult",
    "BoardRow",
    "StatusReport",
]
