"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .board import (
    DuplicateDriverRecordException,
    InvalidBoardRequestException,
)

__all__ = [
    "DomainException",
    "DuplicateDriverRecordException",
    "InvalidBoardRequestException",
]
