"""Collection board domain exceptions."""

from typing import List

from .base import DomainException


class DuplicateDriverRecordException(DomainException):
    """Raised when a batch contains the same record id more than once."""

    def __init__(self, record_ids: List[str]):
        super().__init__(
            message=f"Duplicate record ids in batch: {', '.join(record_ids)}",
            code="DUPLICATE_RECORD",
        )
        self.record_ids = record_ids


class InvalidBoardRequestException(DomainException):
    """Raised when a board request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_BOARD_REQUEST",
        )
