"""Reference clock interface."""

from abc import ABC, abstractmethod
from datetime import date


class ReferenceClock(ABC):
    """
    Source of the "today" used for billing evaluations.

    Read once per request or batch and threaded through the engine, so a
    batch never straddles a day boundary.
    """

    @abstractmethod
    def today(self) -> date:
        """Return the current calendar date in the ledger's timezone."""
        ...
