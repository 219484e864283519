"""Application services (use cases)."""

from .billing_service import BillingService

__all__ = [
    "BillingService",
]
