"""
Fixtures for integration tests.

Provides:
- Test client for the FastAPI app with a fixed reference clock
- Driver record payloads in the camelCase ledger format
"""

from datetime import date
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from src.main import app
from src.core.dependencies import get_display, get_reference_clock
from src.infrastructure.clock import FixedClock
from src.service.billing import DisplaySettings


# Every request without an explicit reference_date is evaluated on this day.
CLOCK_DATE = date(2025, 4, 23)


def make_payload(record_id: str, contract_start: str = "2024-11-01", **overrides) -> dict:
    """Ledger record with 3600 monthly rent, billed on the contract day."""
    payload = {
        "id": record_id,
        "name": f"司机{record_id}",
        "licensePlate": f"粤A{record_id.upper()}",
        "contractStartDate": contract_start,
        "mode": "kuaikuai",
        "totalPayable": 3600,
        "actualPaid": 0,
        "overdueRentAmount": 0,
    }
    payload.update(overrides)
    return payload


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with a fixed clock and default display settings."""

    def override_get_reference_clock():
        return FixedClock(CLOCK_DATE)

    def override_get_display():
        return DisplaySettings()

    app.dependency_overrides[get_reference_clock] = override_get_reference_clock
    app.dependency_overrides[get_display] = override_get_display

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clear overrides
    app.dependency_overrides.clear()


# =============================================================================
# Request Fixtures
# =============================================================================

@pytest.fixture
def record_payload():
    """Factory for ledger record payloads."""
    return make_payload


@pytest.fixture
def severe_payload() -> dict:
    """Paid one installment with 4 points and 1050 in fines: total debt 3710."""
    return make_payload("severe", actualPaid=900, violationPoints=4, violationFine=1050)


@pytest.fixture
def board_payloads() -> list:
    """
    One record per board tier on 2025-04-23, in scrambled order.

    - today: billed on the 3rd, day 20 of the cycle (due today)
    - tomorrow: billed on the 4th, day 19 (due tomorrow)
    - severe / high / normal: billed on the 1st, day 22
    """
    return [
        make_payload("normal", actualPaid=2700),
        make_payload("tomorrow", contract_start="2024-11-04", actualPaid=2700),
        make_payload("high", actualPaid=1600),
        make_payload("today", contract_start="2024-11-03", actualPaid=2700),
        make_payload("severe", actualPaid=900, violationPoints=4, violationFine=1050),
    ]
