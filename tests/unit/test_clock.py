"""Unit tests for reference clocks."""

from datetime import date
from zoneinfo import ZoneInfoNotFoundError

import pytest

from src.infrastructure.clock import FixedClock, SystemClock


class TestClocks:
    def test_fixed_clock(self):
        assert FixedClock(date(2025, 4, 23)).today() == date(2025, 4, 23)

    def test_system_clock_uses_timezone(self):
        today = SystemClock("Asia/Shanghai").today()
        assert abs((today - date.today()).days) <= 1

    def test_unknown_timezone_rejected(self):
        with pytest.raises(ZoneInfoNotFoundError):
            SystemClock("Mars/Olympus_Mons")
