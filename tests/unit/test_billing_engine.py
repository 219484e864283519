"""
Unit Tests for the FleetGuard Billing Cycle & Risk Engine.

These tests verify:
1. Bill date (anchor) selection and month-length clamping
2. Cycle bounds tiling the calendar
3. Stepped vs. pro-rated debt figures
4. Due-day / pre-due-day checkpoints and reminder marks
5. Risk tiers under the production and deprecated rules
6. Recovery from malformed dates and corrupt amounts

Test Categories:
- TestBillingAnchor / TestCycleBounds: date arithmetic
- TestComputeStatus*: the status snapshot
- TestClassifyRisk: tier mapping
- TestMalformedInput: total-function behaviour
- TestStatusProperties: invariants over small input grids
"""

import math
from datetime import date, timedelta

import pytest

from src.domain.entities.driver import DriverRecord
from src.service.billing.engine import (
    calculate_violation_cost,
    classify_risk,
    compute_billing_anchor,
    compute_cycle_bounds,
    compute_status,
    due_day_offsets,
)
from src.service.billing.models import HighlightRule, RiskLevel


# =============================================================================
# Test Fixtures
# =============================================================================

# Contract signed on the 1st: April 2025 cycle is 2025/04/01-2025/04/30.
APRIL_CONTRACT = date(2024, 11, 1)
REFERENCE = date(2025, 4, 23)  # day_diff 22 in the April cycle


def make_record(**overrides) -> DriverRecord:
    """Helper to create a record billed on the 1st with 3600 monthly rent."""
    fields = dict(
        id="drv-001",
        name="张三",
        license_plate="粤ADX8576",
        contract_start_date=APRIL_CONTRACT,
        total_payable=3600,
        actual_paid=0,
        overdue_rent_amount=0,
    )
    fields.update(overrides)
    return DriverRecord(**fields)


def april(day: int) -> date:
    return date(2025, 4, day)


# =============================================================================
# Anchor & Cycle Tests
# =============================================================================

class TestBillingAnchor:
    """Tests for compute_billing_anchor()."""

    def test_reference_after_contract_day_uses_current_month(self):
        assert compute_billing_anchor(date(2023, 11, 22), date(2025, 4, 23)) == date(2025, 4, 22)

    def test_reference_on_contract_day_uses_current_month(self):
        assert compute_billing_anchor(date(2023, 11, 22), date(2025, 4, 22)) == date(2025, 4, 22)

    def test_reference_before_contract_day_uses_previous_month(self):
        assert compute_billing_anchor(date(2023, 11, 22), date(2025, 4, 21)) == date(2025, 3, 22)

    def test_previous_month_crosses_year(self):
        assert compute_billing_anchor(date(2023, 6, 15), date(2025, 1, 10)) == date(2024, 12, 15)

    def test_missing_contract_date_anchors_on_reference(self):
        assert compute_billing_anchor(None, REFERENCE) == REFERENCE

    def test_day_31_clamps_in_february(self):
        """Contract on the 31st bills on Feb 28 in a common year."""
        contract = date(2024, 1, 31)
        assert compute_billing_anchor(contract, date(2025, 2, 15)) == date(2025, 1, 31)
        assert compute_billing_anchor(contract, date(2025, 2, 28)) == date(2025, 2, 28)
        assert compute_billing_anchor(contract, date(2025, 3, 30)) == date(2025, 2, 28)
        assert compute_billing_anchor(contract, date(2025, 3, 31)) == date(2025, 3, 31)

    def test_day_31_clamps_in_thirty_day_month(self):
        assert compute_billing_anchor(date(2024, 1, 31), date(2025, 4, 30)) == date(2025, 4, 30)

    def test_day_31_in_leap_february(self):
        assert compute_billing_anchor(date(2023, 8, 31), date(2024, 2, 29)) == date(2024, 2, 29)

    def test_day_29_in_common_february(self):
        contract = date(2024, 2, 29)
        assert compute_billing_anchor(contract, date(2025, 2, 28)) == date(2025, 2, 28)
        assert compute_billing_anchor(contract, date(2025, 3, 28)) == date(2025, 2, 28)
        assert compute_billing_anchor(contract, date(2025, 3, 29)) == date(2025, 3, 29)


class TestCycleBounds:
    """Tests for compute_cycle_bounds()."""

    def test_thirty_day_month(self):
        start, end = compute_cycle_bounds(APRIL_CONTRACT, REFERENCE)
        assert (start, end) == (april(1), april(30))

    def test_mid_month_contract(self):
        start, end = compute_cycle_bounds(date(2023, 11, 22), date(2025, 4, 23))
        assert (start, end) == (date(2025, 4, 22), date(2025, 5, 21))

    def test_day_31_cycle_ends_before_next_clamped_anchor(self):
        contract = date(2024, 1, 31)
        assert compute_cycle_bounds(contract, date(2025, 2, 10)) == (date(2025, 1, 31), date(2025, 2, 27))
        assert compute_cycle_bounds(contract, date(2025, 3, 1)) == (date(2025, 2, 28), date(2025, 3, 30))
        assert compute_cycle_bounds(contract, date(2025, 4, 30)) == (date(2025, 4, 30), date(2025, 5, 30))

    def test_missing_contract_date_starts_cycle_on_reference(self):
        start, end = compute_cycle_bounds(None, REFERENCE)
        assert start == REFERENCE
        assert end == date(2025, 5, 22)

    @pytest.mark.parametrize("contract_day", [1, 15, 28, 29, 30, 31])
    def test_cycles_tile_the_calendar(self, contract_day: int):
        """Every day falls in exactly one cycle and cycles are contiguous."""
        contract = date(2023, 1, contract_day)
        previous = None
        day = date(2024, 1, 1)
        while day <= date(2025, 12, 31):
            start, end = compute_cycle_bounds(contract, day)
            assert start <= day <= end
            assert 28 <= (end - start).days + 1 <= 31
            if previous is not None and previous != (start, end):
                assert start == previous[1] + timedelta(days=1)
            previous = (start, end)
            day += timedelta(days=1)


class TestDueDayOffsets:
    def test_last_checkpoint_tracks_cycle_length(self):
        assert due_day_offsets(30) == (6, 13, 20, 29)
        assert due_day_offsets(28) == (6, 13, 20, 27)
        assert due_day_offsets(31) == (6, 13, 20, 30)


# =============================================================================
# Status Tests
# =============================================================================

class TestComputeStatusScenarios:
    """Worked examples over the April 2025 cycle (30 days)."""

    def test_stepped_arrears_after_three_checkpoints(self):
        """day_diff 22 has passed checkpoints 6, 13 and 20."""
        status = compute_status(make_record(actual_paid=900), reference_date=REFERENCE)

        assert status.day_diff == 22
        assert status.total_days_in_cycle == 30
        assert status.weekly_rent == 900
        assert status.expected_paid == 2700
        assert status.unpaid_rent == 1800
        assert status.unpaid_rent >= status.weekly_rent
        assert status.current_cycle_arrears == status.unpaid_rent

    def test_stepped_arrears_with_settlement_debt_over_severe_line(self):
        """The same record owes 2760 - 900 = 1860 pro-rated, which is severe."""
        status = compute_status(make_record(actual_paid=900), reference_date=REFERENCE)

        assert status.rent_accrued_today == 2760
        assert status.total_debt == 1860
        assert status.risk_level == RiskLevel.SEVERE

    def test_settlement_debt_includes_violations(self):
        record = make_record(actual_paid=900, violation_points=4, violation_fine=1050)
        status = compute_status(record, reference_date=REFERENCE)

        assert status.violation_cost == 1850
        assert status.total_debt == 3710
        assert status.arrears_amount == 3710
        assert status.real_time_arrears == 3710
        assert status.risk_level == RiskLevel.SEVERE
        assert status.is_arrears is True
        assert status.is_high_risk is True

    def test_high_risk_below_severe_line(self):
        status = compute_status(make_record(actual_paid=1600), reference_date=REFERENCE)

        assert status.unpaid_rent == 1100
        assert status.total_debt == 1160
        assert status.risk_level == RiskLevel.HIGH

    def test_paid_up_to_checkpoint_is_normal(self):
        status = compute_status(make_record(actual_paid=2700), reference_date=REFERENCE)

        assert status.unpaid_rent == 0
        assert status.total_debt == 60
        assert status.risk_level == RiskLevel.NORMAL
        assert status.is_high_risk is False

    def test_paid_ahead_leaves_only_violations(self):
        record = make_record(actual_paid=3600, violation_fine=200)
        status = compute_status(record, reference_date=REFERENCE)

        assert status.unpaid_rent == 0
        assert status.total_debt == 200

    def test_carried_over_arrears_add_to_both_figures(self):
        record = make_record(actual_paid=2700, overdue_rent_amount=500)
        status = compute_status(record, reference_date=REFERENCE)

        assert status.unpaid_rent == 500
        assert status.total_debt == 560

    def test_period_strings(self):
        status = compute_status(make_record(), reference_date=REFERENCE)

        assert status.period_range == "2025/04/01-2025/04/30"
        assert status.computed_bill_date == "2025-04-01"
        assert status.current_period == 4

    def test_anchor_day(self):
        """On the bill date nothing is due yet."""
        status = compute_status(make_record(), reference_date=april(1))

        assert status.day_diff == 0
        assert status.current_period == 1
        assert status.expected_paid == 0
        assert status.unpaid_rent == 0
        assert status.rent_accrued_today == 120
        assert status.is_due_day is False

    @pytest.mark.parametrize(
        "day,period",
        [(1, 1), (7, 1), (8, 2), (14, 2), (15, 3), (22, 4), (29, 4), (30, 4)],
    )
    def test_current_period(self, day: int, period: int):
        assert compute_status(make_record(), reference_date=april(day)).current_period == period

    def test_datetime_reference_is_truncated_to_date(self):
        from datetime import datetime

        status = compute_status(make_record(), reference_date=datetime(2025, 4, 23, 23, 59))
        assert status.day_diff == 22


class TestDueDays:
    """Checkpoint flags at offsets 6, 13, 20 and the last day of the cycle."""

    @pytest.mark.parametrize("day", [7, 14, 21, 30])
    def test_due_on_checkpoints(self, day: int):
        status = compute_status(make_record(), reference_date=april(day))
        assert status.is_due_day is True
        assert status.is_pre_due_day is False

    @pytest.mark.parametrize("day", [6, 13, 20, 29])
    def test_pre_due_on_day_before_checkpoint(self, day: int):
        status = compute_status(make_record(), reference_date=april(day))
        assert status.is_due_day is False
        assert status.is_pre_due_day is True

    @pytest.mark.parametrize("day", [1, 5, 8, 12, 15, 22, 28])
    def test_not_due_next_to_checkpoints(self, day: int):
        status = compute_status(make_record(), reference_date=april(day))
        assert status.is_due_day is False
        assert status.is_pre_due_day is False

    def test_last_checkpoint_in_31_day_cycle(self):
        status = compute_status(make_record(), reference_date=date(2025, 5, 31))
        assert status.total_days_in_cycle == 31
        assert status.is_due_day is True

    def test_last_checkpoint_in_february(self):
        status = compute_status(make_record(), reference_date=date(2025, 2, 28))
        assert status.total_days_in_cycle == 28
        assert status.is_due_day is True

    def test_checkpoint_steps_obligation(self):
        before = compute_status(make_record(), reference_date=april(6))
        on = compute_status(make_record(), reference_date=april(7))
        assert before.expected_paid == 0
        assert on.expected_paid == 900
        assert on.unpaid_rent == 900


class TestReminderMark:
    def test_reminded_today(self):
        record = make_record(last_reminded_date=REFERENCE)
        assert compute_status(record, reference_date=REFERENCE).is_reminded is True

    def test_reminder_expires_next_day(self):
        record = make_record(last_reminded_date=REFERENCE)
        tomorrow = REFERENCE + timedelta(days=1)
        assert compute_status(record, reference_date=tomorrow).is_reminded is False

    def test_never_reminded(self):
        assert compute_status(make_record(), reference_date=REFERENCE).is_reminded is False

    def test_reminder_date_as_string(self):
        record = make_record(last_reminded_date="2025-04-23")
        assert compute_status(record, reference_date=REFERENCE).is_reminded is True


# =============================================================================
# Risk Classification Tests
# =============================================================================

class TestClassifyRisk:
    """Tests for classify_risk() and rule resolution."""

    def test_smart_tiered_thresholds(self):
        assert classify_risk(1300, 0, 900) == RiskLevel.SEVERE
        assert classify_risk(1299.99, 900, 900) == RiskLevel.HIGH
        assert classify_risk(1299.99, 899.99, 900) == RiskLevel.NORMAL

    def test_zero_rent_with_carried_arrears_is_high(self):
        assert classify_risk(500, 500, 0) == RiskLevel.HIGH

    def test_zero_rent_without_debt_is_normal(self):
        assert classify_risk(0, 0, 0) == RiskLevel.NORMAL

    def test_legacy_rent_total_rule(self):
        status = compute_status(make_record(actual_paid=900), HighlightRule.RENT_TOTAL_1000, REFERENCE)
        assert status.risk_level == RiskLevel.HIGH  # 1800 >= 1000, never severe

        status = compute_status(make_record(actual_paid=1800), HighlightRule.RENT_TOTAL_1000, REFERENCE)
        assert status.unpaid_rent == 900
        assert status.risk_level == RiskLevel.NORMAL

    def test_legacy_total_debt_rule(self):
        status = compute_status(make_record(actual_paid=900), "total_1200", REFERENCE)
        assert status.risk_level == RiskLevel.HIGH

        status = compute_status(make_record(actual_paid=1600), "total_1200", REFERENCE)
        assert status.total_debt == 1160
        assert status.risk_level == RiskLevel.NORMAL

    @pytest.mark.parametrize("rule", ["purple", "", None, 42])
    def test_unknown_rule_resolves_to_smart_tiered(self, rule):
        status = compute_status(make_record(actual_paid=900), rule, REFERENCE)
        assert status.risk_level == RiskLevel.SEVERE

    def test_rule_parse(self):
        assert HighlightRule.parse(" TOTAL_1200 ") is HighlightRule.TOTAL_1200
        assert HighlightRule.parse("nonsense") is HighlightRule.SMART_TIERED
        assert HighlightRule.TOTAL_1200.is_legacy is True
        assert HighlightRule.SMART_TIERED.is_legacy is False


class TestViolationCost:
    def test_points_and_fines(self):
        assert calculate_violation_cost(make_record(violation_points=4, violation_fine=1050)) == 1850

    def test_no_violations(self):
        assert calculate_violation_cost(make_record()) == 0


# =============================================================================
# Malformed Input Tests
# =============================================================================

class TestMalformedInput:
    """The engine never raises and never yields NaN/inf."""

    def test_unparseable_contract_date_falls_back_to_reference(self):
        record = DriverRecord.from_dict({
            "id": "drv-x",
            "contractStartDate": "not-a-date",
            "totalPayable": 3600,
        })
        status = compute_status(record, reference_date=REFERENCE)

        assert record.contract_start_date is None
        assert status.computed_bill_date == REFERENCE.isoformat()
        assert status.day_diff == 0
        assert status.current_period == 1
        assert status.expected_paid == 0
        assert math.isfinite(status.total_debt)

    def test_raw_string_contract_date_is_tolerated(self):
        status = compute_status(make_record(contract_start_date="garbage"), reference_date=REFERENCE)
        assert status.computed_bill_date == REFERENCE.isoformat()

    def test_zero_payable(self):
        status = compute_status(make_record(total_payable=0), reference_date=REFERENCE)

        assert status.weekly_rent == 0
        assert status.unpaid_rent == 0
        assert status.total_debt == 0
        assert status.risk_level == RiskLevel.NORMAL

    def test_zero_payable_with_carried_arrears(self):
        status = compute_status(
            make_record(total_payable=0, overdue_rent_amount=500),
            reference_date=REFERENCE,
        )
        assert status.unpaid_rent == 500
        assert status.total_debt == 500
        assert status.risk_level == RiskLevel.HIGH

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf"), -100, None, "abc"])
    def test_corrupt_amounts_clamp_to_zero(self, bad):
        record = make_record(
            total_payable=bad,
            actual_paid=bad,
            overdue_rent_amount=bad,
            violation_points=bad,
            violation_fine=bad,
        )
        status = compute_status(record, reference_date=REFERENCE)

        for value in (
            status.unpaid_rent,
            status.total_debt,
            status.violation_cost,
            status.expected_paid,
            status.rent_accrued_today,
            status.weekly_rent,
        ):
            assert math.isfinite(value)
            assert value == 0

    def test_overflowing_violation_cost_clamps_to_zero(self):
        """1e306 points times the per-point fee overflows to inf."""
        status = compute_status(make_record(violation_points=10**306), reference_date=REFERENCE)

        assert status.violation_cost == 0
        assert status.total_debt == 2760
        assert math.isfinite(status.total_debt)

    def test_integer_too_large_for_float(self):
        status = compute_status(make_record(violation_points=10**400), reference_date=REFERENCE)
        assert status.violation_cost == 0

    def test_overflowing_sums_stay_finite(self):
        record = make_record(total_payable=1e308, overdue_rent_amount=1.7e308)
        status = compute_status(record, reference_date=REFERENCE)

        for value in (
            status.unpaid_rent,
            status.total_debt,
            status.arrears_amount,
            status.rent_accrued_today,
            status.expected_paid,
        ):
            assert math.isfinite(value)
            assert value >= 0

    def test_negative_payment_counts_as_nothing_paid(self):
        negative = compute_status(make_record(actual_paid=-500), reference_date=REFERENCE)
        zero = compute_status(make_record(actual_paid=0), reference_date=REFERENCE)
        assert negative == zero


# =============================================================================
# Property Tests
# =============================================================================

class TestStatusProperties:
    """Invariants checked over small grids of inputs."""

    PAID = [0, 450, 900, 1800, 2700, 3600, 5000]
    OVERDUE = [0, 100, 900, 2500]
    DAYS = [1, 6, 7, 13, 14, 20, 21, 23, 29, 30]

    def test_total_debt_is_never_negative_and_covers_arrears(self):
        for paid in self.PAID:
            for overdue in self.OVERDUE:
                for day in self.DAYS:
                    record = make_record(actual_paid=paid, overdue_rent_amount=overdue)
                    status = compute_status(record, reference_date=april(day))
                    assert status.total_debt >= 0
                    assert status.total_debt >= overdue
                    assert status.unpaid_rent >= overdue

    def test_unpaid_rent_monotonic_in_overdue(self):
        for paid in self.PAID:
            for day in self.DAYS:
                values = [
                    compute_status(
                        make_record(actual_paid=paid, overdue_rent_amount=overdue),
                        reference_date=april(day),
                    ).unpaid_rent
                    for overdue in self.OVERDUE
                ]
                assert values == sorted(values)

    def test_unpaid_rent_non_increasing_in_paid(self):
        for overdue in self.OVERDUE:
            for day in self.DAYS:
                values = [
                    compute_status(
                        make_record(actual_paid=paid, overdue_rent_amount=overdue),
                        reference_date=april(day),
                    ).unpaid_rent
                    for paid in self.PAID
                ]
                assert values == sorted(values, reverse=True)

    def test_idempotent(self):
        record = make_record(actual_paid=900, violation_points=4, violation_fine=1050)
        first = compute_status(record, HighlightRule.SMART_TIERED, REFERENCE)
        second = compute_status(record, HighlightRule.SMART_TIERED, REFERENCE)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_record_is_not_mutated(self):
        record = make_record(actual_paid=900)
        before = record.to_dict()
        compute_status(record, reference_date=REFERENCE)
        assert record.to_dict() == before
