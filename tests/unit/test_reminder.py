"""Unit tests for reminder quotes."""

from datetime import date

from src.domain.entities.driver import DriverRecord
from src.service.billing import (
    ReminderKind,
    build_reminder_quote,
    compute_status,
    expected_due_amount,
    should_remind,
)


def make_record(**overrides) -> DriverRecord:
    fields = dict(
        id="drv-001",
        name="张三",
        license_plate="粤ADX8576",
        contract_start_date=date(2024, 11, 1),
        total_payable=3600,
        actual_paid=500,
        overdue_rent_amount=200,
    )
    fields.update(overrides)
    return DriverRecord(**fields)


# =============================================================================
# Reminder Quote Tests
# =============================================================================

class TestReminderQuote:
    def test_due_tomorrow_quotes_next_installment(self):
        """Apr 13 is the day before the second checkpoint."""
        record = make_record()
        status = compute_status(record, reference_date=date(2025, 4, 13))

        assert status.is_pre_due_day is True
        assert status.unpaid_rent == 600
        # (900 + 900 - 500) + 200
        assert expected_due_amount(record, status) == 1500

        quote = build_reminder_quote(record, status)
        assert quote.kind is ReminderKind.DUE_TOMORROW
        assert quote.amount == 1500

    def test_due_today_quotes_unpaid_rent(self):
        record = make_record()
        status = compute_status(record, reference_date=date(2025, 4, 14))

        quote = build_reminder_quote(record, status)
        assert quote.kind is ReminderKind.DUE_TODAY
        assert quote.amount == status.unpaid_rent == 1500

    def test_paid_ahead_quotes_only_carried_arrears(self):
        record = make_record(actual_paid=3600)
        status = compute_status(record, reference_date=date(2025, 4, 13))
        assert expected_due_amount(record, status) == 200

    def test_no_quote_between_checkpoints(self):
        record = make_record()
        status = compute_status(record, reference_date=date(2025, 4, 10))
        assert build_reminder_quote(record, status) is None
        assert should_remind(status) is False

    def test_should_remind(self):
        pending = compute_status(make_record(), reference_date=date(2025, 4, 13))
        done = compute_status(
            make_record(last_reminded_date=date(2025, 4, 13)),
            reference_date=date(2025, 4, 13),
        )
        assert should_remind(pending) is True
        assert should_remind(done) is False
