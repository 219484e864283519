"""Billing service - orchestrates status, board and reminder use cases."""

from datetime import date
from typing import Optional, Union

import structlog

from src.application.dto import BoardRequest, BoardResult, BoardRow, StatusReport
from src.core.metrics import record_legacy_rule, record_statuses, track_batch_latency
from src.domain.entities.driver import DriverRecord
from src.domain.exceptions import DuplicateDriverRecordException, InvalidBoardRequestException
from src.domain.interfaces import ReferenceClock
from src.service.billing import (
    DisplaySettings,
    HighlightRule,
    build_reminder_quote,
    build_weekly_schedule,
    compute_status,
    count_by_tier,
    evaluate_records,
    matches_search,
    matches_tier,
    rank_evaluated,
    rank_score,
    resolve_highlight,
    toggle_reminder,
)

logger = structlog.get_logger(__name__)


class BillingService:
    """
    Application service for the collection board.

    Reads the reference clock once per call and threads that date through
    every engine computation of the call.
    """

    def __init__(self, clock: ReferenceClock, display: DisplaySettings):
        self._clock = clock
        self._display = display

    def _resolve_rule(self, rule: Union[HighlightRule, str, None]) -> HighlightRule:
        resolved = HighlightRule.parse(rule if rule is not None else self._display.highlight_rule)
        if resolved.is_legacy:
            logger.warning("legacy_highlight_rule_used", rule=resolved.value)
            record_legacy_rule(resolved.value)
        return resolved

    def evaluate(
        self,
        record: DriverRecord,
        rule: Union[HighlightRule, str, None] = None,
        reference_date: Optional[date] = None,
        hide_remind_status: Optional[bool] = None,
    ) -> StatusReport:
        """
        Compute the full card view of one record.

        Args:
            record: Driver lease record
            rule: Highlight rule (defaults to the display setting)
            reference_date: Evaluation date (defaults to the clock)
            hide_remind_status: Ignore due-day states for highlight and rank

        Returns:
            StatusReport with status, highlight, reminder quote and schedule
        """
        reference_date = reference_date or self._clock.today()
        resolved_rule = self._resolve_rule(rule)
        hide = self._display.hide_remind_status if hide_remind_status is None else hide_remind_status

        status = compute_status(record, resolved_rule, reference_date)
        record_statuses([status])

        logger.info(
            "status_evaluated",
            record_id=record.id,
            reference_date=reference_date.isoformat(),
            risk_level=status.risk_level.value,
            total_debt=round(status.total_debt, 2),
            unpaid_rent=round(status.unpaid_rent, 2),
        )

        return StatusReport(
            record=record,
            status=status,
            reference_date=reference_date,
            highlight=resolve_highlight(status, self._display, hide),
            reminder=build_reminder_quote(record, status),
            schedule=build_weekly_schedule(record, reference_date),
            rank_score=rank_score(record, status, hide),
        )

    def build_board(self, request: BoardRequest) -> BoardResult:
        """
        Search, filter and rank a batch of records.

        Raises:
            InvalidBoardRequestException: If request validation fails
            DuplicateDriverRecordException: If two records share an id
        """
        errors = request.validate()
        if errors:
            raise InvalidBoardRequestException("; ".join(errors))

        duplicates = request.duplicate_ids()
        if duplicates:
            raise DuplicateDriverRecordException(duplicates)

        reference_date = request.reference_date or self._clock.today()
        rule = self._resolve_rule(request.rule)

        log = logger.bind(
            reference_date=reference_date.isoformat(),
            rule=rule.value,
            record_count=len(request.records),
        )

        with track_batch_latency(len(request.records)):
            searched = [r for r in request.records if matches_search(request.search, r)]
            evaluated = evaluate_records(searched, rule, reference_date)
            if request.filters.is_active:
                evaluated = [(r, s) for r, s in evaluated if request.filters.matches(s)]

            counts = count_by_tier(status for _, status in evaluated)
            selected = [(r, s) for r, s in evaluated if matches_tier(s, request.tier)]
            ranked = rank_evaluated(selected, request.hide_remind_status)

        record_statuses(status for _, status in evaluated)

        rows = [
            BoardRow(
                record=item.record,
                status=item.status,
                highlight=resolve_highlight(item.status, self._display, request.hide_remind_status),
                reminder=build_reminder_quote(item.record, item.status),
                rank_score=item.score,
            )
            for item in ranked
        ]

        log.info(
            "board_evaluated",
            shown=len(rows),
            severe=counts.severe,
            high=counts.high,
            due=counts.due,
        )

        return BoardResult(reference_date=reference_date, rule=rule, rows=rows, counts=counts)

    def toggle_reminder(
        self,
        record: DriverRecord,
        reference_date: Optional[date] = None,
    ) -> DriverRecord:
        """Mark or unmark a record as reminded for the reference date."""
        reference_date = reference_date or self._clock.today()
        updated = toggle_reminder(record, reference_date)

        logger.info(
            "reminder_toggled",
            record_id=record.id,
            reference_date=reference_date.isoformat(),
            reminded=updated.last_reminded_date is not None,
        )

        return updated
