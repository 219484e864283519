"""Risk status Pydantic schemas."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.application.dto import StatusReport
from src.service.billing import Highlight, ReminderQuote, RiskStatus, WeeklyInstallment

from .driver import DriverRecordSchema


class StatusRequestSchema(BaseModel):
    """Schema for POST /v1/status request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "record": {
                        "id": "drv-001",
                        "name": "张三",
                        "licensePlate": "粤ADX8576",
                        "contractStartDate": "2023-11-22",
                        "totalPayable": 3600,
                        "actualPaid": 900,
                    },
                    "highlight_rule": "smart_tiered",
                    "reference_date": "2025-04-23",
                }
            ]
        }
    )

    record: DriverRecordSchema
    highlight_rule: Optional[str] = Field(
        None,
        description="smart_tiered (default); unknown identifiers fall back to it",
        examples=["smart_tiered"],
    )
    reference_date: Optional[date] = Field(
        None,
        description="Evaluation date; defaults to today in the ledger timezone",
    )
    hide_remind_status: Optional[bool] = Field(
        None,
        description="Ignore due-day states for highlight and rank score",
    )


class RiskStatusSchema(BaseModel):
    """Billing and risk snapshot."""

    period_range: str = Field(..., examples=["2025/04/01-2025/04/30"])
    current_period: int = Field(..., ge=1, le=4)
    unpaid_rent: float = Field(..., ge=0, description="Stepped rent arrears incl. carried-over")
    total_debt: float = Field(..., ge=0, description="Settlement debt incl. violations")
    arrears_amount: float = Field(..., ge=0)
    real_time_arrears: float = Field(..., ge=0)
    violation_cost: float = Field(..., ge=0)
    risk_level: str = Field(..., examples=["high"])
    is_due_day: bool
    is_pre_due_day: bool
    is_reminded: bool
    is_arrears: bool
    is_high_risk: bool
    computed_bill_date: str = Field(..., examples=["2025-04-01"])
    expected_paid: float = Field(..., ge=0)
    current_cycle_arrears: float = Field(..., ge=0)
    day_diff: int = Field(..., ge=0)
    total_days_in_cycle: int = Field(..., ge=1)
    weekly_rent: float = Field(..., ge=0)
    rent_accrued_today: float = Field(..., ge=0)

    @classmethod
    def from_status(cls, status: RiskStatus) -> "RiskStatusSchema":
        return cls(**status.to_dict())


class HighlightSchema(BaseModel):
    label: Optional[str] = Field(None, examples=["due_today"])
    accent_color: str = Field(..., examples=["#0000ff"])

    @classmethod
    def from_highlight(cls, highlight: Highlight) -> "HighlightSchema":
        return cls(label=highlight.label, accent_color=highlight.accent_color)


class ReminderSchema(BaseModel):
    kind: str = Field(..., examples=["due_tomorrow"])
    amount: float = Field(..., ge=0)

    @classmethod
    def from_quote(cls, quote: Optional[ReminderQuote]) -> Optional["ReminderSchema"]:
        if quote is None:
            return None
        return cls(kind=quote.kind.value, amount=round(quote.amount, 2))


class WeeklyInstallmentSchema(BaseModel):
    week: int = Field(..., ge=1, le=4)
    due_date: date
    cumulative_due: float = Field(..., ge=0)
    covered: bool
    passed: bool

    @classmethod
    def from_installment(cls, inst: WeeklyInstallment) -> "WeeklyInstallmentSchema":
        return cls(
            week=inst.week,
            due_date=inst.due_date,
            cumulative_due=inst.cumulative_due,
            covered=inst.covered,
            passed=inst.passed,
        )


class StatusResponseSchema(BaseModel):
    """Schema for POST /v1/status response body."""

    record_id: str
    reference_date: date
    status: RiskStatusSchema
    highlight: HighlightSchema
    reminder: Optional[ReminderSchema] = Field(
        None,
        description="Present on a due day or the day before",
    )
    schedule: List[WeeklyInstallmentSchema]
    rank_score: float

    @classmethod
    def from_report(cls, report: StatusReport) -> "StatusResponseSchema":
        return cls(
            record_id=report.record.id,
            reference_date=report.reference_date,
            status=RiskStatusSchema.from_status(report.status),
            highlight=HighlightSchema.from_highlight(report.highlight),
            reminder=ReminderSchema.from_quote(report.reminder),
            schedule=[WeeklyInstallmentSchema.from_installment(i) for i in report.schedule],
            rank_score=report.rank_score,
        )
