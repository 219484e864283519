"""Collection board and reminder Pydantic schemas."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from src.application.dto import BoardRequest, BoardResult
from src.service.billing import FilterConfig, HighlightRule

from .driver import DriverRecordSchema
from .status import HighlightSchema, ReminderSchema, RiskStatusSchema


class FilterSchema(BaseModel):
    """Minimum-amount filters; omitted fields are disabled."""

    min_arrears: Optional[float] = Field(None, ge=0, examples=[500])
    min_violation_cost: Optional[float] = Field(None, ge=0)
    min_total_debt: Optional[float] = Field(None, ge=0)

    def to_config(self) -> FilterConfig:
        return FilterConfig(
            min_arrears=self.min_arrears,
            min_violation_cost=self.min_violation_cost,
            min_total_debt=self.min_total_debt,
        )


class BoardRequestSchema(BaseModel):
    """Schema for POST /v1/board request body."""

    records: List[DriverRecordSchema] = Field(..., max_length=5000)
    highlight_rule: Optional[str] = Field(None, examples=["smart_tiered"])
    reference_date: Optional[date] = None
    hide_remind_status: bool = False
    search: Optional[str] = Field(None, max_length=100, description="Name or plate fragment")
    filters: FilterSchema = Field(default_factory=FilterSchema)
    tier: Optional[str] = Field(
        None,
        description="severe, high, normal or due; unknown values disable the tier filter",
        examples=["severe"],
    )

    def to_request(self) -> BoardRequest:
        return BoardRequest(
            records=[r.to_entity() for r in self.records],
            rule=HighlightRule.parse(self.highlight_rule),
            reference_date=self.reference_date,
            hide_remind_status=self.hide_remind_status,
            search=self.search,
            filters=self.filters.to_config(),
            tier=self.tier,
        )


class TierCountsSchema(BaseModel):
    severe: int = Field(..., ge=0)
    high: int = Field(..., ge=0)
    due: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class BoardRowSchema(BaseModel):
    record_id: str
    name: str
    license_plate: str
    status: RiskStatusSchema
    highlight: HighlightSchema
    reminder: Optional[ReminderSchema] = None
    rank_score: float


class BoardResponseSchema(BaseModel):
    """Schema for POST /v1/board response body."""

    reference_date: date
    highlight_rule: str
    counts: TierCountsSchema
    rows: List[BoardRowSchema] = Field(..., description="Highest rank score first")

    @classmethod
    def from_result(cls, result: BoardResult) -> "BoardResponseSchema":
        return cls(
            reference_date=result.reference_date,
            highlight_rule=result.rule.value,
            counts=TierCountsSchema(**result.counts.to_dict()),
            rows=[
                BoardRowSchema(
                    record_id=row.record.id,
                    name=row.record.name,
                    license_plate=row.record.license_plate,
                    status=RiskStatusSchema.from_status(row.status),
                    highlight=HighlightSchema.from_highlight(row.highlight),
                    reminder=ReminderSchema.from_quote(row.reminder),
                    rank_score=row.rank_score,
                )
                for row in result.rows
            ],
        )


class ReminderToggleRequestSchema(BaseModel):
    """Schema for POST /v1/reminder/toggle request body."""

    record: DriverRecordSchema
    reference_date: Optional[date] = None


class ReminderToggleResponseSchema(BaseModel):
    """Schema for POST /v1/reminder/toggle response body."""

    record: DriverRecordSchema
    is_reminded: bool
