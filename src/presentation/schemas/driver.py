"""Driver record Pydantic schema (camelCase ledger wire format)."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.domain.entities.driver import DriverRecord

# Ledger exports carry blanks, nulls and stray text in numeric columns;
# DriverRecord.from_dict coerces them to 0.
LooseNumber = Optional[Union[float, str]]


class DriverRecordSchema(BaseModel):
    """
    Schema for a driver lease record as stored by the ledger.

    Dates, modes and amounts are accepted loosely; DriverRecord.from_dict
    resolves unknown modes to defaults, unparseable dates to None and
    non-numeric or non-finite amounts to 0.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "id": "drv-001",
                    "name": "张三",
                    "licensePlate": "粤ADX8576",
                    "contractStartDate": "2023-11-22",
                    "rentDuration": "12",
                    "mode": "kuaikuai",
                    "violationMode": "kuaikuai",
                    "totalPayable": 3600,
                    "actualPaid": 900,
                    "overdueRentAmount": 0,
                    "violationCount": 2,
                    "violationPoints": 4,
                    "violationFine": 400,
                    "lastRemindedDate": None,
                }
            ]
        },
    )

    id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Opaque unique record key",
        examples=["drv-001"],
    )
    name: str = Field("", max_length=255, description="Driver name")
    license_plate: str = Field("", alias="licensePlate", max_length=64)
    contract_start_date: Optional[str] = Field(
        None,
        alias="contractStartDate",
        description="Contract start (billing anchor), e.g. 2023-11-22",
    )
    rent_duration: Optional[Union[str, int]] = Field(None, alias="rentDuration")
    mode: Optional[str] = Field(None, description="kuaikuai or kuaiwen")
    violation_mode: Optional[str] = Field(None, alias="violationMode")
    total_payable: LooseNumber = Field(0, alias="totalPayable", description="Full rent of the cycle")
    actual_paid: LooseNumber = Field(0, alias="actualPaid", description="Paid toward the current cycle")
    overdue_rent_amount: LooseNumber = Field(0, alias="overdueRentAmount", description="Carried-over arrears")
    violation_count: LooseNumber = Field(0, alias="violationCount")
    violation_points: LooseNumber = Field(0, alias="violationPoints")
    violation_fine: LooseNumber = Field(0, alias="violationFine")
    violation_deadline: Optional[str] = Field(None, alias="violationDeadline")
    history_violation_count: LooseNumber = Field(0, alias="historyViolationCount")
    history_violation_points: LooseNumber = Field(0, alias="historyViolationPoints")
    history_violation_fine: LooseNumber = Field(0, alias="historyViolationFine")
    last_reminded_date: Optional[str] = Field(None, alias="lastRemindedDate")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Ensure id is not just whitespace."""
        if not v.strip():
            raise ValueError("id cannot be empty or whitespace")
        return v.strip()

    def to_entity(self) -> DriverRecord:
        return DriverRecord.from_dict(self.model_dump(by_alias=True))

    @classmethod
    def from_entity(cls, record: DriverRecord) -> "DriverRecordSchema":
        return cls.model_validate(record.to_dict())
