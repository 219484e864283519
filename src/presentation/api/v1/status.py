"""Risk status API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.services import BillingService
from src.core.dependencies import get_billing_service
from src.presentation.schemas import (
    StatusRequestSchema,
    StatusResponseSchema,
    ErrorResponseSchema,
)

status_router = APIRouter(
    prefix="/status",
    responses={
        422: {"description": "Malformed request body"},
    },
)


@status_router.post(
    "",
    response_model=StatusResponseSchema,
    status_code=200,
    summary="Compute Risk Status",
    description="""
    Compute the billing cycle, arrears and risk tier of one driver record.

    The record is supplied by the caller; nothing is stored. Malformed dates
    and amounts inside the record degrade to defaults instead of failing.
    """,
    responses={
        200: {"description": "Status computed"},
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
)
async def compute_record_status(
    request: StatusRequestSchema,
    billing_service: Annotated[BillingService, Depends(get_billing_service)],
) -> StatusResponseSchema:
    report = billing_service.evaluate(
        record=request.record.to_entity(),
        rule=request.highlight_rule,
        reference_date=request.reference_date,
        hide_remind_status=request.hide_remind_status,
    )
    return StatusResponseSchema.from_report(report)
