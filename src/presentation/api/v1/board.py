"""Collection board and reminder API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.services import BillingService
from src.core.dependencies import get_billing_service
from src.presentation.schemas import (
    BoardRequestSchema,
    BoardResponseSchema,
    DriverRecordSchema,
    ErrorResponseSchema,
    ReminderToggleRequestSchema,
    ReminderToggleResponseSchema,
)

board_router = APIRouter(
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
)


@board_router.post(
    "/board",
    response_model=BoardResponseSchema,
    status_code=200,
    summary="Rank Collection Board",
    description="""
    Search, filter and rank a batch of driver records against a single
    reference date.

    Rows are ordered by rank score: unreminded due-today first, then
    unreminded due-tomorrow, then severe, then high risk, each by
    descending total debt.
    """,
    responses={
        200: {"description": "Board ranked"},
    },
)
async def rank_board(
    request: BoardRequestSchema,
    billing_service: Annotated[BillingService, Depends(get_billing_service)],
) -> BoardResponseSchema:
    result = billing_service.build_board(request.to_request())
    return BoardResponseSchema.from_result(result)


@board_router.post(
    "/reminder/toggle",
    response_model=ReminderToggleResponseSchema,
    status_code=200,
    summary="Toggle Reminder Mark",
    description="""
    Mark a record as chased for the reference date, or clear the mark if it
    was already set for that day. Returns the updated record for the caller
    to store.
    """,
)
async def toggle_reminder(
    request: ReminderToggleRequestSchema,
    billing_service: Annotated[BillingService, Depends(get_billing_service)],
) -> ReminderToggleResponseSchema:
    updated = billing_service.toggle_reminder(
        record=request.record.to_entity(),
        reference_date=request.reference_date,
    )
    return ReminderToggleResponseSchema(
        record=DriverRecordSchema.from_entity(updated),
        is_reminded=updated.last_reminded_date is not None,
    )
