"""Health check endpoint for service monitoring."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src import __version__
from src.core.config import settings
from src.core.dependencies import get_reference_clock
from src.domain.interfaces import ReferenceClock

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    timezone: str
    today: date


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns service health and the date requests without a reference_date are evaluated on.",
)
async def health_check(
    clock: Annotated[ReferenceClock, Depends(get_reference_clock)],
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        timezone=settings.timezone,
        today=clock.today(),
    )
