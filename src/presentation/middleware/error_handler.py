"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from src.domain.exceptions import (
    DomainException,
    DuplicateDriverRecordException,
    InvalidBoardRequestException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses. Malformed request
    bodies never get here; FastAPI answers those with 422.
    """

    @app.exception_handler(DuplicateDriverRecordException)
    async def duplicate_record_handler(
        request: Request,
        exc: DuplicateDriverRecordException,
    ) -> JSONResponse:
        """Handle batches with repeated record ids."""
        logger.warning("duplicate_record_ids", record_ids=exc.record_ids)
        return JSONResponse(status_code=400, content=exc.to_payload(get_request_id()))

    @app.exception_handler(InvalidBoardRequestException)
    async def invalid_request_handler(
        request: Request,
        exc: InvalidBoardRequestException,
    ) -> JSONResponse:
        logger.info("invalid_board_request", message=exc.message)
        return JSONResponse(status_code=400, content=exc.to_payload(get_request_id()))

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning("domain_exception", code=exc.code, message=exc.message)
        return JSONResponse(status_code=400, content=exc.to_payload(get_request_id()))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
                "request_id": get_request_id(),
            },
        )
