"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["DUPLICATE_RECORD"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Duplicate record ids in batch: drv-001"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "DUPLICATE_RECORD",
                    "message": "Duplicate record ids in batch: drv-001",
                    "request_id": "abc123",
                }
            ]
        }
    }
