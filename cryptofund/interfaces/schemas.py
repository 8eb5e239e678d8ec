"""
Pydantic schemas shared by every router.
"""

from typing import Any

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: str
    detail: str | None = None


class ValidationErrorResponse(BaseModel):
    """Error response for rejected request payloads."""

    error: str
    details: list[dict[str, Any]]
