"""Common schemas used across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Structured error detail for unhandled failures."""

    code: str
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Error body returned by the global exception handler.

    Format: { "error": { "code": str, "message": str, "detail": object } }
    """

    error: ErrorDetail
