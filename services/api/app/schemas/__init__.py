"""Pydantic schemas for API request/response validation."""

from app.schemas.common import ErrorDetail, ErrorResponse
from app.schemas.search import (
    CharacterRecord,
    MediaRecord,
    ResultSet,
    SearchResponse,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "CharacterRecord",
    "MediaRecord",
    "ResultSet",
    "SearchResponse",
]
