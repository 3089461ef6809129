"""
Base schemas shared by every endpoint.

Provides:
- UTCDatetime, a datetime annotation that serializes with a Z suffix
- The response envelope: every body carries ``success`` plus either
  ``data`` or ``message``
- The pagination block attached to list responses
"""

from datetime import datetime
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# Custom datetime type that serializes with Z suffix for UTC
# Usage: created_at: UTCDatetime instead of created_at: datetime
UTCDatetime = Annotated[
    datetime,
    PlainSerializer(
        lambda dt: dt.strftime("%Y-%m-%dT%H:%M:%SZ") if dt else None,
        return_type=str,
    ),
]

# Optional version for nullable datetime fields
UTCDatetimeOptional = Annotated[
    datetime | None,
    PlainSerializer(
        lambda dt: dt.strftime("%Y-%m-%dT%H:%M:%SZ") if dt else None,
        return_type=str | None,
    ),
]

DataT = TypeVar("DataT")


class ApiResponse(BaseModel):
    """Envelope fields common to all successful responses."""

    success: bool = True
    message: str | None = None


class MessageResponse(ApiResponse):
    """Envelope for operations that only report an outcome."""

    message: str


class DataResponse(ApiResponse, Generic[DataT]):
    """Envelope wrapping a payload under ``data``."""

    data: DataT


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    success: bool = False
    message: str
    error: str | None = None


class Pagination(BaseModel):
    """Pagination block; ``hasMore`` is true while rows remain past this page."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    limit: int
    offset: int
    has_more: bool = Field(serialization_alias="hasMore")

    @classmethod
    def build(cls, total: int, limit: int, offset: int) -> "Pagination":
        return cls(total=total, limit=limit, offset=offset, has_more=offset + limit < total)
