"""
Common query parameter models for API endpoints.

These Pydantic models are used with FastAPI's Depends() to provide reusable
query parameter sets, reducing code duplication across routes.
"""

from pydantic import BaseModel, Field

from app.config import settings


class PaginationParams(BaseModel):
    """Common limit/offset pagination query parameters."""

    limit: int = Field(
        default=settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="Items per page",
    )
    offset: int = Field(default=0, ge=0, description="Rows to skip")
