"""
Pydantic schemas for Artwork endpoints
"""

from pydantic import BaseModel, Field

from app.config import ArtworkStatus
from app.models.artwork import ArtworkBase
from app.schemas.base import Pagination, UTCDatetime


class ArtworkResponse(ArtworkBase):
    """
    Schema for artwork response - what the list endpoints return.

    Joins in the artist's username and the artwork's tag names so clients
    can render cards without further lookups.
    """

    artwork_id: int
    artist_id: int
    artist_name: str | None = None
    image_url: str
    status: ArtworkStatus
    curator_feedback: str | None = None
    curator_id: int | None = None
    view_count: int = 0
    like_count: int = 0
    tags: list[str] = Field(default_factory=list)
    created_at: UTCDatetime
    updated_at: UTCDatetime

    model_config = {"from_attributes": True}


class ArtworkDetail(ArtworkResponse):
    """Single artwork with the artist's public profile."""

    artist_image: str | None = None
    artist_bio: str | None = None


class ArtworkListData(BaseModel):
    """Page of artworks with its pagination block."""

    artworks: list[ArtworkResponse]
    pagination: Pagination


class ArtworkChanges(BaseModel):
    """
    Descriptive fields an artist may change on a pending artwork.

    Only fields present in the request are set; the service treats an
    empty change set (and no new image) as "No fields to update".
    """

    title: str | None = None
    description: str | None = None
    medium: str | None = None
    dimensions: str | None = None


class ReviewRequest(BaseModel):
    """Curator decision on a pending artwork."""

    status: str = Field(..., description="approved or rejected")
    feedback: str | None = None
    tags: list[str] | None = Field(
        default=None, description="Replaces the artwork's tags when non-empty"
    )


class ReviewResult(BaseModel):
    """Outcome of a review."""

    artwork_id: int
    title: str
    status: ArtworkStatus
    feedback: str | None = None
    tags: list[str] = Field(default_factory=list)
