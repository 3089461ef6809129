"""
Pydantic schemas for Gallery endpoints
"""

from pydantic import BaseModel, Field, field_validator

from app.models.gallery import GalleryBase
from app.schemas.artwork import ArtworkResponse
from app.schemas.base import Pagination, UTCDatetime


class GalleryCreate(GalleryBase):
    """Schema for creating a new gallery"""

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Gallery name is required")
        return v


class GalleryUpdate(BaseModel):
    """Schema for updating a gallery - all fields optional"""

    name: str | None = Field(default=None, max_length=100)
    description: str | None = None
    is_published: bool | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Gallery name cannot be blank")
        return v


class GalleryResponse(GalleryBase):
    """Gallery row as stored."""

    gallery_id: int
    curator_id: int
    is_published: bool
    view_count: int = 0
    created_at: UTCDatetime
    updated_at: UTCDatetime

    model_config = {"from_attributes": True}


class GallerySummary(GalleryResponse):
    """Gallery card for list pages: curator name, size and tag names."""

    curator_name: str | None = None
    artwork_count: int = 0
    tags: list[str] = Field(default_factory=list)


class GalleryArtworkItem(ArtworkResponse):
    """Member artwork with its position in the gallery."""

    display_order: int


class GalleryDetail(GalleryResponse):
    """Single gallery with curator profile and ordered member artworks."""

    curator_name: str | None = None
    curator_image: str | None = None
    curator_bio: str | None = None
    artworks: list[GalleryArtworkItem] = Field(default_factory=list)


class GalleryListData(BaseModel):
    """Page of galleries with its pagination block."""

    galleries: list[GallerySummary]
    pagination: Pagination


class AddArtworkRequest(BaseModel):
    """Add an approved artwork to a gallery."""

    artwork_id: int
    display_order: int | None = Field(
        default=None, description="Defaults to one past the current last position"
    )


class MembershipResponse(BaseModel):
    """A gallery membership row."""

    gallery_id: int
    artwork_id: int
    display_order: int

    model_config = {"from_attributes": True}


class ArtworkOrder(BaseModel):
    """One (artwork, position) pair; pairs missing either value are skipped."""

    artwork_id: int | None = None
    display_order: int | None = None


class ReorderRequest(BaseModel):
    """New positions for some or all member artworks."""

    artwork_orders: list[ArtworkOrder]
