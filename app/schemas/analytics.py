"""
Pydantic schemas for analytics endpoints
"""

from pydantic import BaseModel

from app.config import ArtworkStatus


class SiteTotals(BaseModel):
    total_artworks: int
    total_artists: int
    total_galleries: int


class GalleryViews(BaseModel):
    """Gallery ranked by views."""

    gallery_id: int
    name: str
    view_count: int
    curator_name: str | None = None
    artwork_count: int | None = None


class ArtworkViews(BaseModel):
    """Artwork ranked by views or likes."""

    artwork_id: int
    title: str
    image_url: str
    view_count: int
    like_count: int
    artist_name: str | None = None
    status: ArtworkStatus | None = None


class ArtworkStatusCounts(BaseModel):
    pending: int = 0
    approved: int = 0
    rejected: int = 0


class SiteStats(BaseModel):
    """Public, site-wide aggregates."""

    totals: SiteTotals
    top_galleries: list[GalleryViews]
    top_artworks: list[ArtworkViews]


class ArtistStats(BaseModel):
    """Aggregates over one artist's submissions."""

    total_views: int
    total_likes: int
    artwork_counts: ArtworkStatusCounts
    top_artworks: list[ArtworkViews]
    featured_in: list[GalleryViews]


class CuratorStats(BaseModel):
    """Aggregates over one curator's galleries."""

    total_views: int
    total_artworks: int
    gallery_views: list[GalleryViews]
    top_artworks: list[ArtworkViews]
