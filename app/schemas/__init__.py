"""
Pydantic schemas for API responses and requests
"""

from app.schemas.artwork import (
    ArtworkChanges,
    ArtworkDetail,
    ArtworkListData,
    ArtworkResponse,
    ReviewRequest,
    ReviewResult,
)
from app.schemas.base import (
    ApiResponse,
    DataResponse,
    ErrorResponse,
    MessageResponse,
    Pagination,
)
from app.schemas.common import TagResponse, UserResponse
from app.schemas.gallery import (
    GalleryCreate,
    GalleryDetail,
    GalleryListData,
    GalleryResponse,
    GallerySummary,
    GalleryUpdate,
)

__all__ = [
    # Envelope
    "ApiResponse",
    "DataResponse",
    "ErrorResponse",
    "MessageResponse",
    "Pagination",
    # Shared
    "TagResponse",
    "UserResponse",
    # Artworks
    "ArtworkChanges",
    "ArtworkDetail",
    "ArtworkListData",
    "ArtworkResponse",
    "ReviewRequest",
    "ReviewResult",
    # Galleries
    "GalleryCreate",
    "GalleryDetail",
    "GalleryListData",
    "GalleryResponse",
    "GallerySummary",
    "GalleryUpdate",
]
