"""
Curator review API endpoints.

Every route requires the curator role.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import PaginationParams
from app.core.auth import CuratorUser
from app.core.database import get_db
from app.schemas.artwork import ArtworkListData, ReviewRequest, ReviewResult
from app.schemas.base import DataResponse, Pagination
from app.schemas.common import TagResponse
from app.services import artworks as artwork_service
from app.services import tagging

router = APIRouter(prefix="/curator", tags=["curator"])


@router.get("/pending", response_model=DataResponse[ArtworkListData])
async def list_pending(
    pagination: Annotated[PaginationParams, Depends()],
    current_user: CuratorUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[ArtworkListData]:
    """Review queue: pending artworks, oldest first."""
    artworks, total = await artwork_service.pending_queue(
        db, limit=pagination.limit, offset=pagination.offset
    )
    return DataResponse(
        data=ArtworkListData(
            artworks=artworks,
            pagination=Pagination.build(total, pagination.limit, pagination.offset),
        )
    )


@router.post("/review/{artwork_id}", response_model=DataResponse[ReviewResult])
async def review_artwork(
    artwork_id: Annotated[int, Path(description="Artwork ID")],
    review: ReviewRequest,
    current_user: CuratorUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[ReviewResult]:
    """
    Approve or reject a pending artwork.

    A non-empty ``tags`` list replaces the artwork's tags, creating any that
    do not exist yet.
    """
    result = await artwork_service.review_artwork(
        db,
        artwork_id,
        current_user,
        status=review.status,
        feedback=review.feedback,
        tags=review.tags,
    )
    return DataResponse(message=f"Artwork {result.status.value} successfully", data=result)


@router.get("/tags", response_model=DataResponse[list[TagResponse]])
async def list_tags(
    current_user: CuratorUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[list[TagResponse]]:
    """All tags, alphabetically."""
    tags = await tagging.list_all(db)
    return DataResponse(data=[TagResponse.model_validate(tag) for tag in tags])


@router.get("/history", response_model=DataResponse[ArtworkListData])
async def review_history(
    pagination: Annotated[PaginationParams, Depends()],
    current_user: CuratorUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[ArtworkListData]:
    """Artworks the caller has reviewed, most recent first."""
    artworks, total = await artwork_service.review_history(
        db, current_user, limit=pagination.limit, offset=pagination.offset
    )
    return DataResponse(
        data=ArtworkListData(
            artworks=artworks,
            pagination=Pagination.build(total, pagination.limit, pagination.offset),
        )
    )
