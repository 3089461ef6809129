"""
Analytics API endpoints
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import ArtistUser, CuratorUser
from app.core.database import get_db
from app.schemas.analytics import ArtistStats, CuratorStats, SiteStats
from app.schemas.base import DataResponse
from app.services import analytics

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/site", response_model=DataResponse[SiteStats])
async def get_site_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[SiteStats]:
    """Public site totals, top galleries by views and top artworks by likes."""
    return DataResponse(data=await analytics.site_stats(db))


@router.get("/artist", response_model=DataResponse[ArtistStats])
async def get_artist_stats(
    current_user: ArtistUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[ArtistStats]:
    """Views, likes and placements of the caller's artworks."""
    return DataResponse(data=await analytics.artist_stats(db, current_user))


@router.get("/curator", response_model=DataResponse[CuratorStats])
async def get_curator_stats(
    current_user: CuratorUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[CuratorStats]:
    """Views across the caller's galleries and their most viewed artworks."""
    return DataResponse(data=await analytics.curator_stats(db, current_user))
