"""
Galleries API endpoints
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import PaginationParams
from app.core.auth import CuratorUser, OptionalCurrentUser
from app.core.database import get_db
from app.schemas.base import DataResponse, MessageResponse, Pagination
from app.schemas.gallery import (
    AddArtworkRequest,
    GalleryCreate,
    GalleryDetail,
    GalleryListData,
    GalleryResponse,
    GalleryUpdate,
    MembershipResponse,
    ReorderRequest,
)
from app.services import galleries as gallery_service

router = APIRouter(prefix="/galleries", tags=["galleries"])


@router.get("", response_model=DataResponse[GalleryListData])
async def list_galleries(
    pagination: Annotated[PaginationParams, Depends()],
    db: Annotated[AsyncSession, Depends(get_db)],
    curator_id: Annotated[int | None, Query(description="Filter by curator user ID")] = None,
    tag: Annotated[
        str | None, Query(description="Tag carried by at least one member artwork")
    ] = None,
    search: Annotated[
        str | None, Query(description="Substring of name, description or curator name")
    ] = None,
) -> DataResponse[GalleryListData]:
    """Browse published galleries, newest first."""
    galleries, total = await gallery_service.list_galleries(
        db,
        curator_id=curator_id,
        tag=tag,
        search=search,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return DataResponse(
        data=GalleryListData(
            galleries=galleries,
            pagination=Pagination.build(total, pagination.limit, pagination.offset),
        )
    )


@router.get("/curator/own", response_model=DataResponse[GalleryListData])
async def list_my_galleries(
    pagination: Annotated[PaginationParams, Depends()],
    current_user: CuratorUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[GalleryListData]:
    """The caller's galleries, drafts included, most recently updated first."""
    galleries, total = await gallery_service.list_own_galleries(
        db, current_user, limit=pagination.limit, offset=pagination.offset
    )
    return DataResponse(
        data=GalleryListData(
            galleries=galleries,
            pagination=Pagination.build(total, pagination.limit, pagination.offset),
        )
    )


@router.get("/{gallery_id}", response_model=DataResponse[GalleryDetail])
async def get_gallery(
    gallery_id: Annotated[int, Path(description="Gallery ID")],
    current_user: OptionalCurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[GalleryDetail]:
    """Get a gallery with its artworks in display order. Counts a view."""
    gallery = await gallery_service.read_gallery(db, gallery_id, current_user)
    return DataResponse(data=gallery)


@router.post(
    "", response_model=DataResponse[GalleryResponse], status_code=status.HTTP_201_CREATED
)
async def create_gallery(
    data: GalleryCreate,
    current_user: CuratorUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[GalleryResponse]:
    """Create an empty, unpublished gallery."""
    gallery = await gallery_service.create_gallery(db, current_user, data)
    return DataResponse(message="Gallery created successfully", data=gallery)


@router.put("/{gallery_id}", response_model=DataResponse[GalleryResponse])
async def update_gallery(
    gallery_id: Annotated[int, Path(description="Gallery ID")],
    data: GalleryUpdate,
    current_user: CuratorUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[GalleryResponse]:
    """
    Update name, description or publication state.

    Publishing is refused while the gallery has no artworks.
    """
    gallery = await gallery_service.update_gallery(db, gallery_id, current_user, data)
    return DataResponse(message="Gallery updated successfully", data=gallery)


@router.delete("/{gallery_id}", response_model=MessageResponse)
async def delete_gallery(
    gallery_id: Annotated[int, Path(description="Gallery ID")],
    current_user: CuratorUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """Delete a gallery. Its artworks are not affected."""
    await gallery_service.delete_gallery(db, gallery_id, current_user)
    return MessageResponse(message="Gallery deleted successfully")


@router.post("/{gallery_id}/artworks", response_model=DataResponse[MembershipResponse])
async def add_artwork(
    gallery_id: Annotated[int, Path(description="Gallery ID")],
    data: AddArtworkRequest,
    current_user: CuratorUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[MembershipResponse]:
    """Add an approved artwork, by default after the current last one."""
    membership = await gallery_service.add_artwork(
        db, gallery_id, current_user, data.artwork_id, data.display_order
    )
    return DataResponse(message="Artwork added to gallery successfully", data=membership)


@router.delete("/{gallery_id}/artworks/{artwork_id}", response_model=MessageResponse)
async def remove_artwork(
    gallery_id: Annotated[int, Path(description="Gallery ID")],
    artwork_id: Annotated[int, Path(description="Artwork ID")],
    current_user: CuratorUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """Remove an artwork from a gallery; other positions are unchanged."""
    await gallery_service.remove_artwork(db, gallery_id, current_user, artwork_id)
    return MessageResponse(message="Artwork removed from gallery successfully")


@router.put("/{gallery_id}/order", response_model=MessageResponse)
async def reorder_artworks(
    gallery_id: Annotated[int, Path(description="Gallery ID")],
    data: ReorderRequest,
    current_user: CuratorUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """Set explicit display positions for member artworks."""
    await gallery_service.reorder_artworks(db, gallery_id, current_user, data.artwork_orders)
    return MessageResponse(message="Artwork order updated successfully")
