"""
Artworks API endpoints
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import PaginationParams
from app.core.auth import ArtistOrAdminUser, ArtistUser, OptionalCurrentUser
from app.core.database import get_db
from app.schemas.artwork import ArtworkChanges, ArtworkDetail, ArtworkListData
from app.schemas.base import DataResponse, MessageResponse, Pagination
from app.services import artworks as artwork_service

router = APIRouter(prefix="/artworks", tags=["artworks"])


@router.get("", response_model=DataResponse[ArtworkListData])
async def list_artworks(
    pagination: Annotated[PaginationParams, Depends()],
    current_user: OptionalCurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    artwork_status: Annotated[
        str | None,
        Query(alias="status", description="pending, approved or rejected (curators only)"),
    ] = None,
    artist_id: Annotated[int | None, Query(description="Filter by artist user ID")] = None,
    tag: Annotated[str | None, Query(description="Exact tag name")] = None,
    medium: Annotated[str | None, Query(description="Exact medium")] = None,
    search: Annotated[
        str | None, Query(description="Substring of title, description or artist name")
    ] = None,
) -> DataResponse[ArtworkListData]:
    """
    Browse artworks, newest first.

    Visitors, artists and anonymous callers only see approved artworks; the
    ``status`` filter is honoured for curators and admins only.
    """
    artworks, total = await artwork_service.list_artworks(
        db,
        current_user,
        status=artwork_status,
        artist_id=artist_id,
        tag=tag,
        medium=medium,
        search=search,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return DataResponse(
        data=ArtworkListData(
            artworks=artworks,
            pagination=Pagination.build(total, pagination.limit, pagination.offset),
        )
    )


@router.get("/mine", response_model=DataResponse[ArtworkListData])
async def list_my_artworks(
    pagination: Annotated[PaginationParams, Depends()],
    current_user: ArtistUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[ArtworkListData]:
    """The caller's own submissions in every status."""
    artworks, total = await artwork_service.list_own_artworks(
        db, current_user, limit=pagination.limit, offset=pagination.offset
    )
    return DataResponse(
        data=ArtworkListData(
            artworks=artworks,
            pagination=Pagination.build(total, pagination.limit, pagination.offset),
        )
    )


@router.get("/{artwork_id}", response_model=DataResponse[ArtworkDetail])
async def get_artwork(
    artwork_id: Annotated[int, Path(description="Artwork ID")],
    current_user: OptionalCurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DataResponse[ArtworkDetail]:
    """
    Get one artwork. Counts a view.

    Artworks that are not approved are visible only to their artist and to
    curators/admins.
    """
    artwork = await artwork_service.read_artwork(db, artwork_id, current_user)
    return DataResponse(data=artwork)


@router.post(
    "", response_model=DataResponse[ArtworkDetail], status_code=status.HTTP_201_CREATED
)
async def submit_artwork(
    current_user: ArtistUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    title: Annotated[str | None, Form()] = None,
    medium: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    dimensions: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File(description="JPEG, PNG, GIF or WebP")] = None,
) -> DataResponse[ArtworkDetail]:
    """
    Submit an artwork for review (multipart form).

    The artwork starts out pending; it appears publicly once a curator
    approves it.
    """
    artwork = await artwork_service.submit_artwork(
        db,
        current_user,
        title=title,
        medium=medium,
        image=image,
        description=description,
        dimensions=dimensions,
    )
    return DataResponse(message="Artwork submitted successfully", data=artwork)


@router.put("/{artwork_id}", response_model=DataResponse[ArtworkDetail])
async def update_artwork(
    artwork_id: Annotated[int, Path(description="Artwork ID")],
    current_user: ArtistOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    title: Annotated[str | None, Form()] = None,
    medium: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    dimensions: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File(description="Replacement image")] = None,
) -> DataResponse[ArtworkDetail]:
    """
    Edit a pending artwork (multipart form, every field optional).

    Artists may edit only their own pending artworks; admins may edit any.
    """
    submitted = {
        "title": title,
        "medium": medium,
        "description": description,
        "dimensions": dimensions,
    }
    changes = ArtworkChanges(**{name: value for name, value in submitted.items() if value is not None})
    artwork = await artwork_service.update_artwork(db, artwork_id, current_user, changes, image)
    return DataResponse(message="Artwork updated successfully", data=artwork)


@router.delete("/{artwork_id}", response_model=MessageResponse)
async def delete_artwork(
    artwork_id: Annotated[int, Path(description="Artwork ID")],
    current_user: ArtistOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """Delete an artwork, its gallery memberships and its image."""
    await artwork_service.delete_artwork(db, artwork_id, current_user)
    return MessageResponse(message="Artwork deleted successfully")


@router.post("/{artwork_id}/like", response_model=MessageResponse)
async def like_artwork(
    artwork_id: Annotated[int, Path(description="Artwork ID")],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """Like an artwork. No account needed; every call counts."""
    await artwork_service.like_artwork(db, artwork_id)
    return MessageResponse(message="Artwork liked successfully")
