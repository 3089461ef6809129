"""
Gallery curation.

A gallery starts as an empty, unpublished draft owned by one curator. Only
approved artworks can be added; positions are explicit ``display_order``
values that are never renumbered, so removals leave gaps and a reorder may
assign any integers, duplicates included. Publishing requires at least one
member.
"""

from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import ArtworkStatus
from app.core.database import transaction
from app.core.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from app.core.logging import get_logger
from app.models import Artworks, Galleries, GalleryArtworks, Users
from app.schemas.gallery import (
    ArtworkOrder,
    GalleryArtworkItem,
    GalleryCreate,
    GalleryDetail,
    GalleryResponse,
    GallerySummary,
    GalleryUpdate,
    MembershipResponse,
)
from app.services import counters, tagging
from app.services.filters import CuratorIs, FilterSet, GalleryHasTag, PublishedOnly, TextSearch

logger = get_logger(__name__)

# Columns matched by the free-text search on gallery lists
GALLERY_SEARCH_COLUMNS = (Galleries.name, Galleries.description, Users.username)


async def get_gallery(db: AsyncSession, gallery_id: int) -> Galleries:
    """Load a gallery row or raise NotFoundError."""
    gallery = await db.get(Galleries, gallery_id)
    if gallery is None:
        raise NotFoundError("Gallery not found")
    return gallery


async def get_owned_gallery(
    db: AsyncSession, gallery_id: int, curator: Users, action: str = "modify"
) -> Galleries:
    """Load a gallery the curator owns; AuthorizationError for anyone else's."""
    gallery = await get_gallery(db, gallery_id)
    if gallery.curator_id != curator.user_id:
        raise AuthorizationError(f"Access denied. You can only {action} your own galleries.")
    return gallery


async def member_count(db: AsyncSession, gallery_id: int) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(GalleryArtworks)
        .where(GalleryArtworks.gallery_id == gallery_id)  # type: ignore[arg-type]
    )
    return result.scalar() or 0


async def _artwork_counts(db: AsyncSession, gallery_ids: list[int]) -> dict[int, int]:
    """Member count per gallery, batch loaded."""
    counts = {gallery_id: 0 for gallery_id in gallery_ids}
    if not gallery_ids:
        return counts
    result = await db.execute(
        select(GalleryArtworks.gallery_id, func.count(GalleryArtworks.artwork_id))  # type: ignore[call-overload]
        .where(GalleryArtworks.gallery_id.in_(gallery_ids))  # type: ignore[attr-defined]
        .group_by(GalleryArtworks.gallery_id)
    )
    for gallery_id, count in result.all():
        counts[gallery_id] = count
    return counts


async def _summaries(db: AsyncSession, rows: list[Any]) -> list[GallerySummary]:
    """Build list cards from (Galleries, curator_name) rows."""
    gallery_ids = [row[0].gallery_id for row in rows]
    counts = await _artwork_counts(db, gallery_ids)
    tags = await tagging.tags_for_galleries(db, gallery_ids)
    return [
        GallerySummary.model_validate(
            {
                **gallery.model_dump(),
                "curator_name": curator_name,
                "artwork_count": counts[gallery.gallery_id],
                "tags": tags[gallery.gallery_id],
            }
        )
        for gallery, curator_name in rows
    ]


async def create_gallery(db: AsyncSession, curator: Users, data: GalleryCreate) -> GalleryResponse:
    """Create an empty, unpublished gallery."""
    name = data.name.strip() if data.name else ""
    if not name:
        raise ValidationError("Gallery name is required")

    gallery = Galleries(
        name=name,
        description=data.description,
        curator_id=curator.user_id,  # type: ignore[arg-type]
        is_published=False,
        view_count=0,
    )
    db.add(gallery)
    await db.commit()

    logger.info("gallery_created", gallery_id=gallery.gallery_id, curator_id=curator.user_id)
    return GalleryResponse.model_validate(gallery.model_dump())


async def read_gallery(db: AsyncSession, gallery_id: int, caller: Users | None) -> GalleryDetail:
    """
    Read a gallery with its ordered artworks and count the view.

    Drafts are visible only to the curator who owns them.
    """
    result = await db.execute(
        select(Galleries, Users.username, Users.profile_image, Users.bio)  # type: ignore[call-overload]
        .join(Users, Users.user_id == Galleries.curator_id)
        .where(Galleries.gallery_id == gallery_id)
    )
    row = result.first()
    if row is None:
        raise NotFoundError("Gallery not found")

    gallery, curator_name, curator_image, curator_bio = row
    if not gallery.is_published and (caller is None or caller.user_id != gallery.curator_id):
        raise AuthorizationError("Access denied. Gallery is not published.")

    member_rows = (
        await db.execute(
            select(Artworks, Users.username, GalleryArtworks.display_order)  # type: ignore[call-overload]
            .join(GalleryArtworks, GalleryArtworks.artwork_id == Artworks.artwork_id)
            .join(Users, Users.user_id == Artworks.artist_id)
            .where(GalleryArtworks.gallery_id == gallery_id)
            .order_by(GalleryArtworks.display_order.asc(), Artworks.artwork_id.asc())
        )
    ).all()
    tags = await tagging.tags_for_artworks(db, [artwork.artwork_id for artwork, _, _ in member_rows])

    artworks = [
        GalleryArtworkItem.model_validate(
            {
                **artwork.model_dump(),
                "artist_name": artist_name,
                "display_order": display_order,
                "tags": tags[artwork.artwork_id],
            }
        )
        for artwork, artist_name, display_order in member_rows
    ]

    await counters.increment_gallery_views(db, gallery_id)

    detail = GalleryDetail.model_validate(
        {
            **gallery.model_dump(),
            "curator_name": curator_name,
            "curator_image": curator_image,
            "curator_bio": curator_bio,
            "artworks": artworks,
        }
    )
    detail.view_count += 1
    return detail


async def list_galleries(
    db: AsyncSession,
    *,
    curator_id: int | None = None,
    tag: str | None = None,
    search: str | None = None,
    limit: int,
    offset: int,
) -> tuple[list[GallerySummary], int]:
    """Published galleries, newest first."""
    filters = FilterSet(PublishedOnly())
    if curator_id is not None:
        filters.add(CuratorIs(curator_id))
    if tag:
        filters.add(GalleryHasTag(tag))
    if search and search.strip():
        filters.add(TextSearch(search.strip(), GALLERY_SEARCH_COLUMNS))

    base = filters.apply(
        select(Galleries, Users.username).join(  # type: ignore[call-overload]
            Users, Users.user_id == Galleries.curator_id
        )
    )

    total = (await db.execute(select(func.count()).select_from(base.subquery()))).scalar() or 0

    rows = (
        await db.execute(
            base.order_by(Galleries.created_at.desc(), Galleries.gallery_id.desc())  # type: ignore[attr-defined]
            .offset(offset)
            .limit(limit)
        )
    ).all()

    return await _summaries(db, list(rows)), total


async def list_own_galleries(
    db: AsyncSession, curator: Users, *, limit: int, offset: int
) -> tuple[list[GallerySummary], int]:
    """The curator's galleries, drafts included, most recently updated first."""
    base = FilterSet(CuratorIs(curator.user_id)).apply(  # type: ignore[arg-type]
        select(Galleries, Users.username).join(  # type: ignore[call-overload]
            Users, Users.user_id == Galleries.curator_id
        )
    )

    total = (await db.execute(select(func.count()).select_from(base.subquery()))).scalar() or 0

    rows = (
        await db.execute(
            base.order_by(Galleries.updated_at.desc(), Galleries.gallery_id.desc())  # type: ignore[attr-defined]
            .offset(offset)
            .limit(limit)
        )
    ).all()

    return await _summaries(db, list(rows)), total


async def update_gallery(
    db: AsyncSession, gallery_id: int, curator: Users, data: GalleryUpdate
) -> GalleryResponse:
    """
    Rename, describe, publish or unpublish a gallery.

    Raises:
        ValidationError: no fields given, or publishing a gallery with no artworks
    """
    gallery = await get_owned_gallery(db, gallery_id, curator, action="update")

    fields = data.model_dump(exclude_unset=True)
    if fields.get("name") is None:
        fields.pop("name", None)
    if fields.get("is_published") is None:
        fields.pop("is_published", None)
    if not fields:
        raise ValidationError("No fields to update")

    if fields.get("is_published") and await member_count(db, gallery_id) == 0:
        raise ValidationError("Cannot publish empty gallery. Add artworks first.")

    was_published = gallery.is_published
    async with transaction(db):
        for name, value in fields.items():
            setattr(gallery, name, value)

    logger.info(
        "gallery_updated",
        gallery_id=gallery_id,
        fields=sorted(fields),
        published=gallery.is_published,
        publish_changed=was_published != gallery.is_published,
    )
    return GalleryResponse.model_validate(gallery.model_dump())


async def delete_gallery(db: AsyncSession, gallery_id: int, curator: Users) -> None:
    """Delete a gallery and its memberships; member artworks are untouched."""
    gallery = await get_owned_gallery(db, gallery_id, curator, action="delete")

    async with transaction(db):
        await db.execute(
            delete(GalleryArtworks).where(GalleryArtworks.gallery_id == gallery_id)  # type: ignore[arg-type]
        )
        await db.delete(gallery)

    logger.info("gallery_deleted", gallery_id=gallery_id, curator_id=curator.user_id)


async def add_artwork(
    db: AsyncSession,
    gallery_id: int,
    curator: Users,
    artwork_id: int,
    display_order: int | None = None,
) -> MembershipResponse:
    """
    Append an approved artwork to a gallery.

    Without an explicit position the artwork goes one past the current
    highest display_order (1 for an empty gallery).
    """
    await get_owned_gallery(db, gallery_id, curator)

    artwork = await db.get(Artworks, artwork_id)
    if artwork is None:
        raise NotFoundError("Artwork not found")
    if artwork.status != ArtworkStatus.approved:
        raise ValidationError("Only approved artworks can be added to a gallery")

    existing = await db.get(GalleryArtworks, (gallery_id, artwork_id))
    if existing is not None:
        raise ConflictError("Artwork is already in this gallery")

    if display_order is None:
        result = await db.execute(
            select(func.max(GalleryArtworks.display_order)).where(  # type: ignore[arg-type]
                GalleryArtworks.gallery_id == gallery_id  # type: ignore[arg-type]
            )
        )
        display_order = (result.scalar() or 0) + 1

    membership = GalleryArtworks(
        gallery_id=gallery_id, artwork_id=artwork_id, display_order=display_order
    )
    db.add(membership)
    await db.commit()

    logger.info(
        "gallery_artwork_added",
        gallery_id=gallery_id,
        artwork_id=artwork_id,
        display_order=display_order,
    )
    return MembershipResponse.model_validate(membership)


async def remove_artwork(db: AsyncSession, gallery_id: int, curator: Users, artwork_id: int) -> None:
    """Remove one member; remaining positions are left as they are."""
    await get_owned_gallery(db, gallery_id, curator)

    result = await db.execute(
        delete(GalleryArtworks).where(
            GalleryArtworks.gallery_id == gallery_id,  # type: ignore[arg-type]
            GalleryArtworks.artwork_id == artwork_id,  # type: ignore[arg-type]
        )
    )
    if result.rowcount == 0:  # type: ignore[attr-defined]
        raise NotFoundError("Artwork is not in this gallery")
    await db.commit()

    logger.info("gallery_artwork_removed", gallery_id=gallery_id, artwork_id=artwork_id)


async def reorder_artworks(
    db: AsyncSession, gallery_id: int, curator: Users, orders: list[ArtworkOrder]
) -> int:
    """
    Apply explicit positions.

    Pairs missing either field are skipped, as are artworks that are not
    members. Positions are not checked for uniqueness or contiguity.

    Returns:
        Number of memberships updated
    """
    if not orders:
        raise ValidationError("artwork_orders array is required")

    await get_owned_gallery(db, gallery_id, curator)

    updated = 0
    async with transaction(db):
        for item in orders:
            if item.artwork_id is None or item.display_order is None:
                continue
            result = await db.execute(
                update(GalleryArtworks)
                .where(
                    GalleryArtworks.gallery_id == gallery_id,  # type: ignore[arg-type]
                    GalleryArtworks.artwork_id == item.artwork_id,  # type: ignore[arg-type]
                )
                .values(display_order=item.display_order)
            )
            updated += result.rowcount  # type: ignore[attr-defined]

    logger.info("gallery_reordered", gallery_id=gallery_id, updated=updated)
    return updated
