"""
Artwork lifecycle.

An artwork is submitted as ``pending`` and leaves that state exactly once,
through a curator review, to ``approved`` or ``rejected``. Only the owning
artist may edit a pending artwork; admins may edit in any state, and an admin
edit of a rejected artwork sends it back to the review queue.

Moderation fields (status, curator_feedback, curator_id) are written only by
review_artwork.
"""

from typing import Any

from fastapi import UploadFile
from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import REVIEW_OUTCOMES, ArtworkStatus, UserRole
from app.core.auth import is_moderator
from app.core.database import transaction
from app.core.errors import AuthorizationError, NotFoundError, ValidationError
from app.core.logging import get_logger
from app.models import Artworks, ArtworkTags, GalleryArtworks, Users
from app.models.tag import TAG_NAME_MAX_LENGTH
from app.schemas.artwork import ArtworkChanges, ArtworkDetail, ArtworkResponse, ReviewResult
from app.services import counters, tagging
from app.services.filters import (
    ArtistIs,
    FilterSet,
    HasTag,
    MediumIs,
    ReviewedBy,
    StatusIs,
    TextSearch,
)
from app.services.storage import delete_artwork_image, save_artwork_image

logger = get_logger(__name__)

# Columns matched by the free-text search on artwork lists
ARTWORK_SEARCH_COLUMNS = (Artworks.title, Artworks.description, Users.username)


def can_view_artwork(artwork: Artworks, user: Users | None) -> bool:
    """
    Check if a user can view an artwork.

    Visibility rules:
    - Approved: anyone, including anonymous visitors
    - Otherwise: the owning artist, curators and admins
    """
    if artwork.status == ArtworkStatus.approved:
        return True
    if user is None:
        return False
    if artwork.artist_id == user.user_id:
        return True
    return is_moderator(user)


def can_modify_artwork(artwork: Artworks, user: Users) -> bool:
    """Owner or admin."""
    return artwork.artist_id == user.user_id or user.role == UserRole.admin


def _clean(value: str | None) -> str | None:
    return value.strip() if value is not None else None


def _check_lengths(fields: dict[str, Any]) -> None:
    limits = {"title": 100, "medium": 50, "dimensions": 50}
    for name, limit in limits.items():
        value = fields.get(name)
        if value is not None and len(value) > limit:
            raise ValidationError(f"{name.capitalize()} must be at most {limit} characters")


def _has_file(image: UploadFile | None) -> bool:
    return image is not None and bool(image.filename)


def _artwork_select() -> Any:
    """Artworks joined with their artist's public fields."""
    return select(
        Artworks,
        Users.username,
        Users.profile_image,
        Users.bio,
    ).join(Users, Users.user_id == Artworks.artist_id)  # type: ignore[arg-type]


def _to_response(artwork: Artworks, artist_name: str | None, tags: list[str]) -> ArtworkResponse:
    return ArtworkResponse.model_validate(
        {**artwork.model_dump(), "artist_name": artist_name, "tags": tags}
    )


async def get_artwork(db: AsyncSession, artwork_id: int) -> Artworks:
    """Load an artwork row or raise NotFoundError."""
    artwork = await db.get(Artworks, artwork_id)
    if artwork is None:
        raise NotFoundError("Artwork not found")
    return artwork


async def load_artwork_detail(db: AsyncSession, artwork_id: int) -> ArtworkDetail:
    """Artwork with artist profile and tags, without counting a view."""
    result = await db.execute(
        _artwork_select().where(Artworks.artwork_id == artwork_id)  # type: ignore[arg-type]
    )
    row = result.first()
    if row is None:
        raise NotFoundError("Artwork not found")

    artwork, artist_name, artist_image, artist_bio = row
    tags = await tagging.tags_for_artworks(db, [artwork_id])
    return ArtworkDetail.model_validate(
        {
            **artwork.model_dump(),
            "artist_name": artist_name,
            "artist_image": artist_image,
            "artist_bio": artist_bio,
            "tags": tags[artwork_id],
        }
    )


async def _page(
    db: AsyncSession,
    filters: FilterSet,
    order_by: tuple[ColumnElement[Any], ...],
    limit: int,
    offset: int,
) -> tuple[list[ArtworkResponse], int]:
    """Run one filtered page plus its total, using the same predicates for both."""
    base = filters.apply(_artwork_select())

    count_query = select(func.count()).select_from(base.subquery())
    total = (await db.execute(count_query)).scalar() or 0

    result = await db.execute(base.order_by(*order_by).offset(offset).limit(limit))
    rows = result.all()

    artwork_ids = [row[0].artwork_id for row in rows]
    tags = await tagging.tags_for_artworks(db, artwork_ids)

    artworks = [_to_response(row[0], row[1], tags[row[0].artwork_id]) for row in rows]
    return artworks, total


async def submit_artwork(
    db: AsyncSession,
    artist: Users,
    *,
    title: str | None,
    medium: str | None,
    image: UploadFile | None,
    description: str | None = None,
    dimensions: str | None = None,
) -> ArtworkDetail:
    """
    Create a pending artwork with a stored image.

    The image is written before the row; if persisting the row fails the file
    is removed again so no orphan is left in storage.
    """
    title = _clean(title)
    medium = _clean(medium)
    if not title or not medium:
        raise ValidationError("Title and medium are required")
    if not _has_file(image):
        raise ValidationError("Image file is required")

    fields = {
        "title": title,
        "medium": medium,
        "description": description,
        "dimensions": _clean(dimensions) or None,
    }
    _check_lengths(fields)

    image_url = await save_artwork_image(image)  # type: ignore[arg-type]

    try:
        artwork = Artworks(
            **fields,
            artist_id=artist.user_id,
            image_url=image_url,
            status=ArtworkStatus.pending,
        )
        db.add(artwork)
        await db.commit()
    except Exception as e:
        logger.error(
            "artwork_submit_failed",
            artist_id=artist.user_id,
            image_url=image_url,
            error=str(e),
        )
        await db.rollback()
        delete_artwork_image(image_url)
        raise

    logger.info(
        "artwork_submitted",
        artwork_id=artwork.artwork_id,
        artist_id=artist.user_id,
        medium=medium,
    )
    return await load_artwork_detail(db, artwork.artwork_id)  # type: ignore[arg-type]


async def read_artwork(db: AsyncSession, artwork_id: int, caller: Users | None) -> ArtworkDetail:
    """
    Read one artwork and count the view.

    Raises:
        NotFoundError: no such artwork
        AuthorizationError: not approved and caller is neither owner nor moderator
    """
    detail = await load_artwork_detail(db, artwork_id)

    if detail.status != ArtworkStatus.approved and not (
        caller is not None and (caller.user_id == detail.artist_id or is_moderator(caller))
    ):
        raise AuthorizationError("Access denied. Artwork is not approved.")

    await counters.increment_artwork_views(db, artwork_id)
    detail.view_count += 1
    return detail


async def list_artworks(
    db: AsyncSession,
    caller: Users | None,
    *,
    status: str | None = None,
    artist_id: int | None = None,
    tag: str | None = None,
    medium: str | None = None,
    search: str | None = None,
    limit: int,
    offset: int,
) -> tuple[list[ArtworkResponse], int]:
    """
    Browse artworks, newest first.

    Callers who are not curators or admins (anonymous visitors included) only
    ever see approved artworks, whatever status they ask for.
    """
    filters = FilterSet()

    if is_moderator(caller):
        if status:
            try:
                filters.add(StatusIs(ArtworkStatus(status)))
            except ValueError as e:
                raise ValidationError(
                    'Status must be one of "pending", "approved" or "rejected"'
                ) from e
    else:
        filters.add(StatusIs(ArtworkStatus.approved))

    if artist_id is not None:
        filters.add(ArtistIs(artist_id))
    if tag:
        filters.add(HasTag(tag))
    if medium:
        filters.add(MediumIs(medium))
    if search and search.strip():
        filters.add(TextSearch(search.strip(), ARTWORK_SEARCH_COLUMNS))

    return await _page(
        db,
        filters,
        (Artworks.created_at.desc(), Artworks.artwork_id.desc()),  # type: ignore[attr-defined]
        limit,
        offset,
    )


async def list_own_artworks(
    db: AsyncSession, artist: Users, *, limit: int, offset: int
) -> tuple[list[ArtworkResponse], int]:
    """The artist's own submissions in every status, newest first."""
    return await _page(
        db,
        FilterSet(ArtistIs(artist.user_id)),  # type: ignore[arg-type]
        (Artworks.created_at.desc(), Artworks.artwork_id.desc()),  # type: ignore[attr-defined]
        limit,
        offset,
    )


async def pending_queue(
    db: AsyncSession, *, limit: int, offset: int
) -> tuple[list[ArtworkResponse], int]:
    """Artworks awaiting review, oldest first."""
    return await _page(
        db,
        FilterSet(StatusIs(ArtworkStatus.pending)),
        (Artworks.created_at.asc(), Artworks.artwork_id.asc()),  # type: ignore[attr-defined]
        limit,
        offset,
    )


async def review_history(
    db: AsyncSession, curator: Users, *, limit: int, offset: int
) -> tuple[list[ArtworkResponse], int]:
    """Artworks this curator has reviewed, most recently updated first."""
    return await _page(
        db,
        FilterSet(ReviewedBy(curator.user_id)),  # type: ignore[arg-type]
        (Artworks.updated_at.desc(), Artworks.artwork_id.desc()),  # type: ignore[attr-defined]
        limit,
        offset,
    )


async def update_artwork(
    db: AsyncSession,
    artwork_id: int,
    caller: Users,
    changes: ArtworkChanges,
    image: UploadFile | None = None,
) -> ArtworkDetail:
    """
    Edit an artwork's descriptive fields and/or replace its image.

    The previous image is deleted only after the new row state is committed;
    if the commit fails the newly stored image is deleted instead.
    """
    artwork = await get_artwork(db, artwork_id)

    if not can_modify_artwork(artwork, caller):
        raise AuthorizationError("Access denied. You can only update your own artworks.")
    if artwork.status != ArtworkStatus.pending and caller.role != UserRole.admin:
        raise AuthorizationError("Only pending artworks can be updated")

    fields = changes.model_dump(exclude_unset=True)
    for name in ("title", "medium"):
        if name in fields:
            fields[name] = _clean(fields[name])
            if not fields[name]:
                raise ValidationError(f"{name.capitalize()} cannot be empty")
    _check_lengths(fields)

    replace_image = _has_file(image)
    if not fields and not replace_image:
        raise ValidationError("No fields to update")

    new_image_url = await save_artwork_image(image) if replace_image else None  # type: ignore[arg-type]
    old_image_url = artwork.image_url
    previous_status = artwork.status

    try:
        async with transaction(db):
            for name, value in fields.items():
                setattr(artwork, name, value)
            if new_image_url:
                artwork.image_url = new_image_url
            if artwork.status == ArtworkStatus.rejected:
                artwork.status = ArtworkStatus.pending
    except Exception as e:
        logger.error("artwork_update_failed", artwork_id=artwork_id, error=str(e))
        if new_image_url:
            delete_artwork_image(new_image_url)
        raise

    if new_image_url:
        delete_artwork_image(old_image_url)

    logger.info(
        "artwork_updated",
        artwork_id=artwork_id,
        fields=sorted(fields),
        image_replaced=bool(new_image_url),
        requeued=previous_status == ArtworkStatus.rejected,
    )
    return await load_artwork_detail(db, artwork_id)


async def delete_artwork(db: AsyncSession, artwork_id: int, caller: Users) -> None:
    """Delete an artwork with its tag links and gallery memberships, then its image."""
    artwork = await get_artwork(db, artwork_id)

    if not can_modify_artwork(artwork, caller):
        raise AuthorizationError("Access denied. You can only delete your own artworks.")

    image_url = artwork.image_url

    async with transaction(db):
        await db.execute(
            delete(GalleryArtworks).where(GalleryArtworks.artwork_id == artwork_id)  # type: ignore[arg-type]
        )
        await db.execute(
            delete(ArtworkTags).where(ArtworkTags.artwork_id == artwork_id)  # type: ignore[arg-type]
        )
        await db.delete(artwork)

    delete_artwork_image(image_url)
    logger.info("artwork_deleted", artwork_id=artwork_id, deleted_by=caller.user_id)


async def like_artwork(db: AsyncSession, artwork_id: int) -> None:
    """Add one like. Anonymous and not de-duplicated."""
    if not await counters.increment_artwork_likes(db, artwork_id):
        raise NotFoundError("Artwork not found")


async def review_artwork(
    db: AsyncSession,
    artwork_id: int,
    curator: Users,
    *,
    status: str,
    feedback: str | None = None,
    tags: list[str] | None = None,
) -> ReviewResult:
    """
    Approve or reject a pending artwork.

    A ``tags`` list with at least one non-blank name replaces the artwork's
    tags; an empty, blank-only or missing list leaves them untouched. Status,
    feedback and tags commit together.
    """
    try:
        outcome = ArtworkStatus(status)
    except ValueError:
        outcome = None
    if outcome not in REVIEW_OUTCOMES:
        raise ValidationError('Status must be either "approved" or "rejected"')

    artwork = await get_artwork(db, artwork_id)
    if artwork.status != ArtworkStatus.pending:
        raise ValidationError("This artwork has already been reviewed")

    feedback = _clean(feedback) or None
    requested_tags = tagging.normalize_tag_names(tags or [])
    if any(len(name) > TAG_NAME_MAX_LENGTH for name in requested_tags):
        raise ValidationError(f"Tag names must be at most {TAG_NAME_MAX_LENGTH} characters")

    async with transaction(db):
        artwork.status = outcome  # type: ignore[assignment]
        artwork.curator_feedback = feedback
        artwork.curator_id = curator.user_id
        await db.flush()
        if requested_tags:
            await tagging.replace_tags(db, artwork_id, requested_tags)

    tag_names = (await tagging.tags_for_artworks(db, [artwork_id]))[artwork_id]

    logger.info(
        "artwork_reviewed",
        artwork_id=artwork_id,
        curator_id=curator.user_id,
        status=outcome.value,  # type: ignore[union-attr]
        tags=tag_names,
    )
    return ReviewResult(
        artwork_id=artwork_id,
        title=artwork.title,
        status=outcome,  # type: ignore[arg-type]
        feedback=feedback,
        tags=tag_names,
    )
