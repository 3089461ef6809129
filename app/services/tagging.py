"""
Tag resolution and artwork-tag association.

Review is the only path that creates tags. Names are matched exactly
(case-sensitive); an artwork's tag set is replaced wholesale by clearing its
links and associating the resolved ids.
"""

from collections.abc import Iterable, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.models import ArtworkTags, GalleryArtworks, Tags

logger = get_logger(__name__)


def normalize_tag_names(names: Iterable[str | None]) -> list[str]:
    """Trim, drop blanks and de-duplicate, keeping first occurrence order."""
    seen: set[str] = set()
    cleaned: list[str] = []
    for raw in names:
        if raw is None:
            continue
        name = str(raw).strip()
        if not name or name in seen:
            continue
        seen.add(name)
        cleaned.append(name)
    return cleaned


async def resolve_tags(db: AsyncSession, names: Iterable[str | None]) -> list[int]:
    """
    Get-or-create tags by name.

    Returns:
        Tag ids in the order the (normalized) names were given
    """
    cleaned = normalize_tag_names(names)
    if not cleaned:
        return []

    # Batch load existing tags to avoid one lookup per name
    result = await db.execute(select(Tags).where(Tags.name.in_(cleaned)))  # type: ignore[attr-defined]
    by_name = {tag.name: tag for tag in result.scalars().all()}

    created: list[str] = []
    for name in cleaned:
        if name not in by_name:
            tag = Tags(name=name)
            db.add(tag)
            by_name[name] = tag
            created.append(name)

    if created:
        await db.flush()
        logger.info("tags_created", names=created)

    return [by_name[name].tag_id for name in cleaned]  # type: ignore[misc]


async def associate_all(db: AsyncSession, artwork_id: int, tag_ids: Sequence[int]) -> None:
    """Link tags to an artwork. The caller clears existing links first."""
    for tag_id in dict.fromkeys(tag_ids):
        db.add(ArtworkTags(artwork_id=artwork_id, tag_id=tag_id))
    await db.flush()


async def clear_tags(db: AsyncSession, artwork_id: int) -> None:
    """Remove every tag link of an artwork; Tag rows are kept."""
    await db.execute(
        delete(ArtworkTags).where(ArtworkTags.artwork_id == artwork_id)  # type: ignore[arg-type]
    )


async def replace_tags(db: AsyncSession, artwork_id: int, names: Iterable[str | None]) -> list[int]:
    """Clear, resolve and associate in one go. Runs inside the caller's transaction."""
    await clear_tags(db, artwork_id)
    tag_ids = await resolve_tags(db, names)
    await associate_all(db, artwork_id, tag_ids)
    return tag_ids


async def list_all(db: AsyncSession) -> list[Tags]:
    """All tags ordered by name."""
    result = await db.execute(select(Tags).order_by(Tags.name))  # type: ignore[arg-type]
    return list(result.scalars().all())


async def tags_for_artworks(db: AsyncSession, artwork_ids: Sequence[int]) -> dict[int, list[str]]:
    """Tag names per artwork, batch loaded, each list sorted by name."""
    tags: dict[int, list[str]] = {artwork_id: [] for artwork_id in artwork_ids}
    if not artwork_ids:
        return tags

    result = await db.execute(
        select(ArtworkTags.artwork_id, Tags.name)  # type: ignore[call-overload]
        .join(Tags, Tags.tag_id == ArtworkTags.tag_id)
        .where(ArtworkTags.artwork_id.in_(artwork_ids))  # type: ignore[attr-defined]
        .order_by(ArtworkTags.artwork_id, Tags.name)
    )
    for artwork_id, name in result.all():
        tags[artwork_id].append(name)
    return tags


async def tags_for_galleries(db: AsyncSession, gallery_ids: Sequence[int]) -> dict[int, list[str]]:
    """Distinct tag names across each gallery's member artworks, sorted by name."""
    tags: dict[int, list[str]] = {gallery_id: [] for gallery_id in gallery_ids}
    if not gallery_ids:
        return tags

    result = await db.execute(
        select(GalleryArtworks.gallery_id, Tags.name)  # type: ignore[call-overload]
        .join(ArtworkTags, ArtworkTags.artwork_id == GalleryArtworks.artwork_id)
        .join(Tags, Tags.tag_id == ArtworkTags.tag_id)
        .where(GalleryArtworks.gallery_id.in_(gallery_ids))  # type: ignore[attr-defined]
        .distinct()
        .order_by(GalleryArtworks.gallery_id, Tags.name)
    )
    for gallery_id, name in result.all():
        tags[gallery_id].append(name)
    return tags
