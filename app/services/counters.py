"""
View and like counters.

Each increment is a single atomic ``UPDATE ... SET c = c + 1``. updated_at is
written back unchanged: counting is not an edit.
"""

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Artworks, Galleries


async def increment_artwork_views(db: AsyncSession, artwork_id: int) -> bool:
    """Add one view; returns False if the artwork does not exist."""
    result = await db.execute(
        update(Artworks)
        .where(Artworks.artwork_id == artwork_id)  # type: ignore[arg-type]
        .values(view_count=Artworks.view_count + 1, updated_at=Artworks.updated_at)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0  # type: ignore[attr-defined]


async def increment_artwork_likes(db: AsyncSession, artwork_id: int) -> bool:
    """Add one like; returns False if the artwork does not exist."""
    result = await db.execute(
        update(Artworks)
        .where(Artworks.artwork_id == artwork_id)  # type: ignore[arg-type]
        .values(like_count=Artworks.like_count + 1, updated_at=Artworks.updated_at)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0  # type: ignore[attr-defined]


async def increment_gallery_views(db: AsyncSession, gallery_id: int) -> bool:
    """Add one view; returns False if the gallery does not exist."""
    result = await db.execute(
        update(Galleries)
        .where(Galleries.gallery_id == gallery_id)  # type: ignore[arg-type]
        .values(view_count=Galleries.view_count + 1, updated_at=Galleries.updated_at)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0  # type: ignore[attr-defined]
