"""
Read-only aggregates for the site, an artist and a curator.
"""

from sqlalchemy import Select, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import ArtworkStatus, UserRole
from app.models import Artworks, Galleries, GalleryArtworks, Users
from app.schemas.analytics import (
    ArtistStats,
    ArtworkStatusCounts,
    ArtworkViews,
    CuratorStats,
    GalleryViews,
    SiteStats,
    SiteTotals,
)

SITE_TOP_LIMIT = 5
PERSONAL_TOP_LIMIT = 10


async def _count(db: AsyncSession, query: Select) -> int:
    return (await db.execute(query)).scalar() or 0


async def site_stats(db: AsyncSession) -> SiteStats:
    """Public totals plus the most viewed galleries and most liked artworks."""
    totals = SiteTotals(
        total_artworks=await _count(
            db,
            select(func.count())
            .select_from(Artworks)
            .where(Artworks.status == ArtworkStatus.approved),  # type: ignore[arg-type]
        ),
        total_artists=await _count(
            db,
            select(func.count()).select_from(Users).where(Users.role == UserRole.artist),  # type: ignore[arg-type]
        ),
        total_galleries=await _count(
            db,
            select(func.count())
            .select_from(Galleries)
            .where(Galleries.is_published == True),  # type: ignore[arg-type]  # noqa: E712
        ),
    )

    gallery_rows = await db.execute(
        select(  # type: ignore[call-overload]
            Galleries.gallery_id, Galleries.name, Galleries.view_count, Users.username
        )
        .join(Users, Users.user_id == Galleries.curator_id)
        .where(Galleries.is_published == True)  # noqa: E712
        .order_by(Galleries.view_count.desc(), Galleries.gallery_id.asc())
        .limit(SITE_TOP_LIMIT)
    )
    top_galleries = [
        GalleryViews(gallery_id=gid, name=name, view_count=views, curator_name=curator)
        for gid, name, views, curator in gallery_rows.all()
    ]

    artwork_rows = await db.execute(
        select(  # type: ignore[call-overload]
            Artworks.artwork_id,
            Artworks.title,
            Artworks.image_url,
            Artworks.view_count,
            Artworks.like_count,
            Users.username,
        )
        .join(Users, Users.user_id == Artworks.artist_id)
        .where(Artworks.status == ArtworkStatus.approved)
        .order_by(Artworks.like_count.desc(), Artworks.artwork_id.asc())
        .limit(SITE_TOP_LIMIT)
    )
    top_artworks = [
        ArtworkViews(
            artwork_id=aid,
            title=title,
            image_url=image_url,
            view_count=views,
            like_count=likes,
            artist_name=artist,
        )
        for aid, title, image_url, views, likes, artist in artwork_rows.all()
    ]

    return SiteStats(totals=totals, top_galleries=top_galleries, top_artworks=top_artworks)


async def artist_stats(db: AsyncSession, artist: Users) -> ArtistStats:
    """Views, likes and status breakdown of the artist's own submissions."""
    sums = (
        await db.execute(
            select(  # type: ignore[call-overload]
                func.coalesce(func.sum(Artworks.view_count), 0),
                func.coalesce(func.sum(Artworks.like_count), 0),
            ).where(Artworks.artist_id == artist.user_id)
        )
    ).one()
    total_views, total_likes = int(sums[0]), int(sums[1])

    status_rows = await db.execute(
        select(Artworks.status, func.count())  # type: ignore[call-overload]
        .where(Artworks.artist_id == artist.user_id)
        .group_by(Artworks.status)
    )
    counts = ArtworkStatusCounts()
    for status, count in status_rows.all():
        setattr(counts, ArtworkStatus(status).value, count)

    artwork_rows = await db.execute(
        select(  # type: ignore[call-overload]
            Artworks.artwork_id,
            Artworks.title,
            Artworks.image_url,
            Artworks.view_count,
            Artworks.like_count,
            Artworks.status,
        )
        .where(Artworks.artist_id == artist.user_id)
        .order_by(Artworks.view_count.desc(), Artworks.artwork_id.asc())
        .limit(PERSONAL_TOP_LIMIT)
    )
    top_artworks = [
        ArtworkViews(
            artwork_id=aid,
            title=title,
            image_url=image_url,
            view_count=views,
            like_count=likes,
            status=status,
        )
        for aid, title, image_url, views, likes, status in artwork_rows.all()
    ]

    featured_rows = await db.execute(
        select(  # type: ignore[call-overload]
            Galleries.gallery_id,
            Galleries.name,
            Galleries.view_count,
            Users.username,
            func.count(distinct(GalleryArtworks.artwork_id)),
        )
        .join(Users, Users.user_id == Galleries.curator_id)
        .join(GalleryArtworks, GalleryArtworks.gallery_id == Galleries.gallery_id)
        .join(Artworks, Artworks.artwork_id == GalleryArtworks.artwork_id)
        .where(Artworks.artist_id == artist.user_id, Galleries.is_published == True)  # noqa: E712
        .group_by(Galleries.gallery_id, Galleries.name, Galleries.view_count, Users.username)
        .order_by(Galleries.view_count.desc(), Galleries.gallery_id.asc())
    )
    featured_in = [
        GalleryViews(
            gallery_id=gid,
            name=name,
            view_count=views,
            curator_name=curator,
            artwork_count=artwork_count,
        )
        for gid, name, views, curator, artwork_count in featured_rows.all()
    ]

    return ArtistStats(
        total_views=total_views,
        total_likes=total_likes,
        artwork_counts=counts,
        top_artworks=top_artworks,
        featured_in=featured_in,
    )


async def curator_stats(db: AsyncSession, curator: Users) -> CuratorStats:
    """Views across the curator's galleries and their most viewed members."""
    total_views = int(
        (
            await db.execute(
                select(func.coalesce(func.sum(Galleries.view_count), 0)).where(
                    Galleries.curator_id == curator.user_id  # type: ignore[arg-type]
                )
            )
        ).scalar()
        or 0
    )

    curated_artworks = (
        select(GalleryArtworks.artwork_id)
        .join(Galleries, Galleries.gallery_id == GalleryArtworks.gallery_id)  # type: ignore[arg-type]
        .where(Galleries.curator_id == curator.user_id)  # type: ignore[arg-type]
    )

    total_artworks = await _count(
        db,
        select(func.count(distinct(GalleryArtworks.artwork_id)))
        .select_from(GalleryArtworks)
        .join(Galleries, Galleries.gallery_id == GalleryArtworks.gallery_id)  # type: ignore[arg-type]
        .where(Galleries.curator_id == curator.user_id),  # type: ignore[arg-type]
    )

    gallery_rows = await db.execute(
        select(  # type: ignore[call-overload]
            Galleries.gallery_id,
            Galleries.name,
            Galleries.view_count,
            func.count(distinct(GalleryArtworks.artwork_id)),
        )
        .outerjoin(GalleryArtworks, GalleryArtworks.gallery_id == Galleries.gallery_id)
        .where(Galleries.curator_id == curator.user_id)
        .group_by(Galleries.gallery_id, Galleries.name, Galleries.view_count)
        .order_by(Galleries.view_count.desc(), Galleries.gallery_id.asc())
        .limit(PERSONAL_TOP_LIMIT)
    )
    gallery_views = [
        GalleryViews(gallery_id=gid, name=name, view_count=views, artwork_count=artwork_count)
        for gid, name, views, artwork_count in gallery_rows.all()
    ]

    artwork_rows = await db.execute(
        select(  # type: ignore[call-overload]
            Artworks.artwork_id,
            Artworks.title,
            Artworks.image_url,
            Artworks.view_count,
            Artworks.like_count,
            Users.username,
        )
        .join(Users, Users.user_id == Artworks.artist_id)
        .where(Artworks.artwork_id.in_(curated_artworks))
        .order_by(Artworks.view_count.desc(), Artworks.artwork_id.asc())
        .limit(PERSONAL_TOP_LIMIT)
    )
    top_artworks = [
        ArtworkViews(
            artwork_id=aid,
            title=title,
            image_url=image_url,
            view_count=views,
            like_count=likes,
            artist_name=artist,
        )
        for aid, title, image_url, views, likes, artist in artwork_rows.all()
    ]

    return CuratorStats(
        total_views=total_views,
        total_artworks=total_artworks,
        gallery_views=gallery_views,
        top_artworks=top_artworks,
    )
