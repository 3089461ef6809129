"""Tests for site, artist and curator aggregates."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import ArtworkStatus
from app.models import Users
from app.services import analytics
from tests.conftest import create_artwork, create_gallery


class TestSiteStats:
    async def test_totals_count_only_public_items(
        self, db_session: AsyncSession, artist: Users, other_artist: Users, curator: Users
    ):
        shown = await create_artwork(db_session, artist)
        await create_artwork(db_session, artist, status=ArtworkStatus.pending)
        await create_gallery(db_session, curator, artworks=[shown], is_published=True)
        await create_gallery(db_session, curator, name="Draft")

        stats = await analytics.site_stats(db_session)

        assert stats.totals.total_artworks == 1
        assert stats.totals.total_artists == 2
        assert stats.totals.total_galleries == 1

    async def test_top_lists_are_ranked_and_capped(
        self, db_session: AsyncSession, artist: Users, curator: Users
    ):
        artworks = [
            await create_artwork(db_session, artist, title=f"Piece {i}", like_count=i)
            for i in range(7)
        ]
        await create_artwork(
            db_session, artist, title="Hidden", status=ArtworkStatus.pending, like_count=100
        )
        for i in range(6):
            await create_gallery(
                db_session,
                curator,
                name=f"Show {i}",
                artworks=[artworks[0]],
                is_published=True,
                view_count=i * 10,
            )

        stats = await analytics.site_stats(db_session)

        assert [a.title for a in stats.top_artworks] == [
            "Piece 6",
            "Piece 5",
            "Piece 4",
            "Piece 3",
            "Piece 2",
        ]
        assert stats.top_artworks[0].artist_name == "painter"
        assert [g.name for g in stats.top_galleries][:2] == ["Show 5", "Show 4"]
        assert len(stats.top_galleries) == 5


class TestArtistStats:
    async def test_sums_and_breakdown(
        self, db_session: AsyncSession, artist: Users, other_artist: Users, curator: Users
    ):
        popular = await create_artwork(db_session, artist, view_count=10, like_count=3)
        await create_artwork(db_session, artist, status=ArtworkStatus.pending, view_count=1)
        await create_artwork(db_session, artist, status=ArtworkStatus.rejected)
        await create_artwork(db_session, other_artist, view_count=50)
        await create_gallery(db_session, curator, artworks=[popular], is_published=True)
        await create_gallery(db_session, curator, name="Draft", artworks=[popular])

        stats = await analytics.artist_stats(db_session, artist)

        assert stats.total_views == 11
        assert stats.total_likes == 3
        assert stats.artwork_counts.model_dump() == {"pending": 1, "approved": 1, "rejected": 1}
        assert stats.top_artworks[0].artwork_id == popular.artwork_id
        assert stats.top_artworks[0].status == ArtworkStatus.approved
        assert [g.name for g in stats.featured_in] == ["Spring Show"]
        assert stats.featured_in[0].artwork_count == 1

    async def test_artist_without_artworks(self, db_session: AsyncSession, artist: Users):
        stats = await analytics.artist_stats(db_session, artist)
        assert stats.total_views == 0
        assert stats.total_likes == 0
        assert stats.top_artworks == []
        assert stats.featured_in == []


class TestCuratorStats:
    async def test_views_and_distinct_artworks(
        self, db_session: AsyncSession, artist: Users, curator: Users, other_curator: Users
    ):
        first = await create_artwork(db_session, artist, title="First", view_count=5)
        second = await create_artwork(db_session, artist, title="Second", view_count=9)
        await create_gallery(db_session, curator, name="A", artworks=[first, second], view_count=7)
        await create_gallery(db_session, curator, name="B", artworks=[first], view_count=3)
        await create_gallery(db_session, other_curator, name="C", artworks=[first], view_count=99)

        stats = await analytics.curator_stats(db_session, curator)

        assert stats.total_views == 10
        assert stats.total_artworks == 2
        assert [(g.name, g.artwork_count) for g in stats.gallery_views] == [("A", 2), ("B", 1)]
        assert [a.title for a in stats.top_artworks] == ["Second", "First"]

    async def test_curator_without_galleries(self, db_session: AsyncSession, curator: Users):
        stats = await analytics.curator_stats(db_session, curator)
        assert stats.total_views == 0
        assert stats.total_artworks == 0
        assert stats.gallery_views == []
