"""
Tests for artwork API endpoints.

These tests cover the /api/v1/artworks endpoints including:
- Multipart submission with image validation
- Browse filters and the approved-only rule for non-curators
- Detail reads, edits, deletion and likes
"""

from pathlib import Path

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import ArtworkStatus
from app.models import Artworks, Users
from tests.conftest import auth_headers, create_artwork, make_image_bytes


@pytest.mark.api
class TestSubmitArtwork:
    """Tests for POST /api/v1/artworks."""

    async def test_submit(
        self,
        client: AsyncClient,
        artist: Users,
        image_file: tuple[str, bytes, str],
        upload_dir: Path,
    ):
        response = await client.post(
            "/api/v1/artworks",
            data={"title": "Sunset", "medium": "Digital Painting", "dimensions": "30x40"},
            files={"image": image_file},
            headers=auth_headers(artist),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Artwork submitted successfully"
        artwork = body["data"]
        assert artwork["status"] == "pending"
        assert artwork["view_count"] == 0
        assert artwork["like_count"] == 0
        assert artwork["artist_name"] == "painter"
        assert artwork["image_url"].startswith("/uploads/")
        assert artwork["created_at"].endswith("Z")
        assert (upload_dir / artwork["image_url"].rsplit("/", 1)[1]).exists()

    async def test_submit_without_image(self, client: AsyncClient, artist: Users):
        response = await client.post(
            "/api/v1/artworks",
            data={"title": "Sunset", "medium": "Oil"},
            headers=auth_headers(artist),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Image file is required"

    async def test_submit_without_title(
        self, client: AsyncClient, artist: Users, image_file: tuple[str, bytes, str]
    ):
        response = await client.post(
            "/api/v1/artworks",
            data={"medium": "Oil"},
            files={"image": image_file},
            headers=auth_headers(artist),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Title and medium are required"

    async def test_submit_non_image(self, client: AsyncClient, artist: Users, upload_dir: Path):
        response = await client.post(
            "/api/v1/artworks",
            data={"title": "Notes", "medium": "Text"},
            files={"image": ("notes.txt", b"hello", "text/plain")},
            headers=auth_headers(artist),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Only image files are allowed"
        assert list(upload_dir.iterdir()) == []

    async def test_curator_cannot_submit(
        self, client: AsyncClient, curator: Users, image_file: tuple[str, bytes, str]
    ):
        response = await client.post(
            "/api/v1/artworks",
            data={"title": "Sunset", "medium": "Oil"},
            files={"image": image_file},
            headers=auth_headers(curator),
        )

        assert response.status_code == 403

    async def test_anonymous_cannot_submit(
        self, client: AsyncClient, image_file: tuple[str, bytes, str]
    ):
        response = await client.post(
            "/api/v1/artworks",
            data={"title": "Sunset", "medium": "Oil"},
            files={"image": image_file},
        )

        assert response.status_code == 401


@pytest.mark.api
class TestListArtworks:
    """Tests for GET /api/v1/artworks and /api/v1/artworks/mine."""

    async def test_envelope_and_pagination(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users
    ):
        for i in range(3):
            await create_artwork(db_session, artist, title=f"Piece {i}")

        response = await client.get("/api/v1/artworks", params={"limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [a["title"] for a in body["data"]["artworks"]] == ["Piece 2", "Piece 1"]
        assert body["data"]["pagination"] == {
            "total": 3,
            "limit": 2,
            "offset": 0,
            "hasMore": True,
        }

    async def test_curator_sees_pending(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users, curator: Users
    ):
        await create_artwork(db_session, artist, title="Queued", status=ArtworkStatus.pending)

        response = await client.get(
            "/api/v1/artworks", params={"status": "pending"}, headers=auth_headers(curator)
        )

        assert [a["title"] for a in response.json()["data"]["artworks"]] == ["Queued"]

    async def test_curator_bad_status(self, client: AsyncClient, curator: Users):
        response = await client.get(
            "/api/v1/artworks", params={"status": "lost"}, headers=auth_headers(curator)
        )
        assert response.status_code == 400

    async def test_bad_token_browses_as_anonymous(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users
    ):
        await create_artwork(db_session, artist, title="Queued", status=ArtworkStatus.pending)

        response = await client.get(
            "/api/v1/artworks",
            params={"status": "pending"},
            headers={"Authorization": "Bearer expired-or-forged"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["artworks"] == []

    async def test_mine_lists_every_status(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        artist: Users,
        other_artist: Users,
    ):
        await create_artwork(db_session, artist, title="Approved")
        await create_artwork(db_session, artist, title="Rejected", status=ArtworkStatus.rejected)
        await create_artwork(db_session, other_artist, title="Not mine")

        response = await client.get("/api/v1/artworks/mine", headers=auth_headers(artist))

        titles = {a["title"] for a in response.json()["data"]["artworks"]}
        assert titles == {"Approved", "Rejected"}


@pytest.mark.api
class TestGetArtwork:
    """Tests for GET /api/v1/artworks/{artwork_id}."""

    async def test_each_read_counts(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users
    ):
        artwork = await create_artwork(db_session, artist)

        for expected in (1, 2, 3):
            response = await client.get(f"/api/v1/artworks/{artwork.artwork_id}")
            assert response.status_code == 200
            assert response.json()["data"]["view_count"] == expected

        stored = (
            await db_session.execute(
                select(Artworks.view_count).where(Artworks.artwork_id == artwork.artwork_id)
            )
        ).scalar_one()
        assert stored == 3

    async def test_detail_includes_artist_profile(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users
    ):
        artwork = await create_artwork(db_session, artist)

        data = (await client.get(f"/api/v1/artworks/{artwork.artwork_id}")).json()["data"]

        assert data["artist_name"] == "painter"
        assert data["artist_bio"] == "Paints sunsets"

    async def test_pending_forbidden_for_other_artist(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users, other_artist: Users
    ):
        artwork = await create_artwork(db_session, artist, status=ArtworkStatus.pending)

        response = await client.get(
            f"/api/v1/artworks/{artwork.artwork_id}", headers=auth_headers(other_artist)
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Artwork is not approved."

    async def test_rejected_visible_to_owner_with_feedback(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users, curator: Users
    ):
        artwork = await create_artwork(
            db_session, artist, status=ArtworkStatus.rejected, curator=curator
        )

        response = await client.get(
            f"/api/v1/artworks/{artwork.artwork_id}", headers=auth_headers(artist)
        )

        assert response.status_code == 200
        assert response.json()["data"]["curator_id"] == curator.user_id


@pytest.mark.api
class TestUpdateArtwork:
    """Tests for PUT /api/v1/artworks/{artwork_id}."""

    async def test_owner_updates_pending(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users
    ):
        artwork = await create_artwork(db_session, artist, status=ArtworkStatus.pending)

        response = await client.put(
            f"/api/v1/artworks/{artwork.artwork_id}",
            data={"title": "Dusk", "description": "Later that evening"},
            headers=auth_headers(artist),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Dusk"
        assert data["description"] == "Later that evening"
        assert data["medium"] == "Oil"

    async def test_owner_cannot_update_approved(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users
    ):
        artwork = await create_artwork(db_session, artist, status=ArtworkStatus.approved)

        response = await client.put(
            f"/api/v1/artworks/{artwork.artwork_id}",
            data={"title": "Dusk"},
            headers=auth_headers(artist),
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Only pending artworks can be updated"

    async def test_admin_updates_approved(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users, admin: Users
    ):
        artwork = await create_artwork(db_session, artist, status=ArtworkStatus.approved)

        response = await client.put(
            f"/api/v1/artworks/{artwork.artwork_id}",
            data={"medium": "Acrylic"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "approved"

    async def test_replace_image(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users, upload_dir: Path
    ):
        (upload_dir / "before.jpg").write_bytes(b"x")
        artwork = await create_artwork(
            db_session, artist, status=ArtworkStatus.pending, image_url="/uploads/before.jpg"
        )

        response = await client.put(
            f"/api/v1/artworks/{artwork.artwork_id}",
            files={"image": ("after.png", make_image_bytes("PNG"), "image/png")},
            headers=auth_headers(artist),
        )

        assert response.status_code == 200
        assert response.json()["data"]["image_url"].endswith(".png")
        assert not (upload_dir / "before.jpg").exists()

    async def test_overlong_medium_is_400(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users
    ):
        artwork = await create_artwork(db_session, artist, status=ArtworkStatus.pending)

        response = await client.put(
            f"/api/v1/artworks/{artwork.artwork_id}",
            data={"medium": "m" * 51},
            headers=auth_headers(artist),
        )

        assert response.status_code == 400


@pytest.mark.api
class TestDeleteArtwork:
    """Tests for DELETE /api/v1/artworks/{artwork_id}."""

    async def test_owner_deletes(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users
    ):
        artwork = await create_artwork(db_session, artist)

        response = await client.delete(
            f"/api/v1/artworks/{artwork.artwork_id}", headers=auth_headers(artist)
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Artwork deleted successfully"}
        assert (await client.get(f"/api/v1/artworks/{artwork.artwork_id}")).status_code == 404

    async def test_admin_deletes_any(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users, admin: Users
    ):
        artwork = await create_artwork(db_session, artist)

        response = await client.delete(
            f"/api/v1/artworks/{artwork.artwork_id}", headers=auth_headers(admin)
        )

        assert response.status_code == 200

    async def test_other_artist_forbidden(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users, other_artist: Users
    ):
        artwork = await create_artwork(db_session, artist)

        response = await client.delete(
            f"/api/v1/artworks/{artwork.artwork_id}", headers=auth_headers(other_artist)
        )

        assert response.status_code == 403


@pytest.mark.api
class TestLikeArtwork:
    """Tests for POST /api/v1/artworks/{artwork_id}/like."""

    async def test_anonymous_likes_accumulate(
        self, client: AsyncClient, db_session: AsyncSession, artist: Users
    ):
        artwork = await create_artwork(db_session, artist)

        for _ in range(4):
            response = await client.post(f"/api/v1/artworks/{artwork.artwork_id}/like")
            assert response.status_code == 200
            assert response.json()["message"] == "Artwork liked successfully"

        likes = (
            await db_session.execute(
                select(Artworks.like_count).where(Artworks.artwork_id == artwork.artwork_id)
            )
        ).scalar_one()
        assert likes == 4

    async def test_like_missing_artwork(self, client: AsyncClient):
        response = await client.post("/api/v1/artworks/999/like")
        assert response.status_code == 404
