"""
Pytest configuration and shared fixtures.

Every test gets its own SQLite database file built from SQLModel.metadata,
and its own upload directory. Requests made through ``client`` each open a
fresh session, the way ``get_db`` does in production; ``db_session`` is a
separate session for arranging data and checking results.
"""

import io
import os
import tempfile
from collections.abc import AsyncGenerator
from functools import lru_cache
from pathlib import Path

# Settings are read at import time; provide test values before importing app
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("STORAGE_PATH", tempfile.mkdtemp(prefix="gallery-uploads-"))

import pytest
from fastapi import FastAPI, UploadFile
from httpx import ASGITransport, AsyncClient
from PIL import Image
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel
from starlette.datastructures import Headers

import app.models  # noqa: F401  (registers every table on SQLModel.metadata)
from app.config import ArtworkStatus, UserRole, settings
from app.core.database import get_db
from app.core.security import create_access_token, get_password_hash
from app.main import app as main_app
from app.models import Artworks, Galleries, GalleryArtworks, Users

DEFAULT_PASSWORD = "Password123"


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@lru_cache
def _hashed(password: str) -> str:
    # One bcrypt hash per distinct test password
    return get_password_hash(password)


@pytest.fixture(autouse=True)
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point image storage at a per-test directory."""
    path = tmp_path / "uploads"
    path.mkdir()
    monkeypatch.setattr(settings, "STORAGE_PATH", str(path))
    return path


@pytest.fixture(scope="function")
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """
    Create a test database engine for each test function.

    A file database with NullPool gives every session its own connection,
    so request sessions and the test session see each other's commits only.
    """
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'gallery.db'}",
        poolclass=NullPool,
    )
    event.listen(test_engine.sync_engine, "connect", _enable_foreign_keys)

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging test data and asserting on results."""
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
def app(session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    """
    FastAPI app bound to the test database.

    The override mirrors get_db: one session per request, committed on
    success and rolled back on error.
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    main_app.dependency_overrides[get_db] = override_get_db

    yield main_app

    main_app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client for testing API endpoints.

    Usage:
        async def test_endpoint(client):
            response = await client.get("/api/v1/artworks")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# =============================================================================
# Builders
# =============================================================================


def make_image_bytes(fmt: str = "JPEG", size: tuple[int, int] = (16, 16)) -> bytes:
    """A small, genuinely decodable image."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 120, 40)).save(buffer, format=fmt)
    return buffer.getvalue()


def make_upload(
    data: bytes | None = None, filename: str = "art.jpg", content_type: str = "image/jpeg"
) -> UploadFile:
    """An UploadFile as FastAPI would hand it to a service."""
    return UploadFile(
        file=io.BytesIO(make_image_bytes() if data is None else data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def auth_headers(user: Users) -> dict[str, str]:
    token = create_access_token(user.user_id, user.username, user.role)  # type: ignore[arg-type]
    return {"Authorization": f"Bearer {token}"}


async def create_user(
    db: AsyncSession,
    username: str,
    role: UserRole = UserRole.artist,
    *,
    email: str | None = None,
    password: str = DEFAULT_PASSWORD,
    bio: str | None = None,
) -> Users:
    user = Users(
        username=username,
        email=email or f"{username}@example.com",
        password=_hashed(password),
        role=role,
        bio=bio,
    )
    db.add(user)
    await db.commit()
    return user


async def create_artwork(
    db: AsyncSession,
    artist: Users,
    *,
    title: str = "Untitled",
    medium: str = "Oil",
    status: ArtworkStatus = ArtworkStatus.approved,
    description: str | None = None,
    image_url: str = "/uploads/missing.jpg",
    curator: Users | None = None,
    view_count: int = 0,
    like_count: int = 0,
) -> Artworks:
    artwork = Artworks(
        title=title,
        medium=medium,
        description=description,
        artist_id=artist.user_id,  # type: ignore[arg-type]
        image_url=image_url,
        status=status,
        curator_id=curator.user_id if curator else None,
        view_count=view_count,
        like_count=like_count,
    )
    db.add(artwork)
    await db.commit()
    return artwork


async def create_gallery(
    db: AsyncSession,
    curator: Users,
    *,
    name: str = "Spring Show",
    description: str | None = None,
    artworks: list[Artworks] | None = None,
    is_published: bool = False,
    view_count: int = 0,
) -> Galleries:
    gallery = Galleries(
        name=name,
        description=description,
        curator_id=curator.user_id,  # type: ignore[arg-type]
        is_published=is_published,
        view_count=view_count,
    )
    db.add(gallery)
    await db.flush()
    for position, artwork in enumerate(artworks or [], start=1):
        db.add(
            GalleryArtworks(
                gallery_id=gallery.gallery_id,  # type: ignore[arg-type]
                artwork_id=artwork.artwork_id,  # type: ignore[arg-type]
                display_order=position,
            )
        )
    await db.commit()
    return gallery


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
async def artist(db_session: AsyncSession) -> Users:
    return await create_user(db_session, "painter", UserRole.artist, bio="Paints sunsets")


@pytest.fixture
async def other_artist(db_session: AsyncSession) -> Users:
    return await create_user(db_session, "sculptor", UserRole.artist)


@pytest.fixture
async def curator(db_session: AsyncSession) -> Users:
    return await create_user(db_session, "curator", UserRole.curator)


@pytest.fixture
async def other_curator(db_session: AsyncSession) -> Users:
    return await create_user(db_session, "curator2", UserRole.curator)


@pytest.fixture
async def admin(db_session: AsyncSession) -> Users:
    return await create_user(db_session, "admin", UserRole.admin)


@pytest.fixture
def image_file() -> tuple[str, bytes, str]:
    """Multipart ``image`` field value."""
    return ("sunset.jpg", make_image_bytes(), "image/jpeg")
