"""
SQLModel-based Artwork models with inheritance for security

This module defines the Artworks database model using SQLModel. The
inheritance structure is:

ArtworkBase (fields an artist supplies)
    ├─> Artworks (database table, adds ownership, moderation and counters)
    └─> ArtworkResponse/ArtworkDetail (API schemas, defined in app/schemas)

Moderation fields (status, curator_feedback, curator_id) live only on the
table model: no request schema inherits them, so an artist can never set them.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKeyConstraint, Index, Text, func
from sqlmodel import Field, SQLModel

from app.config import ArtworkStatus
from app.utils.dates import utc_now


class ArtworkBase(SQLModel):
    """
    Base model with the descriptive fields of an artwork.

    Shared between the database table and the API response schemas.
    """

    title: str = Field(max_length=100)
    description: str | None = Field(default=None, sa_type=Text)
    medium: str = Field(max_length=50)
    dimensions: str | None = Field(default=None, max_length=50)


class Artworks(ArtworkBase, table=True):
    """
    Database table for artworks.

    Extends ArtworkBase with:
    - Primary key and owning artist
    - Image reference (relative URL under /uploads)
    - Moderation state set only by a curator review
    - View and like counters
    """

    __tablename__ = "artworks"

    __table_args__ = (
        ForeignKeyConstraint(
            ["artist_id"],
            ["users.user_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_artworks_artist_id",
        ),
        ForeignKeyConstraint(
            ["curator_id"],
            ["users.user_id"],
            ondelete="SET NULL",
            onupdate="CASCADE",
            name="fk_artworks_curator_id",
        ),
        Index("fk_artworks_artist_id", "artist_id"),
        Index("fk_artworks_curator_id", "curator_id"),
        Index("idx_artworks_status_created", "status", "created_at"),
        Index("idx_artworks_medium", "medium"),
    )

    # Primary key
    artwork_id: int | None = Field(default=None, primary_key=True)

    # Ownership
    artist_id: int

    # Image
    image_url: str = Field(max_length=255)

    # Moderation (written only by review)
    status: ArtworkStatus = Field(default=ArtworkStatus.pending)
    curator_feedback: str | None = Field(default=None, sa_type=Text)
    curator_id: int | None = Field(default=None)

    # Counters
    view_count: int = Field(default=0, sa_type=BigInteger)
    like_count: int = Field(default=0, sa_type=BigInteger)

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime,
        sa_column_kwargs={"server_default": func.now()},
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime,
        sa_column_kwargs={"server_default": func.now(), "onupdate": utc_now},
    )
