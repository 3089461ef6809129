"""
SQLModel-based Gallery models with inheritance for security

GalleryBase (fields a curator edits)
    ├─> Galleries (database table, adds ownership, publish flag and counter)
    └─> GalleryResponse/GalleryDetail (API schemas, defined in app/schemas)

A gallery may only be published while it has at least one member artwork;
that rule is enforced in app.services.galleries, not by the schema.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKeyConstraint, Index, Text, func
from sqlmodel import Field, SQLModel

from app.utils.dates import utc_now


class GalleryBase(SQLModel):
    """Base model with shared public fields for Galleries."""

    name: str = Field(max_length=100)
    description: str | None = Field(default=None, sa_type=Text)


class Galleries(GalleryBase, table=True):
    """Database table for galleries."""

    __tablename__ = "galleries"

    __table_args__ = (
        ForeignKeyConstraint(
            ["curator_id"],
            ["users.user_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_galleries_curator_id",
        ),
        Index("fk_galleries_curator_id", "curator_id"),
        Index("idx_galleries_published_created", "is_published", "created_at"),
    )

    # Primary key
    gallery_id: int | None = Field(default=None, primary_key=True)

    # Ownership
    curator_id: int

    # Publication state
    is_published: bool = Field(default=False)

    # Counter
    view_count: int = Field(default=0, sa_type=BigInteger)

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
