"""
ArtworkTags junction table connecting tags to artworks.

Composite primary key (artwork_id, tag_id); rows cascade-delete with either
parent.
"""

from sqlalchemy import ForeignKeyConstraint, Index
from sqlmodel import Field, SQLModel


class ArtworkTags(SQLModel, table=True):
    """Database table for artwork-tag links."""

    __tablename__ = "artwork_tags"

    __table_args__ = (
        ForeignKeyConstraint(
            ["artwork_id"],
            ["artworks.artwork_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_artwork_tags_artwork_id",
        ),
        ForeignKeyConstraint(
            ["tag_id"],
            ["tags.tag_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_artwork_tags_tag_id",
        ),
        Index("fk_artwork_tags_tag_id", "tag_id"),
    )

    # Junction table primary keys
    artwork_id: int = Field(primary_key=True)
    tag_id: int = Field(primary_key=True)
