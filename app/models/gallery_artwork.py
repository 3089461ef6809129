"""
GalleryArtworks junction table: gallery membership with display order.

display_order values are assigned by append (max + 1) or set explicitly by a
reorder; they are never compacted, so gaps and even duplicates are allowed.
"""

from sqlalchemy import ForeignKeyConstraint, Index
from sqlmodel import Field, SQLModel


class GalleryArtworks(SQLModel, table=True):
    """Database table for gallery-artwork memberships."""

    __tablename__ = "gallery_artworks"

    __table_args__ = (
        ForeignKeyConstraint(
            ["gallery_id"],
            ["galleries.gallery_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_gallery_artworks_gallery_id",
        ),
        ForeignKeyConstraint(
            ["artwork_id"],
            ["artworks.artwork_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_gallery_artworks_artwork_id",
        ),
        Index("fk_gallery_artworks_artwork_id", "artwork_id"),
        Index("idx_gallery_artworks_order", "gallery_id", "display_order"),
    )

    # Junction table primary keys
    gallery_id: int = Field(primary_key=True)
    artwork_id: int = Field(primary_key=True)

    display_order: int
