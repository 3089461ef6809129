"""
SQLModel table models - database schema.

For modifications:
1. Edit the appropriate model file in app/models/
2. Create an Alembic migration to reflect the changes
3. Use Alembic to manage all schema changes going forward
"""

from app.models.artwork import Artworks
from app.models.artwork_tag import ArtworkTags
from app.models.gallery import Galleries
from app.models.gallery_artwork import GalleryArtworks
from app.models.tag import Tags
from app.models.user import Users

__all__ = [
    # Core entity models
    "Users",
    "Artworks",
    "Tags",
    "Galleries",
    # Junction/relationship tables
    "ArtworkTags",
    "GalleryArtworks",
]
