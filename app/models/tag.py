"""
SQLModel-based Tag models

TagBase (shared public fields)
    ├─> Tags (database table, adds primary key and timestamp)
    └─> TagResponse (API schema, defined in app/schemas)

Tags are created lazily by curator review (see app.services.tagging) and are
never deleted when an artwork loses them; only the artwork_tags row goes.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, func
from sqlalchemy.dialects import mysql
from sqlmodel import Field, SQLModel

from app.utils.dates import utc_now

TAG_NAME_MAX_LENGTH = 50


class TagBase(SQLModel):
    """Base model with shared public fields for Tags."""

    # Exact, case-sensitive name; "Abstract" and "abstract" are different tags.
    # MySQL compares with the column collation, so force a binary one there.
    name: str = Field(
        max_length=TAG_NAME_MAX_LENGTH,
        sa_type=String(TAG_NAME_MAX_LENGTH).with_variant(
            mysql.VARCHAR(TAG_NAME_MAX_LENGTH, collation="utf8mb4_bin"), "mysql", "mariadb"
        ),
    )


class Tags(TagBase, table=True):
    """Database table for tags."""

    __tablename__ = "tags"

    __table_args__ = (Index("idx_tags_name", "name", unique=True),)

    # Primary key
    tag_id: int | None = Field(default=None, primary_key=True)

    # Public timestamp
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime,
        sa_column_kwargs={"server_default": func.now()},
    )
