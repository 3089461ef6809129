"""
SQLModel-based User models with inheritance for security

This module defines the Users database model using SQLModel, which combines
SQLAlchemy and Pydantic functionality. The inheritance structure is:

UserBase (shared public fields)
    ├─> Users (database table, adds credentials and contact info)
    └─> UserResponse/ProfileResponse (API schemas, defined in app/schemas)

This approach eliminates field duplication while maintaining security boundaries.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Text, func
from sqlmodel import Field, SQLModel

from app.config import UserRole
from app.utils.dates import utc_now


class UserBase(SQLModel):
    """
    Base model with shared public fields for Users.

    These fields are safe to expose via the API.
    """

    username: str = Field(max_length=50)
    role: UserRole = Field(description="Account role: artist, curator or admin")

    # Public profile
    profile_image: str | None = Field(default=None, max_length=255)
    bio: str | None = Field(default=None, sa_type=Text)


class Users(UserBase, table=True):
    """
    Database table for users with credential and contact fields.

    Internal/sensitive fields (should NOT be exposed via public API):
    - password: bcrypt hash (highly sensitive)
    - email: privacy-sensitive, only returned to the account owner
    """

    __tablename__ = "users"

    __table_args__ = (
        Index("idx_users_username", "username", unique=True),
        Index("idx_users_email", "email", unique=True),
        Index("idx_users_role", "role"),
    )

    # Primary key
    user_id: int | None = Field(default=None, primary_key=True)

    # Contact info (privacy-sensitive)
    email: str = Field(max_length=100)

    # Authentication (highly sensitive - never expose)
    password: str = Field(max_length=255)

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

    # Note: Relationships are intentionally omitted.
    # Foreign keys are sufficient for queries, and omitting relationships avoids
    # implicit lazy loads, which are not allowed on an AsyncSession.
