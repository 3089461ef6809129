"""
Shared/common Pydantic schemas used across multiple endpoints
"""

from pydantic import BaseModel

from app.config import UserRole
from app.schemas.base import UTCDatetime


class TagResponse(BaseModel):
    """Tag as listed for the curator's tag picker."""

    tag_id: int
    name: str
    created_at: UTCDatetime

    # Allow Pydantic to read from SQLAlchemy model attributes (not just dicts)
    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    """
    Account as returned to its owner.

    Includes email, so it must only ever be built for the authenticated
    user themself (login, register, profile).
    """

    user_id: int
    username: str
    email: str
    role: UserRole
    profile_image: str | None = None
    bio: str | None = None
    created_at: UTCDatetime

    model_config = {"from_attributes": True}
