"""
Authentication schemas for request/response validation.

This module defines Pydantic models for account-related API operations:
- Registration and login credentials
- Token responses
- Profile updates
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.config import SELF_REGISTER_ROLES, UserRole
from app.core.security import validate_password_strength
from app.schemas.base import ApiResponse
from app.schemas.common import UserResponse


class RegisterRequest(BaseModel):
    """Request schema for user registration."""

    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr = Field(..., max_length=100)
    password: str = Field(..., min_length=8, max_length=255)
    role: UserRole

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Username must be at least 3 characters long")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Validate password strength."""
        is_valid, error_message = validate_password_strength(v)
        if not is_valid:
            raise ValueError(error_message)
        return v

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: UserRole) -> UserRole:
        """Admins are provisioned out of band, never self-registered."""
        if v not in SELF_REGISTER_ROLES:
            raise ValueError('Role must be either "artist" or "curator"')
        return v


class LoginRequest(BaseModel):
    """Request schema for user login."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=255)


class AuthResponse(ApiResponse):
    """Response schema for successful registration or login."""

    token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    user: UserResponse


class ProfileResponse(ApiResponse):
    """Response schema for the authenticated user's profile."""

    user: UserResponse


class ProfileUpdateRequest(BaseModel):
    """Request schema for profile updates - all fields optional"""

    username: str | None = Field(default=None, min_length=3, max_length=50)
    email: EmailStr | None = Field(default=None, max_length=100)
    bio: str | None = None

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Username must be at least 3 characters long")
        return v
