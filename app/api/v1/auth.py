"""
Authentication API endpoints.

This module provides endpoints for:
- Registration of artist and curator accounts
- Login with email and password (returns a bearer token)
- Reading and updating the caller's own profile
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUser
from app.core.database import get_db
from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    RegisterRequest,
)
from app.schemas.common import UserResponse
from app.services import accounts

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """
    Register a new artist or curator account.

    Returns a token so the client is signed in straight away.
    """
    return await accounts.register(db, data)


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """Exchange email and password for an access token."""
    return await accounts.login(db, data)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(current_user: CurrentUser) -> ProfileResponse:
    """Get the authenticated user's profile."""
    return ProfileResponse(user=UserResponse.model_validate(current_user))


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    data: ProfileUpdateRequest,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileResponse:
    """
    Update username, email or bio.

    **Errors:**
    - 400: no fields given
    - 409: username or email belongs to another account
    """
    user = await accounts.update_profile(db, current_user, data)
    return ProfileResponse(message="Profile updated successfully", user=user)
