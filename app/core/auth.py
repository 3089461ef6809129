"""
Authentication dependencies for FastAPI route protection.

This module provides dependency functions for:
- Extracting and verifying bearer JWT tokens from requests
- Loading the current user from the database
- Gating routes on account role (artist, curator, admin)
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import UserRole
from app.core.database import get_db
from app.core.errors import AuthenticationError, AuthorizationError
from app.core.logging import bind_user_id
from app.core.security import verify_access_token
from app.models.user import Users

# Define the security scheme for OpenAPI documentation.
# auto_error=False so a missing header reaches our own 401 rather than
# FastAPI's 403 default.
security = HTTPBearer(auto_error=False)

BearerCredentials = Annotated[HTTPAuthorizationCredentials | None, Depends(security)]


async def _load_user(db: AsyncSession, user_id: int) -> Users | None:
    result = await db.execute(select(Users).where(Users.user_id == user_id))  # type: ignore[arg-type]
    return result.scalar_one_or_none()


async def get_current_user(
    credentials: BearerCredentials,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Users:
    """
    Load current user from database using the bearer token.

    Raises:
        AuthenticationError: 401 if the token is missing, invalid or expired,
            or its user no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access denied. No token provided.")

    claims = verify_access_token(credentials.credentials)
    if claims is None:
        raise AuthenticationError("Invalid token.")

    user = await _load_user(db, claims.user_id)
    if user is None:
        raise AuthenticationError("User not found")

    bind_user_id(claims.user_id)
    return user


async def get_optional_current_user(
    credentials: BearerCredentials,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Users | None:
    """
    Get current user if authenticated, otherwise return None.

    Used by the browse endpoints, whose visibility rules differ between
    anonymous visitors, artists and curators. A bad token is treated as
    anonymous rather than rejected.
    """
    if credentials is None or not credentials.credentials:
        return None

    claims = verify_access_token(credentials.credentials)
    if claims is None:
        return None

    user = await _load_user(db, claims.user_id)
    if user is not None:
        bind_user_id(claims.user_id)
    return user


def require_roles(*roles: UserRole) -> Callable[[Users], Awaitable[Users]]:
    """
    Build a dependency that admits only the given roles.

    Example:
        CuratorUser = Annotated[Users, Depends(require_roles(UserRole.curator))]
    """
    allowed = frozenset(roles)
    role_names = " or ".join(role.value for role in roles).capitalize()
    denied_message = f"Access denied. {role_names} role required."

    async def dependency(
        current_user: Annotated[Users, Depends(get_current_user)],
    ) -> Users:
        if current_user.role not in allowed:
            raise AuthorizationError(denied_message)
        return current_user

    return dependency


def is_moderator(user: Users | None) -> bool:
    """Curators and admins see artworks in every status."""
    return user is not None and user.role in (UserRole.curator, UserRole.admin)


# Type aliases for dependency injection
CurrentUser = Annotated[Users, Depends(get_current_user)]
OptionalCurrentUser = Annotated[Users | None, Depends(get_optional_current_user)]
ArtistUser = Annotated[Users, Depends(require_roles(UserRole.artist))]
CuratorUser = Annotated[Users, Depends(require_roles(UserRole.curator))]
AdminUser = Annotated[Users, Depends(require_roles(UserRole.admin))]
ArtistOrAdminUser = Annotated[Users, Depends(require_roles(UserRole.artist, UserRole.admin))]
