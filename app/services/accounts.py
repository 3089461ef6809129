"""
Account service: registration, login, profile and account removal.
"""

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import SELF_REGISTER_ROLES, UserRole, settings
from app.core.database import transaction
from app.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from app.core.logging import get_logger
from app.core.security import create_access_token, get_password_hash, verify_password
from app.models import Artworks, ArtworkTags, Galleries, GalleryArtworks, Users
from app.schemas.auth import AuthResponse, LoginRequest, ProfileUpdateRequest, RegisterRequest
from app.schemas.common import UserResponse
from app.services.storage import delete_artwork_image

logger = get_logger(__name__)


def _auth_response(user: Users, message: str) -> AuthResponse:
    token = create_access_token(user.user_id, user.username, user.role)  # type: ignore[arg-type]
    return AuthResponse(
        message=message,
        token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserResponse.model_validate(user),
    )


async def _identity_taken(
    db: AsyncSession, username: str | None, email: str | None, exclude_user_id: int | None = None
) -> bool:
    conditions = []
    if username:
        conditions.append(Users.username == username)
    if email:
        conditions.append(Users.email == email)
    if not conditions:
        return False

    query = select(Users.user_id).where(or_(*conditions))  # type: ignore[call-overload]
    if exclude_user_id is not None:
        query = query.where(Users.user_id != exclude_user_id)
    result = await db.execute(query.limit(1))
    return result.first() is not None


async def register(db: AsyncSession, data: RegisterRequest) -> AuthResponse:
    """
    Create an artist or curator account and sign it in.

    Raises:
        ValidationError: role is not self-registrable
        ConflictError: username or email already in use
    """
    if data.role not in SELF_REGISTER_ROLES:
        raise ValidationError('Role must be either "artist" or "curator"')

    email = str(data.email).lower()
    if await _identity_taken(db, data.username, email):
        raise ConflictError("Username or email already exists")

    user = Users(
        username=data.username,
        email=email,
        password=get_password_hash(data.password),
        role=data.role,
    )
    db.add(user)
    await db.commit()

    logger.info("user_registered", user_id=user.user_id, role=user.role.value)
    return _auth_response(user, "User registered successfully")


async def login(db: AsyncSession, data: LoginRequest) -> AuthResponse:
    """
    Exchange email and password for a token.

    Unknown email and wrong password produce the same error.
    """
    email = str(data.email).lower()
    result = await db.execute(select(Users).where(Users.email == email))  # type: ignore[arg-type]
    user = result.scalar_one_or_none()

    if user is None or not verify_password(data.password, user.password):
        logger.warning("login_failed", email=email, reason="invalid_credentials")
        raise AuthenticationError("Invalid email or password")

    logger.info("user_logged_in", user_id=user.user_id)
    return _auth_response(user, "Login successful")


async def update_profile(db: AsyncSession, user: Users, data: ProfileUpdateRequest) -> UserResponse:
    """
    Update the caller's username, email and/or bio.

    ``bio`` may be set to null explicitly; username and email may not.
    """
    fields = data.model_dump(exclude_unset=True)
    for name in ("username", "email"):
        if fields.get(name) is None:
            fields.pop(name, None)
    if "email" in fields:
        fields["email"] = str(fields["email"]).lower()

    if not fields:
        raise ValidationError("No fields to update")

    if await _identity_taken(
        db, fields.get("username"), fields.get("email"), exclude_user_id=user.user_id
    ):
        raise ConflictError("Username or email already taken by another user")

    async with transaction(db):
        for name, value in fields.items():
            setattr(user, name, value)

    logger.info("profile_updated", user_id=user.user_id, fields=sorted(fields))
    return UserResponse.model_validate(user)


async def delete_account(db: AsyncSession, admin: Users, user_id: int) -> int:
    """
    Remove an account with its artworks and galleries.

    Join rows are deleted explicitly before their parents. Image files go
    last, best-effort.

    Returns:
        Number of artworks removed
    """
    if admin.role != UserRole.admin:
        raise AuthorizationError("Access denied. Admin role required.")
    if admin.user_id == user_id:
        raise ValidationError("Administrators cannot delete their own account")

    user = await db.get(Users, user_id)
    if user is None:
        raise NotFoundError("User not found")

    artwork_rows = await db.execute(
        select(Artworks.artwork_id, Artworks.image_url).where(  # type: ignore[call-overload]
            Artworks.artist_id == user_id
        )
    )
    artworks = artwork_rows.all()
    artwork_ids = [artwork_id for artwork_id, _ in artworks]
    image_urls = [image_url for _, image_url in artworks]
    if user.profile_image:
        image_urls.append(user.profile_image)

    gallery_ids = select(Galleries.gallery_id).where(Galleries.curator_id == user_id)  # type: ignore[call-overload]

    async with transaction(db):
        await db.execute(
            delete(GalleryArtworks).where(GalleryArtworks.gallery_id.in_(gallery_ids))  # type: ignore[attr-defined]
        )
        await db.execute(delete(Galleries).where(Galleries.curator_id == user_id))  # type: ignore[arg-type]
        if artwork_ids:
            await db.execute(
                delete(GalleryArtworks).where(GalleryArtworks.artwork_id.in_(artwork_ids))  # type: ignore[attr-defined]
            )
            await db.execute(
                delete(ArtworkTags).where(ArtworkTags.artwork_id.in_(artwork_ids))  # type: ignore[attr-defined]
            )
            await db.execute(delete(Artworks).where(Artworks.artist_id == user_id))  # type: ignore[arg-type]
        await db.execute(
            update(Artworks)
            .where(Artworks.curator_id == user_id)  # type: ignore[arg-type]
            .values(curator_id=None, updated_at=Artworks.updated_at)
            .execution_options(synchronize_session=False)
        )
        await db.delete(user)

    for image_url in image_urls:
        delete_artwork_image(image_url)

    logger.info(
        "user_deleted",
        user_id=user_id,
        deleted_by=admin.user_id,
        artworks_removed=len(artwork_ids),
    )
    return len(artwork_ids)
