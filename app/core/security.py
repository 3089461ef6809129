"""
Passwords and access tokens.

Passwords are stored as bcrypt hashes. Access tokens are HS256 JWTs that
carry the account id, username and role, so the frontend can render the
signed-in state without another request.
"""

import base64
import hashlib
import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from app.config import UserRole, settings

BCRYPT_ROUNDS = 12
BCRYPT_MAX_BYTES = 72
TOKEN_TYPE = "access"
MIN_PASSWORD_LENGTH = 8

# (pattern that must match, message when it doesn't)
_PASSWORD_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"[A-Za-z]"), "Password must contain at least one letter"),
    (re.compile(r"\d"), "Password must contain at least one digit"),
)


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of an access token."""

    user_id: int
    username: str
    role: UserRole
    expires_at: datetime


def validate_password_strength(password: str) -> tuple[bool, str | None]:
    """
    Check a new password: at least 8 characters, with a letter and a digit.

    Returns ``(True, None)`` or ``(False, reason)``.
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(password):
            return False, message
    return True, None


def _bcrypt_input(password: str) -> bytes:
    # bcrypt ignores everything past 72 bytes; longer inputs are reduced to a
    # base64 SHA-256 digest (44 bytes) so the whole password still counts
    raw = password.encode("utf-8")
    if len(raw) > BCRYPT_MAX_BYTES:
        return base64.b64encode(hashlib.sha256(raw).digest())
    return raw


def get_password_hash(password: str) -> str:
    digest = bcrypt.hashpw(_bcrypt_input(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return digest.decode("ascii")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """False for a wrong password and for a stored value that isn't a bcrypt hash."""
    try:
        return bcrypt.checkpw(_bcrypt_input(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(
    user_id: int,
    username: str,
    role: UserRole | str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Sign an access token for an account.

    ``expires_delta`` defaults to ``ACCESS_TOKEN_EXPIRE_MINUTES``.
    """
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": str(user_id),
        "username": username,
        "role": UserRole(role).value,
        "type": TOKEN_TYPE,
        "exp": datetime.now(UTC) + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_access_token(token: str) -> TokenClaims | None:
    """
    Decode a bearer token.

    Returns None when the token is expired, badly signed, malformed, not an
    access token, or names a role that doesn't exist.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.InvalidTokenError:
        # ExpiredSignatureError is a subclass
        return None

    if payload.get("type") != TOKEN_TYPE:
        return None

    try:
        return TokenClaims(
            user_id=int(payload["sub"]),
            username=str(payload.get("username", "")),
            role=UserRole(payload.get("role")),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
        )
    except (TypeError, ValueError):
        return None
