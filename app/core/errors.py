"""
Error taxonomy for the gallery API.

Every error is an HTTPException so services can raise them directly and the
HTTP status travels with the exception. The handlers in app.main render them
as ``{"success": false, "message": ...}``.
"""

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base class: subclasses pin the status code and a default message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None, headers: dict[str, str] | None = None):
        super().__init__(
            status_code=type(self).status_code,
            detail=message or self.default_message,
            headers=headers,
        )

    @property
    def message(self) -> str:
        return str(self.detail)


class ValidationError(AppError):
    """Missing or invalid input (400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthenticationError(AppError):
    """Missing, invalid or expired credentials (401)."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access denied. No token provided."

    def __init__(self, message: str | None = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(AppError):
    """Role or ownership mismatch (403)."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFoundError(AppError):
    """No such entity (404)."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    """Uniqueness violation: duplicate account, duplicate membership (409)."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class StoreError(AppError):
    """Underlying persistence failure (500)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "A database error occurred"
