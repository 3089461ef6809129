"""
Artwork image storage on the local filesystem.

Uploads are validated (declared content type, extension, size, and an actual
Pillow decode), written under ``settings.STORAGE_PATH`` with a random name and
referenced by the relative URL ``/uploads/<filename>``. Deletion is
best-effort: failures are logged and never raised.
"""

import uuid
from pathlib import Path as FilePath

from fastapi import UploadFile
from PIL import Image

from app.config import settings
from app.core.errors import ValidationError
from app.core.logging import get_logger

logger = get_logger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def storage_dir() -> FilePath:
    """Upload directory, created on first use."""
    path = FilePath(settings.STORAGE_PATH)
    path.mkdir(parents=True, exist_ok=True)
    return path


def image_url_for(filename: str) -> str:
    return f"{settings.UPLOADS_URL_PREFIX.rstrip('/')}/{filename}"


def path_for_url(image_url: str) -> FilePath | None:
    """
    Map an ``/uploads/<file>`` URL back to its file.

    Returns None for URLs outside the upload prefix. Only the final path
    component is used.
    """
    prefix = settings.UPLOADS_URL_PREFIX.rstrip("/") + "/"
    if not image_url or not image_url.startswith(prefix):
        return None
    filename = FilePath(image_url[len(prefix) :]).name
    if not filename:
        return None
    return FilePath(settings.STORAGE_PATH) / filename


def validate_upload_headers(file: UploadFile) -> str:
    """
    Check the client-declared content type and extension.

    These values are user-controlled and only a first filter; the saved bytes
    are verified with Pillow afterwards.

    Returns:
        The normalized file extension, including the dot
    """
    if not file.content_type or not file.content_type.startswith("image/"):
        raise ValidationError("Only image files are allowed")

    ext = FilePath(file.filename or "").suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationError(
            f"File extension {ext or '(none)'} not allowed. "
            f"Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )
    return ext


def verify_image(file_path: FilePath) -> None:
    """Verify the file actually decodes as an image."""
    try:
        with Image.open(file_path) as img:
            img.verify()
    except Exception as e:
        raise ValidationError("File is not a valid image") from e


async def save_artwork_image(file: UploadFile) -> str:
    """
    Validate and store an uploaded artwork image.

    Returns:
        The image URL (``/uploads/<filename>``) to persist on the artwork

    Raises:
        ValidationError: the upload is not an acceptable image
    """
    ext = validate_upload_headers(file)

    content = await file.read()
    if not content:
        raise ValidationError("Image file is required")
    if len(content) > settings.MAX_IMAGE_SIZE:
        raise ValidationError(
            f"File size exceeds maximum of {settings.MAX_IMAGE_SIZE} bytes"
        )

    filename = f"{uuid.uuid4().hex}{ext}"
    final_path = storage_dir() / filename

    try:
        with open(final_path, "wb") as f:
            f.write(content)
        verify_image(final_path)
    except Exception:
        # Remove whatever was written before re-raising
        final_path.unlink(missing_ok=True)
        raise

    logger.info("image_stored", filename=filename, size=len(content))
    return image_url_for(filename)


def delete_artwork_image(image_url: str | None) -> bool:
    """
    Delete a stored image, best-effort.

    Returns:
        True if a file was removed
    """
    if not image_url:
        return False

    path = path_for_url(image_url)
    if path is None:
        logger.warning("image_delete_skipped", image_url=image_url, reason="outside_upload_dir")
        return False

    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("image_delete_failed", image_url=image_url, error="file not found")
        return False
    except OSError as e:
        logger.warning("image_delete_failed", image_url=image_url, error=str(e))
        return False

    logger.info("image_deleted", image_url=image_url)
    return True
