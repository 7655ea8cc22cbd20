"""Type and size gate for inbound images.

The same rules run twice: in the admin client before any bytes leave the
machine, and again on the server where the client is not trusted.
"""
from typing import Iterable, Optional

from .config import settings
from .exceptions import ValidationError

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
MAX_IMAGE_SIZE = 10 * 1024 * 1024

CLIENT_TYPE_MESSAGE = "Please upload a valid image file (JPEG, PNG, or WebP)"
CLIENT_SIZE_MESSAGE = "File size must be less than 10MB"
SERVER_TYPE_MESSAGE = "Invalid file type. Please upload JPEG, PNG, or WebP images."
SERVER_SIZE_MESSAGE = "File too large. Please upload images smaller than 10MB."
MISSING_FILE_MESSAGE = "No file uploaded"


def _check(content_type: Optional[str], size: int, allowed: Iterable[str], max_size: int,
           type_message: str, size_message: str) -> None:
    if (content_type or "").lower() not in allowed:
        raise ValidationError(type_message)
    if size > max_size:
        raise ValidationError(size_message)


def validate_image_descriptor(content_type: Optional[str], size: int) -> None:
    """Client-side check on a file descriptor. Raises ValidationError on reject."""
    _check(content_type, size, ALLOWED_IMAGE_TYPES, MAX_IMAGE_SIZE,
           CLIENT_TYPE_MESSAGE, CLIENT_SIZE_MESSAGE)


def validate_upload(content_type: Optional[str], size: int) -> None:
    """Server-side re-validation using the configured limits."""
    _check(content_type, size, settings.ALLOWED_IMAGE_TYPES, settings.MAX_FILE_SIZE,
           SERVER_TYPE_MESSAGE, SERVER_SIZE_MESSAGE)
