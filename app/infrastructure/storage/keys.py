import os
import secrets
import string
import time
from typing import Optional

TOKEN_ALPHABET = string.ascii_lowercase + string.digits
TOKEN_LENGTH = 13

_CONTENT_TYPE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def random_token(length: int = TOKEN_LENGTH) -> str:
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def extension_for(original_filename: str, content_type: Optional[str] = None) -> str:
    """Extension for a stored object.

    The stored bytes are whatever the compressor produced, so the content
    type wins over the client-supplied filename when it is known.
    """
    if content_type:
        ext = _CONTENT_TYPE_EXTENSIONS.get(content_type.lower())
        if ext:
            return ext
    suffix = os.path.splitext(original_filename or "")[1].lstrip(".")
    return suffix.lower() or "bin"


def generate_storage_key(namespace: str, original_filename: str, content_type: Optional[str] = None) -> str:
    """``<namespace>/<unix-millis>-<token>.<ext>``; unique without coordination."""
    timestamp = int(time.time() * 1000)
    ext = extension_for(original_filename, content_type)
    return f"{namespace.strip('/')}/{timestamp}-{random_token()}.{ext}"
