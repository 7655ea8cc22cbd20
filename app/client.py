"""Admin-side client for the gallery API.

Uploads are validated locally first (type and size) so a rejected file never
costs a network round trip. The server repeats the check.
"""
import logging
import mimetypes
import os
from typing import Any, Dict, Optional, Sequence, Union

import requests

from .exceptions import ValidationError
from .validation import validate_image_descriptor

logger = logging.getLogger(__name__)

# .webp is only in the built-in table from Python 3.11
mimetypes.add_type("image/webp", ".webp")

PathLike = Union[str, os.PathLike]


class GalleryClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def first_file(files: Union[PathLike, Sequence[PathLike]]) -> Optional[PathLike]:
    """Single-file semantics: a multi-file drop or pick uses only the first entry."""
    if isinstance(files, (str, os.PathLike)):
        return files
    return files[0] if files else None


def describe_file(path: PathLike) -> Dict[str, Any]:
    content_type, _ = mimetypes.guess_type(os.fspath(path))
    return {
        "filename": os.path.basename(os.fspath(path)),
        "content_type": content_type or "application/octet-stream",
        "size": os.path.getsize(path),
    }


class GalleryAdminClient:
    def __init__(self, base_url: str, token: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _handle(self, response: requests.Response) -> Dict[str, Any]:
        try:
            result = response.json()
        except ValueError:
            raise GalleryClientError(f"Unexpected response ({response.status_code})", response.status_code)
        if not result.get("success"):
            raise GalleryClientError(result.get("error") or "Request failed", response.status_code)
        return result

    def login(self, username: str, password: str) -> str:
        response = self.session.post(
            f"{self.base_url}/api/auth/login",
            json={"username": username, "password": password},
            timeout=self.timeout,
        )
        token = self._handle(response)["data"]["access_token"]
        self.session.headers["Authorization"] = f"Bearer {token}"
        return token

    def upload_image(self, files: Union[PathLike, Sequence[PathLike]]) -> Dict[str, str]:
        """Validate and upload one image; returns ``{"imageUrl", "imageKey"}``.

        Raises ValidationError without contacting the server when the file is
        not an allowed image type or is too large.
        """
        path = first_file(files)
        if path is None:
            raise ValidationError("No file selected")
        descriptor = describe_file(path)
        validate_image_descriptor(descriptor["content_type"], descriptor["size"])

        with open(path, "rb") as fh:
            try:
                response = self.session.post(
                    f"{self.base_url}/api/upload",
                    files={"image": (descriptor["filename"], fh, descriptor["content_type"])},
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                logger.error(f"Upload of {descriptor['filename']} failed: {e}")
                raise GalleryClientError("Network error occurred during upload") from e
        return self._handle(response)["data"]

    def delete_image(self, image_key: str) -> None:
        response = self.session.delete(
            f"{self.base_url}/api/delete-image",
            json={"imageKey": image_key},
            timeout=self.timeout,
        )
        self._handle(response)
