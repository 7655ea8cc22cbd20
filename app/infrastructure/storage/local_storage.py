import logging
import os
import tempfile
from typing import Optional

from ...application.ports.storage_repo import ObjectStore
from ...exceptions import StorageError
from .keys import generate_storage_key

logger = logging.getLogger(__name__)


class LocalObjectStore(ObjectStore):
    """Stores objects under ``upload_dir``; served by the app at ``/uploads``."""

    def __init__(self, upload_dir: str, base_url: str, namespace: str = "artworks") -> None:
        self.upload_dir = os.path.abspath(upload_dir)
        self.base_url = base_url.rstrip("/")
        self.namespace = namespace

    def _path(self, key: str) -> str:
        path = os.path.abspath(os.path.join(self.upload_dir, key))
        if os.path.commonpath([path, self.upload_dir]) != self.upload_dir or path == self.upload_dir:
            raise StorageError(f"Key escapes upload directory: {key!r}")
        return path

    def generate_key(self, original_filename: str, content_type: Optional[str] = None) -> str:
        return generate_storage_key(self.namespace, original_filename, content_type)

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/uploads/{key}"

    def put(self, data: bytes, key: str, content_type: str) -> str:
        path = self._path(key)
        dest_dir = os.path.dirname(path)
        try:
            os.makedirs(dest_dir, exist_ok=True)
            # write-then-rename so a failed write never leaves a partial object
            fd, tmp_path = tempfile.mkstemp(dir=dest_dir, prefix=".upload-")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Local storage upload error for {key}: {e}")
            raise StorageError("Failed to upload image to storage") from e
        logger.info(f"Stored {len(data)} bytes at {key} ({content_type})")
        return self.public_url(key)

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.info(f"Object {key} already absent")
        except OSError as e:
            logger.error(f"Local storage delete error for {key}: {e}")
            raise StorageError("Failed to delete image from storage") from e
