import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from starlette.datastructures import UploadFile

from ..ports.storage_repo import ObjectStore
from ...config import settings
from ...exceptions import UploadCancelledError, ValidationError
from ...media_utils import CompressionOptions, compress_image
from ...validation import MISSING_FILE_MESSAGE, validate_upload

logger = logging.getLogger(__name__)


@dataclass
class UploadedAsset:
    data: bytes
    content_type: Optional[str]
    size: int
    filename: str

    @classmethod
    async def from_upload_file(cls, upload: UploadFile) -> "UploadedAsset":
        """Read an uploaded part without ever holding more than MAX_FILE_SIZE + 1 bytes.

        The multipart parser has already spooled the part and counted its
        size, so an oversized file is refused before it is read into memory.
        """
        if upload.size is not None:
            validate_upload(upload.content_type, upload.size)
        data = await upload.read(settings.MAX_FILE_SIZE + 1)
        validate_upload(upload.content_type, len(data))
        return cls(
            data=data,
            content_type=upload.content_type,
            size=len(data),
            filename=upload.filename or "upload",
        )


@dataclass(frozen=True)
class ImageReference:
    image_url: str
    image_key: str


@dataclass
class ImageUploadService:
    """Validate, compress and store one uploaded image.

    Either both compression and storage succeed and an ImageReference is
    returned, or an error is raised and nothing is referenced. Callers that
    persist the reference own any retry policy.
    """

    object_store: ObjectStore
    options: CompressionOptions = field(default_factory=CompressionOptions)

    async def upload(
        self,
        asset: Optional[UploadedAsset],
        is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
    ) -> ImageReference:
        if asset is None or not asset.data:
            raise ValidationError(MISSING_FILE_MESSAGE)
        validate_upload(asset.content_type, asset.size)

        normalized = await asyncio.to_thread(compress_image, asset.data, self.options)
        key = self.object_store.generate_key(asset.filename, normalized.content_type)

        # last point where the upload can be abandoned without touching storage
        if is_disconnected is not None and await is_disconnected():
            logger.info(f"Client disconnected before storing {asset.filename}; aborting")
            raise UploadCancelledError()

        image_url = await asyncio.to_thread(
            self.object_store.put, normalized.data, key, normalized.content_type
        )
        logger.info(f"Uploaded {asset.filename} as {key} ({normalized.width}x{normalized.height})")
        return ImageReference(image_url=image_url, image_key=key)
