import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from ..dependencies import get_current_admin, get_object_store, get_upload_service
from ..exceptions import ValidationError, create_success_response
from ..application.ports.admin_repo import AdminDto
from ..application.ports.storage_repo import ObjectStore
from ..application.services.image_service import ImageUploadService, UploadedAsset
from ..schemas import DeleteImageRequest, UploadImageResponse
from ..validation import MISSING_FILE_MESSAGE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Images"])

IMAGE_FIELD = "image"


async def read_single_image(request: Request) -> Optional[UploadedAsset]:
    """Parse the multipart body into the one uploaded image, if any."""
    if not request.headers.get("content-type", "").startswith("multipart/form-data"):
        return None
    form = await request.form()
    try:
        files = [item for item in form.getlist(IMAGE_FIELD) if isinstance(item, UploadFile)]
        if not files:
            return None
        if len(files) > 1:
            raise ValidationError("Only one image can be uploaded at a time")
        return await UploadedAsset.from_upload_file(files[0])
    finally:
        await form.close()


# The body is read inside the handler so the session check always comes first.
@router.post("/upload")
async def upload_image(
    request: Request,
    admin: AdminDto = Depends(get_current_admin),
    service: ImageUploadService = Depends(get_upload_service),
):
    asset = await read_single_image(request)
    if asset is None:
        raise ValidationError(MISSING_FILE_MESSAGE)
    logger.info(f"Admin {admin.username} uploading {asset.filename} ({asset.size} bytes)")
    reference = await service.upload(asset, is_disconnected=request.is_disconnected)
    body = UploadImageResponse(image_url=reference.image_url, image_key=reference.image_key)
    return create_success_response(body.to_api(), message="Image uploaded successfully")


@router.delete("/delete-image")
async def delete_image(
    payload: DeleteImageRequest,
    admin: AdminDto = Depends(get_current_admin),
    store: ObjectStore = Depends(get_object_store),
):
    if not payload.image_key:
        raise ValidationError("Image key is required")
    await asyncio.to_thread(store.delete, payload.image_key)
    logger.info(f"Admin {admin.username} deleted image {payload.image_key}")
    return create_success_response(message="Image deleted successfully")
