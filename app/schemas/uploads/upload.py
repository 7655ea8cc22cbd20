from typing import Optional

from ..common.common import CamelModel


class UploadImageResponse(CamelModel):
    image_url: str
    image_key: str


class DeleteImageRequest(CamelModel):
    image_key: Optional[str] = None
