import io
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from PIL import Image, ImageOps

from .exceptions import ProcessingError

logger = logging.getLogger(__name__)

UNKNOWN_DIMENSIONS = (0, 0)


class ImageFormat(str, Enum):
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"

    @property
    def content_type(self) -> str:
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        return "jpg" if self is ImageFormat.JPEG else self.value

    @property
    def pil_format(self) -> str:
        return self.value.upper()

    @classmethod
    def from_content_type(cls, content_type: str) -> "ImageFormat":
        subtype = content_type.lower().split("/")[-1]
        if subtype == "jpg":
            subtype = "jpeg"
        return cls(subtype)


@dataclass(frozen=True)
class CompressionOptions:
    max_width: int = 1200
    max_height: int = 1200
    quality: int = 80
    format: ImageFormat = ImageFormat.JPEG


@dataclass(frozen=True)
class NormalizedImage:
    """Re-encoded image bytes. width/height of 0 mean "unknown"."""

    data: bytes
    format: ImageFormat
    quality: int
    width: int
    height: int

    @property
    def content_type(self) -> str:
        return self.format.content_type


def calculate_dimensions(width: int, height: int, max_width: int, max_height: int) -> Tuple[int, int]:
    """Scale (width, height) down into the bounds, keeping aspect ratio.

    Landscape images clamp on width, portrait and square ones on height.
    Images already inside the bounds are returned unchanged.
    """
    if not width or not height:
        return width, height
    if width <= max_width and height <= max_height:
        return width, height

    aspect_ratio = width / height
    if aspect_ratio > 1:
        new_width = min(width, max_width)
        new_height = round(new_width / aspect_ratio)
    else:
        new_height = min(height, max_height)
        new_width = round(new_height * aspect_ratio)
    return max(1, new_width), max(1, new_height)


def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info


def _prepare_mode(img: Image.Image, target: ImageFormat) -> Image.Image:
    if target is ImageFormat.JPEG:
        if _has_alpha(img):
            rgba = img.convert("RGBA")
            background = Image.new("RGB", rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.getchannel("A"))
            return background
        if img.mode not in ("RGB", "L"):
            return img.convert("RGB")
        return img
    if img.mode not in ("RGB", "RGBA", "L", "LA") or "transparency" in img.info:
        return img.convert("RGBA" if _has_alpha(img) else "RGB")
    return img


def _upright(img: Image.Image) -> Tuple[Image.Image, Tuple[int, int]]:
    # Orientation has to be applied before any dimension is read.
    try:
        rotated = ImageOps.exif_transpose(img)
    except Exception as e:
        logger.warning(f"Could not read image orientation metadata: {e}")
        return img, UNKNOWN_DIMENSIONS
    return rotated, rotated.size


def _save_kwargs(options: CompressionOptions) -> dict:
    if options.format is ImageFormat.JPEG:
        return {"quality": options.quality, "progressive": True, "optimize": True}
    if options.format is ImageFormat.PNG:
        return {"optimize": True, "compress_level": 8}
    return {"quality": options.quality, "method": 6}


def compress_image(image_data: bytes, options: Optional[CompressionOptions] = None) -> NormalizedImage:
    """Normalize raw upload bytes for durable storage.

    Applies EXIF orientation, bounds the size to ``options.max_width`` x
    ``options.max_height`` without enlarging, and re-encodes in the target
    format with every metadata block dropped.  Any decode or encode failure
    is reported as a single ProcessingError.
    """
    options = options or CompressionOptions()
    try:
        with Image.open(io.BytesIO(image_data)) as loaded:
            loaded.load()
            img, (width, height) = _upright(loaded)

            new_width, new_height = calculate_dimensions(
                width, height, options.max_width, options.max_height
            )
            if (new_width, new_height) != (width, height):
                img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

            img = _prepare_mode(img, options.format)
            img.info = {}

            output = io.BytesIO()
            img.save(output, format=options.format.pil_format, **_save_kwargs(options))
            compressed = output.getvalue()
    except Exception as e:
        logger.error(f"Image compression error: {e}")
        raise ProcessingError("Failed to compress image") from e

    logger.info(f"Image compressed: {len(image_data)} bytes -> {len(compressed)} bytes")
    return NormalizedImage(
        data=compressed,
        format=options.format,
        quality=options.quality,
        width=new_width,
        height=new_height,
    )


def get_image_dimensions(image_data: bytes) -> Tuple[int, int]:
    """Upright (width, height) of an image, or (0, 0) if it cannot be read."""
    try:
        with Image.open(io.BytesIO(image_data)) as img:
            _, size = _upright(img)
            return size
    except Exception as e:
        logger.error(f"Error getting image dimensions: {e}")
        return UNKNOWN_DIMENSIONS
