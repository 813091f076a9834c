"""
Image preprocessing: Pillow wrapper that validates uploads and prepares them for the vision model.
"""
import base64
import io
import logging
import os
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

from config import settings

logger = logging.getLogger(__name__)

MAX_WIDTH = 1024
MAX_HEIGHT = 1024
JPEG_QUALITY = 85
ALLOWED_FORMATS = {"JPEG", "PNG", "WEBP"}


class ImageProcessingError(Exception):
    """The upload could not be decoded or re-encoded."""


@dataclass
class ProcessedImage:
    base64: str
    mime_type: str
    width: int      # original dimensions
    height: int
    size: int       # encoded JPEG bytes


def validate_image(path: str) -> bool:
    """True when the file is a JPEG/PNG/WEBP with real dimensions and within the size limit."""
    try:
        if os.path.getsize(path) > settings.MAX_UPLOAD_BYTES:
            return False
        with Image.open(path) as img:
            if img.format not in ALLOWED_FORMATS:
                return False
            width, height = img.size
            if not width or not height:
                return False
            img.verify()
        return True
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        logger.warning("Image validation failed for %s: %s", path, e)
        return False


def process_upload(path: str) -> ProcessedImage:
    """Downscale to fit 1024x1024 (never enlarge), re-encode as JPEG, base64-encode."""
    try:
        with Image.open(path) as img:
            width, height = img.size
            img = ImageOps.exif_transpose(img)
            if img.mode != "RGB":
                img = img.convert("RGB")
            img.thumbnail((MAX_WIDTH, MAX_HEIGHT))
            buf = io.BytesIO()
            img.save(buf, format="JPEG", quality=JPEG_QUALITY)
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        logger.error("Image processing error for %s: %s", path, e)
        raise ImageProcessingError("Failed to process uploaded image") from e

    data = buf.getvalue()
    return ProcessedImage(
        base64=base64.b64encode(data).decode("ascii"),
        mime_type="image/jpeg",
        width=width,
        height=height,
        size=len(data),
    )


def create_thumbnail(path: str, out_path: str, size: int = 200) -> str:
    """Centre-cropped square JPEG thumbnail."""
    try:
        with Image.open(path) as img:
            img = ImageOps.exif_transpose(img).convert("RGB")
            thumb = ImageOps.fit(img, (size, size), centering=(0.5, 0.5))
            thumb.save(out_path, format="JPEG", quality=80)
    except (OSError, UnidentifiedImageError) as e:
        logger.error("Thumbnail creation failed for %s: %s", path, e)
        raise ImageProcessingError("Failed to create thumbnail") from e
    return out_path


def cleanup_file(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logger.warning("File cleanup failed for %s: %s", path, e)
