import io
from typing import Optional

from PIL import Image, UnidentifiedImageError
import pillow_heif

from config import settings
from .exceptions import ImageTooLargeError, InvalidMediaTypeError, PayloadTooLargeError

pillow_heif.register_heif_opener()

IMAGE_MEDIA_PREFIX = "image/"


def validate_upload(payload: bytes, content_type: Optional[str]) -> None:
    """
    Reject uploads that must never reach OCR:
    non-image media types and payloads over the size limit.
    """
    if not content_type or not content_type.lower().startswith(IMAGE_MEDIA_PREFIX):
        raise InvalidMediaTypeError(content_type)

    limit = settings.MAX_UPLOAD_BYTES
    if len(payload) > limit:
        raise PayloadTooLargeError(len(payload), limit)


def load_image(payload: bytes) -> Image.Image:
    """
    Decode an uploaded image (JPG / PNG / HEIC / ...) into an RGB image.
    Images over Pillow's pixel limit are rejected before decoding.
    """
    try:
        img = Image.open(io.BytesIO(payload))
        img.load()
    except Image.DecompressionBombError as e:
        raise ImageTooLargeError(str(e)) from e
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidMediaTypeError(None) from e
    return img.convert("RGB")
