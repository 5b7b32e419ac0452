# app/utils/image_tools.py
import base64
from dataclasses import dataclass
from io import BytesIO
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from app.core.errors import ImageCropError, ImageDecodeError
from app.ocr.boundaries import CropRegion


@dataclass(frozen=True)
class ImageDimensions:
    width: int
    height: int


def open_image(data: bytes) -> Image.Image:
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Failed to decode image bytes: {e}") from e
    return img


def image_dimensions(data: bytes) -> ImageDimensions:
    img = open_image(data)
    return ImageDimensions(width=img.width, height=img.height)


def clamp_rows(top: int, bottom: int, height: int) -> Tuple[int, int]:
    top = max(0, min(height, top))
    bottom = max(0, min(height, bottom))
    return top, bottom


def crop_vertical(data: bytes, region: CropRegion) -> Tuple[bytes, ImageDimensions]:
    """
    Full-width crop of rows [top, top + height), clamped to the image.
    Re-encoded in the source format (PNG if unknown).
    Returns (bytes, dimensions of the crop).
    """
    img = open_image(data)
    W, H = img.size

    if region.height <= 0:
        raise ImageCropError(
            f"Invalid crop region: top={region.top} height={region.height}"
        )

    y1, y2 = clamp_rows(region.top, region.bottom, H)
    if y2 <= y1:
        raise ImageCropError(
            f"Crop region top={region.top} height={region.height} lies outside the image (height={H})"
        )

    fmt = img.format or "PNG"
    cropped = img.crop((0, y1, W, y2))
    if fmt == "JPEG" and cropped.mode not in ("RGB", "L", "CMYK"):
        cropped = cropped.convert("RGB")

    buf = BytesIO()
    cropped.save(buf, format=fmt)
    return buf.getvalue(), ImageDimensions(width=cropped.width, height=cropped.height)


def to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
