# app/ocr/crop_logic.py
from __future__ import annotations

from typing import Any, Dict

from app.core.config import CONFIG, Settings
from app.core.errors import VisionConfigError
from app.core.logger import get_logger
from app.ocr.boundaries import DEFAULT_PHRASES, Found, LandmarkPhrases, resolve
from app.ocr.read_lines import lines_from_read_result
from app.services.azure_vision import read_image
from app.services.image_fetch import fetch_image_bytes
from app.utils.image_tools import crop_vertical, image_dimensions, to_base64

logger = get_logger("crop")


def _describe(match) -> str:
    return f"landmark {match.phrase!r}" if isinstance(match, Found) else "fallback"


def run_landmark_crop(
    image_url: str,
    settings: Settings | None = None,
    phrases: LandmarkPhrases = DEFAULT_PHRASES,
) -> Dict[str, Any]:
    """
    fetch -> dimensions -> OCR (submit + poll) -> resolve bounds -> crop.
    Returns the response body: base64 crop + metadata.
    """
    settings = settings or CONFIG

    image_bytes = fetch_image_bytes(image_url, timeout=settings.FETCH_TIMEOUT_SECONDS)
    dims = image_dimensions(image_bytes)

    if not settings.vision_configured:
        raise VisionConfigError("Configuration Azure Vision manquante")

    payload = read_image(image_bytes, settings)
    lines = lines_from_read_result(payload)
    logger.info("OCR returned %d line(s) for a %dx%d image", len(lines), dims.width, dims.height)

    resolution = resolve(lines, dims.height, phrases)
    logger.info(
        "Bounds upper=%d (%s) lower=%d (%s)%s",
        resolution.upper_bound,
        _describe(resolution.upper_match),
        resolution.lower_bound,
        _describe(resolution.lower_match),
        " [repaired]" if resolution.repaired else "",
    )

    cropped, cropped_dims = crop_vertical(image_bytes, resolution.region)

    return {
        "processedImage": to_base64(cropped),
        "metadata": {
            "originalWidth": dims.width,
            "originalHeight": dims.height,
            "croppedWidth": cropped_dims.width,
            "croppedHeight": cropped_dims.height,
            "upperBound": resolution.upper_bound,
            "lowerBound": resolution.lower_bound,
        },
    }
