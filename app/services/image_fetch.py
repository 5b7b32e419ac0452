# app/services/image_fetch.py
import requests

from app.core.errors import ImageFetchError
from app.core.logger import get_logger

logger = get_logger("image_fetch")


def fetch_image_bytes(url: str, timeout: float = 30.0) -> bytes:
    """Download the source image. No retries; any failure is an ImageFetchError."""
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.HTTPError as e:
        raise ImageFetchError(
            f"Failed to download image: HTTP {e.response.status_code}"
        ) from e
    except requests.RequestException as e:
        raise ImageFetchError(f"Failed to download image: {e}") from e

    data = resp.content
    if not data:
        raise ImageFetchError("Downloaded image is empty")

    logger.info("Fetched %d bytes from %s", len(data), url)
    return data
