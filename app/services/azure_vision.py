# app/services/azure_vision.py
import time
from typing import Any, Callable, Dict

import requests

from app.core.config import CONFIG, Settings
from app.core.errors import VisionConfigError, VisionServiceError, VisionTimeoutError
from app.core.logger import get_logger

logger = get_logger("azure_vision")

READ_ANALYZE_PATH = "/vision/v3.2/read/analyze"
SUBSCRIPTION_HEADER = "Ocp-Apim-Subscription-Key"


class AzureReadClient:
    """
    Computer Vision Read v3.2: POST the image, then GET the Operation-Location
    URL until the operation reports a terminal status.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        poll_interval: float = 1.0,
        max_poll_attempts: int = 60,
        timeout: float = 30.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if not endpoint or not api_key:
            raise VisionConfigError("Configuration Azure Vision manquante")
        self.endpoint = endpoint.rstrip("/")
        self.api_key = api_key
        self.poll_interval = poll_interval
        self.max_poll_attempts = max_poll_attempts
        self.timeout = timeout
        self._sleep = sleep

    def submit_read(self, image_bytes: bytes) -> str:
        """Start a read operation and return its Operation-Location URL."""
        try:
            resp = requests.post(
                f"{self.endpoint}{READ_ANALYZE_PATH}",
                data=image_bytes,
                headers={
                    "Content-Type": "application/octet-stream",
                    SUBSCRIPTION_HEADER: self.api_key,
                },
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise VisionServiceError(
                f"Read analyze request rejected: HTTP {e.response.status_code}"
            ) from e
        except requests.RequestException as e:
            raise VisionServiceError(f"Read analyze request failed: {e}") from e

        operation_url = resp.headers.get("Operation-Location")
        if not operation_url:
            raise VisionServiceError("Read analyze response has no Operation-Location header")

        logger.info("Read operation submitted: %s", operation_url)
        return operation_url

    def poll_read_result(self, operation_url: str) -> Dict[str, Any]:
        """Wait for the read operation; returns the full JSON payload once succeeded."""
        for attempt in range(1, self.max_poll_attempts + 1):
            self._sleep(self.poll_interval)
            try:
                resp = requests.get(
                    operation_url,
                    headers={SUBSCRIPTION_HEADER: self.api_key},
                    timeout=self.timeout,
                )
                resp.raise_for_status()
            except requests.HTTPError as e:
                raise VisionServiceError(
                    f"Read result request rejected: HTTP {e.response.status_code}"
                ) from e
            except requests.RequestException as e:
                raise VisionServiceError(f"Read result request failed: {e}") from e

            try:
                payload = resp.json()
            except ValueError as e:
                raise VisionServiceError(f"Read result is not valid JSON: {e}") from e

            status = (payload or {}).get("status")
            if status == "succeeded":
                logger.info("Read operation succeeded after %d poll(s)", attempt)
                return payload
            if status == "failed":
                raise VisionServiceError("Read operation failed")
            logger.debug("Read operation status %r (poll %d)", status, attempt)

        raise VisionTimeoutError(
            f"Read operation did not complete after {self.max_poll_attempts} polls"
        )

    def read(self, image_bytes: bytes) -> Dict[str, Any]:
        return self.poll_read_result(self.submit_read(image_bytes))


def get_vision_client(settings: Settings | None = None) -> AzureReadClient:
    settings = settings or CONFIG
    return AzureReadClient(
        endpoint=settings.VISION_ENDPOINT or "",
        api_key=settings.VISION_API_KEY or "",
        poll_interval=settings.POLL_INTERVAL_SECONDS,
        max_poll_attempts=settings.MAX_POLL_ATTEMPTS,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )


def read_image(image_bytes: bytes, settings: Settings | None = None) -> Dict[str, Any]:
    return get_vision_client(settings).read(image_bytes)
