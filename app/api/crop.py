# app/api/crop.py
import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.errors import VisionConfigError
from app.core.logger import get_logger
from app.models.crop import CropRequest, CropResponse, ErrorResponse
from app.ocr.crop_logic import run_landmark_crop

router = APIRouter()
logger = get_logger("api")

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}

# Body is parsed by hand so malformed payloads get 400/500, never a 422
REQUEST_BODY_DOC = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": CropRequest.model_json_schema()}},
    }
}

MISSING_URL_MESSAGE = "L'URL de l'image est requise dans le corps de la requête"
FAILURE_MESSAGE = "Erreur lors du traitement de l'image"


def _failure(e: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": FAILURE_MESSAGE, "error": str(e)})


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


@router.post(
    "/crop",
    response_model=CropResponse,
    responses=ERROR_RESPONSES,
    openapi_extra=REQUEST_BODY_DOC,
)
@router.post("/api/ImageProcessor", response_model=CropResponse, include_in_schema=False)
async def crop_image(
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """
    Thin wrapper around the crop pipeline.
    All heavy logic is in app.ocr.crop_logic.run_landmark_crop.
    """
    logger.info("Image processing started")

    body = await _read_json(request)
    image_url = body.get("imageUrl") if isinstance(body, dict) else None

    if image_url is None or (isinstance(image_url, str) and not image_url.strip()):
        return JSONResponse(status_code=400, content={"message": MISSING_URL_MESSAGE})

    if not isinstance(image_url, str):
        logger.error("imageUrl is a %s, not a string", type(image_url).__name__)
        return _failure(TypeError(f"imageUrl must be a string, got {type(image_url).__name__}"))

    req = CropRequest(imageUrl=image_url.strip())
    try:
        # fetch + OCR polling block; keep them off the event loop
        result = await run_in_threadpool(run_landmark_crop, req.imageUrl, settings)
        return JSONResponse(content=result)
    except VisionConfigError as e:
        logger.error("Vision service not configured")
        return JSONResponse(status_code=500, content={"message": str(e)})
    except Exception as e:
        # Any failed step is reported, never retried
        logger.exception("Image processing failed")
        return _failure(e)
