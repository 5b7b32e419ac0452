# app/models/crop.py
from typing import Optional

from pydantic import BaseModel


class CropRequest(BaseModel):
    # Documents the body; app/api/crop.py validates it by hand
    imageUrl: Optional[str] = None


class CropMetadata(BaseModel):
    originalWidth: int
    originalHeight: int
    croppedWidth: int
    croppedHeight: int
    upperBound: int
    lowerBound: int


class CropResponse(BaseModel):
    processedImage: str
    metadata: CropMetadata


class ErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None
