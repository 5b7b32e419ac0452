# app/models/__init__.py

from .crop import CropMetadata, CropRequest, CropResponse, ErrorResponse

__all__ = [
    "CropMetadata",
    "CropRequest",
    "CropResponse",
    "ErrorResponse",
]
