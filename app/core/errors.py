# app/core/errors.py


class CropServiceError(Exception):
    """Base class for failures of the fetch / OCR / codec steps."""


class ImageFetchError(CropServiceError):
    pass


class VisionConfigError(CropServiceError):
    pass


class VisionServiceError(CropServiceError):
    pass


class VisionTimeoutError(VisionServiceError):
    """The read operation never reached a terminal status within the poll budget."""


class ImageDecodeError(CropServiceError):
    pass


class ImageCropError(CropServiceError):
    pass
