"""Image processing service module."""

from photoapp.services.image.processor import ImageInfo, ImageProcessor, ImageValidationError
from photoapp.services.image.renderer import (
    PhotoRenderer,
    PreparedUpload,
    RenderedPhoto,
    get_photo_renderer,
)
from photoapp.services.image.transform import (
    DecodeError,
    EncodeError,
    ImageProcessingError,
    get_dimensions,
    transform,
)

__all__ = [
    "DecodeError",
    "EncodeError",
    "ImageInfo",
    "ImageProcessingError",
    "ImageProcessor",
    "ImageValidationError",
    "PhotoRenderer",
    "PreparedUpload",
    "RenderedPhoto",
    "get_dimensions",
    "get_photo_renderer",
    "transform",
]
