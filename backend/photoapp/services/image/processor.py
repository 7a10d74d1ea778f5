"""Upload validation and image metadata.

Features:
- Format detection from magic bytes
- Size ceiling and format allow-list checks
- Dimension extraction
"""

import logging
from dataclasses import dataclass
from io import BytesIO

from PIL import Image

from photoapp.config import get_settings
from photoapp.services.image.converter import MIME_TYPES
from photoapp.services.image.transform import ImageProcessingError

logger = logging.getLogger(__name__)


class ImageValidationError(ImageProcessingError):
    """Raised when an uploaded image fails validation."""

    def __init__(self, message: str, field: str = "file"):
        self.field = field
        super().__init__(message)


@dataclass
class ImageInfo:
    """Information about a validated image."""

    format: str
    mime_type: str
    width: int
    height: int
    size_bytes: int


class ImageProcessor:
    """
    Validates uploaded images and reports their metadata.

    Features:
    - Format detection
    - Size validation
    - Dimension extraction
    """

    # Magic bytes for common image formats (including unsupported ones for error messages)
    FORMAT_SIGNATURES = {
        b"RIFF": "webp",  # WebP (check for WEBP after)
        b"\x89PNG": "png",
        b"\xff\xd8\xff": "jpeg",
        b"GIF87a": "gif",
        b"GIF89a": "gif",
        b"BM": "bmp",
        b"II*\x00": "tiff",
        b"MM\x00*": "tiff",
    }

    def __init__(
        self,
        max_size_bytes: int | None = None,
        allowed_formats: set[str] | None = None,
    ):
        settings = get_settings()
        self._max_size = max_size_bytes or settings.max_image_size_bytes
        self._allowed_formats = allowed_formats or set(settings.allowed_image_formats_list)

    def detect_format(self, data: bytes) -> str | None:
        """Detect image format from magic bytes for better error messages."""
        if len(data) < 12:
            return None

        # Check AVIF/HEIC (ftyp box at offset 4)
        if data[4:8] == b"ftyp":
            brand = data[8:12].decode("ascii", errors="ignore").lower()
            if "avif" in brand:
                return "avif"
            if "heic" in brand or "heix" in brand or "mif1" in brand:
                return "heic"

        for sig, fmt in self.FORMAT_SIGNATURES.items():
            if data.startswith(sig):
                # Special case for WebP - verify WEBP marker
                if fmt == "webp" and data[8:12] != b"WEBP":
                    continue
                return fmt

        return None

    def get_info(self, data: bytes) -> ImageInfo:
        """
        Read format and dimensions without allow-list checks.

        Raises:
            ImageValidationError: If the bytes are not a readable image
        """
        try:
            with Image.open(BytesIO(data)) as img:
                detected_format = img.format.lower() if img.format else "unknown"
                width, height = img.size
        except Exception as e:
            raise ImageValidationError(f"Invalid or corrupted image: {e}") from e

        return ImageInfo(
            format=detected_format,
            mime_type=MIME_TYPES.get(detected_format, "application/octet-stream"),
            width=width,
            height=height,
            size_bytes=len(data),
        )

    def validate_and_get_info(self, data: bytes) -> ImageInfo:
        """
        Validate uploaded image bytes and return their info.

        Args:
            data: Raw uploaded bytes

        Returns:
            ImageInfo for the upload

        Raises:
            ImageValidationError: If validation fails
        """
        if not data:
            raise ImageValidationError("File is empty")

        size_bytes = len(data)
        if size_bytes > self._max_size:
            max_mb = self._max_size / (1024 * 1024)
            actual_mb = size_bytes / (1024 * 1024)
            raise ImageValidationError(
                f"Image size {actual_mb:.1f}MB exceeds maximum {max_mb:.0f}MB"
            )

        try:
            with Image.open(BytesIO(data)) as img:
                img.verify()
        except Exception as e:
            error_msg = str(e).lower()
            if "cannot identify" in error_msg:
                # Try to detect format from magic bytes for better error message
                format_hint = self.detect_format(data)
                if format_hint:
                    raise ImageValidationError(
                        f"Unsupported image format: {format_hint}. "
                        f"Allowed: {', '.join(sorted(self._allowed_formats))}"
                    ) from e
            raise ImageValidationError(f"Invalid or corrupted image: {e}") from e

        # verify() leaves the image unusable, so read metadata from a fresh handle
        info = self.get_info(data)

        if info.format not in self._allowed_formats:
            raise ImageValidationError(
                f"Unsupported image format: {info.format}. "
                f"Allowed: {', '.join(sorted(self._allowed_formats))}"
            )

        logger.debug(
            f"Validated image: {info.format} {info.width}x{info.height} "
            f"({info.size_bytes / 1024:.1f}KB)"
        )

        return info
