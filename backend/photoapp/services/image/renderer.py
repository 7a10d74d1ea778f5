"""Upload and download rendering on top of the transform routine."""

import logging
from dataclasses import dataclass

from photoapp.config import get_settings
from photoapp.models.schemas.image import TransformRequest
from photoapp.services.image.converter import mime_type_for, replace_extension
from photoapp.services.image.processor import ImageProcessor
from photoapp.services.image.transform import (
    ImageProcessingError,
    get_dimensions,
    normalize_output_format,
    transform,
)

logger = logging.getLogger(__name__)

ORIGINAL_FORMAT = "original"


@dataclass
class PreparedUpload:
    """Upload bytes ready to be stored, with their metadata."""

    data: bytes
    filename: str
    content_type: str
    width: int
    height: int

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass
class RenderedPhoto:
    """A stored photo rendered for download or viewing."""

    data: bytes
    filename: str
    content_type: str


class PhotoRenderer:
    """
    Prepares uploads and renders stored photos.

    Uploads are validated, optionally converted/resized, and measured.
    Downloads return the stored bytes untouched unless a format or a
    filter is requested.
    """

    def __init__(self, processor: ImageProcessor | None = None):
        self._processor = processor or ImageProcessor()

    def prepare_upload(
        self,
        data: bytes,
        filename: str,
        format: str | None = None,
        width: int | None = None,
        height: int | None = None,
    ) -> PreparedUpload:
        """
        Validate an upload and apply the requested conversion.

        Args:
            data: Uploaded bytes
            filename: Name supplied by the client
            format: Optional output format
            width: Optional resize width
            height: Optional resize height

        Returns:
            PreparedUpload with final bytes, name and dimensions

        Raises:
            ImageValidationError: If the upload is rejected
            DecodeError, EncodeError: If conversion fails
        """
        info = self._processor.validate_and_get_info(data)
        request = TransformRequest(width=width, height=height, format=format)

        if request.format is None and not request.wants_resize:
            logger.info(f"Storing upload {filename} as-is ({info.format})")
            return PreparedUpload(
                data=data,
                filename=filename,
                content_type=info.mime_type,
                width=info.width,
                height=info.height,
            )

        output_format = normalize_output_format(
            request.format or get_settings().default_output_format
        )
        try:
            output = transform(
                data,
                TransformRequest(width=request.width, height=request.height, format=output_format),
            )
            out_width, out_height = get_dimensions(output)
        except ImageProcessingError as e:
            logger.warning(f"Upload conversion failed for {filename}: {e.message}")
            raise

        logger.info(
            f"Converted upload {filename}: {info.width}x{info.height} {info.format} -> "
            f"{out_width}x{out_height} {output_format}"
        )
        return PreparedUpload(
            data=output,
            filename=replace_extension(filename, output_format),
            content_type=mime_type_for(output_format),
            width=out_width,
            height=out_height,
        )

    def render_download(
        self,
        data: bytes,
        filename: str,
        format: str = ORIGINAL_FORMAT,
        width: int | None = None,
        height: int | None = None,
        sepia: bool = False,
        blur: bool = False,
    ) -> RenderedPhoto:
        """
        Render stored bytes for download or viewing.

        ``format="original"`` without filters returns the stored bytes;
        with filters it renders as jpg.

        Raises:
            DecodeError, EncodeError: If rendering fails
            ImageValidationError: If the stored bytes are unreadable
        """
        requested = (format or ORIGINAL_FORMAT).strip().lower()
        request = TransformRequest(width=width, height=height, sepia=sepia, blur=blur)

        if requested == ORIGINAL_FORMAT and not request.has_filters:
            info = self._processor.get_info(data)
            return RenderedPhoto(data=data, filename=filename, content_type=info.mime_type)

        output_format = normalize_output_format(
            None if requested == ORIGINAL_FORMAT else requested
        )
        try:
            output = transform(data, request.model_copy(update={"format": output_format}))
        except ImageProcessingError as e:
            logger.warning(f"Rendering {filename} as {output_format} failed: {e.message}")
            raise

        logger.info(
            f"Rendered {filename} as {output_format} "
            f"(width={request.width}, height={request.height}, "
            f"sepia={request.sepia}, blur={request.blur})"
        )
        return RenderedPhoto(
            data=output,
            filename=replace_extension(filename, output_format),
            content_type=mime_type_for(output_format),
        )


# Global renderer instance
_photo_renderer: PhotoRenderer | None = None


def get_photo_renderer() -> PhotoRenderer:
    """Get or create the global photo renderer."""
    global _photo_renderer
    if _photo_renderer is None:
        _photo_renderer = PhotoRenderer()
    return _photo_renderer
