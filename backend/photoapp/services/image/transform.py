"""Image transform routine.

Decodes raw image bytes, applies the requested operations in a fixed order
(resize, sepia, blur) and re-encodes the result. Every function here is
pure: no I/O beyond in-memory buffers, no shared state.
"""

from io import BytesIO

from PIL import Image, UnidentifiedImageError

from photoapp.config import get_settings
from photoapp.models.schemas.image import TransformRequest
from photoapp.services.image.filters import apply_blur, apply_sepia, ensure_rgb, resize

# Output format name -> Pillow encoder
OUTPUT_FORMATS = {
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "png": "PNG",
    "bmp": "BMP",
}

FALLBACK_FORMAT = "jpg"

_DECODE_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    SyntaxError,
    ValueError,
)


class ImageProcessingError(Exception):
    """Base class for image processing failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DecodeError(ImageProcessingError):
    """Raised when input bytes are not a readable image."""


class EncodeError(ImageProcessingError):
    """Raised when a raster cannot be serialized to the requested format."""


def normalize_output_format(fmt: str | None) -> str:
    """
    Map a requested format to a supported output format.

    Unrecognized or missing formats fall back to ``jpg`` silently.
    """
    if fmt:
        key = fmt.strip().lower()
        if key in OUTPUT_FORMATS:
            return key
    return FALLBACK_FORMAT


def decode(raw: bytes) -> Image.Image:
    """
    Decode image bytes into an RGB or RGBA raster.

    Args:
        raw: Encoded image bytes (JPEG, PNG, BMP, or anything Pillow reads)

    Returns:
        Fully loaded image detached from the input buffer

    Raises:
        DecodeError: If the bytes are empty, unrecognized or truncated
    """
    if not raw:
        raise DecodeError("Empty image data")

    try:
        with Image.open(BytesIO(raw)) as img:
            img.load()
            image = ensure_rgb(img)
            if image is img:
                image = img.copy()
    except _DECODE_ERRORS as e:
        raise DecodeError(f"Invalid or corrupted image: {e}") from e

    return image


def flatten(image: Image.Image) -> Image.Image:
    """Composite an RGBA raster over an opaque black RGB canvas."""
    image = ensure_rgb(image)
    if image.mode != "RGBA":
        return image

    canvas = Image.new("RGB", image.size, (0, 0, 0))
    canvas.paste(image, mask=image.getchannel("A"))
    return canvas


def encode(
    image: Image.Image,
    fmt: str | None = None,
    quality: int | None = None,
) -> bytes:
    """
    Encode a raster to bytes.

    Args:
        image: Raster to encode
        fmt: Output format (unrecognized values fall back to jpg)
        quality: JPEG quality, defaults to ``Settings.jpeg_quality``

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If the encoder rejects the raster
    """
    output_format = normalize_output_format(fmt)
    encoder = OUTPUT_FORMATS[output_format]

    save_kwargs = {}
    if encoder == "JPEG":
        # JPEG has no alpha channel
        image = flatten(image)
        save_kwargs["quality"] = quality or get_settings().jpeg_quality
    else:
        image = ensure_rgb(image)

    output = BytesIO()
    try:
        image.save(output, format=encoder, **save_kwargs)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Cannot encode image as {output_format}: {e}") from e

    return output.getvalue()


def apply_filters(image: Image.Image, request: TransformRequest) -> Image.Image:
    """Run resize, sepia and blur in that order, each only when requested."""
    processed = image
    if request.wants_resize:
        processed = resize(processed, request.width, request.height)
    if request.sepia:
        processed = apply_sepia(processed)
    if request.blur:
        processed = apply_blur(processed)
    return processed


def transform(
    raw: bytes,
    request: TransformRequest | None = None,
    quality: int | None = None,
) -> bytes:
    """
    Transform encoded image bytes.

    Args:
        raw: Encoded source image
        request: Operations to apply; an empty request only re-encodes
        quality: Optional JPEG quality override

    Returns:
        Encoded output bytes

    Raises:
        DecodeError: If ``raw`` is not a readable image
        EncodeError: If the result cannot be encoded
    """
    request = request or TransformRequest()
    image = decode(raw)
    processed = apply_filters(image, request)
    fmt = request.format or get_settings().default_output_format
    return encode(processed, fmt, quality=quality)


def get_dimensions(raw: bytes) -> tuple[int, int]:
    """
    Return (width, height) of encoded image bytes.

    The raster is fully decoded, so anything ``transform`` would reject is
    rejected here too.

    Raises:
        DecodeError: If the bytes are not a readable image
    """
    if not raw:
        raise DecodeError("Empty image data")

    try:
        with Image.open(BytesIO(raw)) as img:
            img.load()
            return img.size
    except _DECODE_ERRORS as e:
        raise DecodeError(f"Invalid or corrupted image: {e}") from e
