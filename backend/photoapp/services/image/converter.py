"""Output format naming helpers."""

import base64
from pathlib import PurePosixPath

from photoapp.services.image.transform import normalize_output_format

# Output formats plus the other accepted upload formats
MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "bmp": "image/bmp",
    "gif": "image/gif",
    "webp": "image/webp",
}

DEFAULT_STEM = "photo"


def mime_type_for(fmt: str | None) -> str:
    """MIME type of the format ``encode`` would actually produce for ``fmt``."""
    return MIME_TYPES[normalize_output_format(fmt)]


def replace_extension(filename: str | None, fmt: str) -> str:
    """
    Swap the extension of a file name for the given output format.

    Args:
        filename: Original name, e.g. ``holiday.PNG``
        fmt: Output format, e.g. ``bmp``

    Returns:
        ``holiday.bmp``; names without an extension get one appended and
        empty names become ``photo.<fmt>``
    """
    stem = PurePosixPath(filename or "").stem or DEFAULT_STEM
    return f"{stem}.{fmt}"


def to_data_url(data: bytes, fmt: str | None) -> str:
    """
    Convert encoded bytes to a data URL for inline previews.

    Returns:
        Data URL string: data:image/jpeg;base64,...
    """
    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type_for(fmt)};base64,{encoded}"
