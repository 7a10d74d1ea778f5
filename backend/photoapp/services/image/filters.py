"""Pure raster filters: resize, sepia, box blur.

Each function takes a Pillow image and returns a new one; inputs are never
modified. Color filters act on the RGB channels and carry alpha through
untouched.
"""

import numpy as np
from PIL import Image

# Rows produce R, G, B from (R, G, B), in thousandths so truncation stays exact
SEPIA_MATRIX = np.array(
    [
        [393, 769, 189],
        [349, 686, 168],
        [272, 534, 131],
    ],
    dtype=np.int32,
)
SEPIA_SCALE = 1000

BLUR_SIZE = 3


def ensure_rgb(image: Image.Image) -> Image.Image:
    """Return the image in RGB, or RGBA when it carries transparency."""
    if image.mode in ("RGB", "RGBA"):
        return image

    has_alpha = image.mode in ("LA", "PA", "La") or "transparency" in image.info
    if image.mode == "P" and has_alpha:
        return image.convert("RGBA")
    return image.convert("RGBA" if has_alpha else "RGB")


def _split_alpha(image: Image.Image) -> tuple[np.ndarray, np.ndarray | None]:
    pixels = np.asarray(ensure_rgb(image))
    if pixels.shape[2] == 4:
        return pixels[..., :3], pixels[..., 3:]
    return pixels[..., :3], None


def _join_alpha(rgb: np.ndarray, alpha: np.ndarray | None) -> Image.Image:
    if alpha is not None:
        rgb = np.concatenate([rgb, alpha], axis=2)
    return Image.fromarray(np.ascontiguousarray(rgb))


def derive_size(
    original: tuple[int, int],
    width: int | None,
    height: int | None,
) -> tuple[int, int]:
    """
    Compute the target size for a resize request.

    Both dimensions given: used as-is (no aspect preservation).
    One given: the other keeps the original aspect ratio, rounded
    half-up and never below 1.

    Args:
        original: Source (width, height)
        width: Requested width or None
        height: Requested height or None

    Returns:
        Target (width, height); the original size when nothing is requested
    """
    src_w, src_h = original
    if not width and not height:
        return src_w, src_h
    if not width:
        width = max(1, int(src_w * (height / src_h) + 0.5))
    if not height:
        height = max(1, int(src_h * (width / src_w) + 0.5))
    return width, height


def resize(
    image: Image.Image,
    width: int | None = None,
    height: int | None = None,
) -> Image.Image:
    """Resize with area-averaging resampling; a copy when nothing is requested."""
    if not width and not height:
        return image.copy()
    size = derive_size(image.size, width, height)
    return ensure_rgb(image).resize(size, Image.Resampling.BOX)


def apply_sepia(image: Image.Image) -> Image.Image:
    """
    Apply the sepia color matrix per pixel.

    Channel values are truncated toward zero and clamped at 255, so pure
    white maps to (255, 255, 238) and pure black stays black.
    """
    rgb, alpha = _split_alpha(image)

    toned = (rgb.astype(np.int32) @ SEPIA_MATRIX.T) // SEPIA_SCALE
    toned = np.minimum(toned, 255).astype(np.uint8)

    return _join_alpha(toned, alpha)


def apply_blur(image: Image.Image) -> Image.Image:
    """
    Apply a 3x3 box blur with weight 1/9 per cell.

    Border rows and columns are copied unfiltered (edge no-op), so an image
    narrower or shorter than three pixels comes back unchanged. Interior
    averages are rounded half-up.
    """
    rgb, alpha = _split_alpha(image)
    height, width = rgb.shape[:2]

    out = rgb.copy()
    if height < BLUR_SIZE or width < BLUR_SIZE:
        return _join_alpha(out, alpha)

    # 9 * 255 fits comfortably in uint16
    src = rgb.astype(np.uint16)
    total = np.zeros((height - 2, width - 2, 3), dtype=np.uint16)
    for dy in range(BLUR_SIZE):
        for dx in range(BLUR_SIZE):
            total += src[dy:height - 2 + dy, dx:width - 2 + dx]

    out[1:-1, 1:-1] = ((total + 4) // 9).astype(np.uint8)
    return _join_alpha(out, alpha)
