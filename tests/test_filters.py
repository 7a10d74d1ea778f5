"""Tests for the pure raster filters."""

from __future__ import annotations

from PIL import Image

from conftest import make_image
from photoapp.services.image.filters import (
    apply_blur,
    apply_sepia,
    derive_size,
    ensure_rgb,
    resize,
)


def test_derive_size_keeps_aspect_ratio_for_width() -> None:
    assert derive_size((200, 100), 100, None) == (100, 50)
    assert derive_size((300, 200), 100, None) == (100, 67)


def test_derive_size_keeps_aspect_ratio_for_height() -> None:
    assert derive_size((200, 100), None, 25) == (50, 25)


def test_derive_size_rounds_half_up_and_never_returns_zero() -> None:
    assert derive_size((4, 2), 3, None) == (3, 2)
    assert derive_size((1000, 1), 10, None) == (10, 1)


def test_derive_size_uses_both_dimensions_as_given() -> None:
    assert derive_size((200, 100), 30, 90) == (30, 90)
    assert derive_size((200, 100), None, None) == (200, 100)


def test_resize_without_dimensions_returns_a_copy() -> None:
    image = make_image((20, 10))

    resized = resize(image)

    assert resized is not image
    assert resized.size == (20, 10)


def test_resize_stretches_to_exact_box() -> None:
    resized = resize(make_image((200, 100)), 40, 40)

    assert resized.size == (40, 40)


def test_sepia_white_and_black() -> None:
    white = apply_sepia(make_image((2, 2), (255, 255, 255)))
    black = apply_sepia(make_image((2, 2), (0, 0, 0)))

    assert white.getpixel((0, 0)) == (255, 255, 238)
    assert black.getpixel((1, 1)) == (0, 0, 0)


def test_sepia_truncates_each_channel() -> None:
    toned = apply_sepia(make_image((1, 1), (100, 150, 200)))

    # 192.45, 171.4, 133.5
    assert toned.getpixel((0, 0)) == (192, 171, 133)


def test_sepia_exact_integer_products_are_not_rounded_down() -> None:
    # red is exactly 11.004 + 191.481 + 25.515 = 228
    toned = apply_sepia(make_image((1, 1), (28, 249, 135)))

    assert toned.getpixel((0, 0)) == (228, 203, 158)


def test_sepia_keeps_alpha_and_leaves_input_untouched() -> None:
    image = make_image((3, 3), (10, 20, 30, 77), mode="RGBA")

    toned = apply_sepia(image)

    assert toned.mode == "RGBA"
    assert toned.getpixel((1, 1))[3] == 77
    assert image.getpixel((1, 1)) == (10, 20, 30, 77)


def test_blur_uniform_image_is_unchanged() -> None:
    image = make_image((6, 5), (90, 120, 33))

    blurred = apply_blur(image)

    assert list(blurred.getdata()) == list(image.getdata())


def test_blur_leaves_border_pixels_unfiltered() -> None:
    image = make_image((5, 5), (0, 0, 0))
    image.putpixel((0, 0), (255, 255, 255))

    blurred = apply_blur(image)

    # corner and its border neighbours are copied as-is
    assert blurred.getpixel((0, 0)) == (255, 255, 255)
    assert blurred.getpixel((1, 0)) == (0, 0, 0)
    assert blurred.getpixel((0, 1)) == (0, 0, 0)
    # interior pixel averages the corner in: (255 + 4) // 9
    assert blurred.getpixel((1, 1)) == (28, 28, 28)
    assert blurred.getpixel((2, 2)) == (0, 0, 0)


def test_blur_averages_interior_neighbourhood() -> None:
    image = make_image((3, 3), (0, 0, 0))
    image.putpixel((1, 1), (90, 180, 9))

    blurred = apply_blur(image)

    assert blurred.getpixel((1, 1)) == (10, 20, 1)


def test_blur_keeps_alpha() -> None:
    image = make_image((4, 4), (0, 0, 0, 200), mode="RGBA")
    image.putpixel((1, 1), (90, 90, 90, 15))

    blurred = apply_blur(image)

    assert blurred.mode == "RGBA"
    assert [pixel[3] for pixel in blurred.getdata()] == [pixel[3] for pixel in image.getdata()]
    assert blurred.getpixel((2, 2))[:3] == (10, 10, 10)


def test_blur_small_image_is_unchanged() -> None:
    image = make_image((2, 7), (0, 0, 0))
    image.putpixel((1, 3), (255, 0, 0))

    blurred = apply_blur(image)

    assert list(blurred.getdata()) == list(image.getdata())


def test_ensure_rgb_expands_palette_transparency() -> None:
    palette = Image.new("P", (4, 4), 0)
    palette.info["transparency"] = 0

    assert ensure_rgb(palette).mode == "RGBA"
    assert ensure_rgb(Image.new("L", (4, 4), 128)).mode == "RGB"
