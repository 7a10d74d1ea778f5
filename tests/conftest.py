from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image

from photoapp.config import get_settings


def make_image(
    size: tuple[int, int] = (100, 50),
    color: tuple[int, ...] = (200, 30, 30),
    mode: str = "RGB",
) -> Image.Image:
    return Image.new(mode, size, color)


def to_bytes(image: Image.Image, fmt: str = "PNG") -> bytes:
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def open_bytes(data: bytes) -> Image.Image:
    image = Image.open(BytesIO(data))
    image.load()
    return image


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def png_bytes() -> bytes:
    return to_bytes(make_image())


@pytest.fixture
def jpeg_bytes() -> bytes:
    return to_bytes(make_image((200, 100)), "JPEG")


@pytest.fixture
def striped_bytes() -> bytes:
    """200x100 PNG with alternating white and black columns."""
    image = Image.new("RGB", (200, 100), (0, 0, 0))
    for x in range(0, 200, 2):
        image.paste((255, 255, 255), (x, 0, x + 1, 100))
    return to_bytes(image)
