"""Shared fixtures: small synthetic images built with Pillow."""

from __future__ import annotations

import io
from typing import Callable

import numpy as np
import pytest
from PIL import Image

from imgpipe.infrastructure.codec import PillowImageCodec

ORIENTATION = 0x0112
MAKE = 0x010F

# Top-left, top-right, bottom-left, bottom-right
QUADRANT_COLORS = [(220, 20, 20), (20, 200, 20), (20, 20, 210), (240, 240, 240)]


def _quadrants(width: int = 6, height: int = 4, mode: str = "RGB") -> Image.Image:
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    half_w, half_h = width // 2, height // 2
    pixels[:half_h, :half_w] = QUADRANT_COLORS[0]
    pixels[:half_h, half_w:] = QUADRANT_COLORS[1]
    pixels[half_h:, :half_w] = QUADRANT_COLORS[2]
    pixels[half_h:, half_w:] = QUADRANT_COLORS[3]
    img = Image.fromarray(pixels, "RGB")
    return img if mode == "RGB" else img.convert(mode)


def _encode(img: Image.Image, fmt: str, **params: object) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format=fmt, **params)
    return buffer.getvalue()


@pytest.fixture()
def quadrant_image() -> Callable[..., Image.Image]:
    """Factory for a width x height image with four distinctly colored quadrants."""
    return _quadrants


@pytest.fixture()
def encode() -> Callable[..., bytes]:
    """Factory that encodes a PIL image to bytes."""
    return _encode


@pytest.fixture()
def png_bytes() -> bytes:
    return _encode(_quadrants(), "PNG")


@pytest.fixture()
def exif_png() -> Callable[[int], bytes]:
    """Factory for a 6x4 PNG carrying an eXIf chunk with the given orientation."""

    def _make(orientation: int) -> bytes:
        exif = Image.Exif()
        exif[ORIENTATION] = orientation
        return _encode(_quadrants(), "PNG", exif=exif)

    return _make


@pytest.fixture()
def jpeg_with_exif() -> bytes:
    """6x4 JPEG tagged Orientation=6 and Make=TestCam."""
    exif = Image.Exif()
    exif[ORIENTATION] = 6
    exif[MAKE] = "TestCam"
    return _encode(_quadrants(), "JPEG", exif=exif, quality=95)


@pytest.fixture()
def codec() -> PillowImageCodec:
    return PillowImageCodec()
