"""
Raw Image Value Object

Decoded in-memory bitmap passed between pipeline steps.
"""

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np


@dataclass
class RawImage:
    """
    Decoded bitmap owned by a single pipeline.

    Unlike the input sources this is mutable: transforms swap in a new
    pixel array and the previous one is released.

    Attributes:
        pixels: HxWxC uint8 array, C is 3 (RGB) or 4 (RGBA)
    """

    pixels: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        """Validate the pixel buffer layout."""
        if not isinstance(self.pixels, np.ndarray):
            raise ValueError("RawImage pixels must be a numpy array")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"RawImage pixels must be uint8, got {self.pixels.dtype}")
        if self.pixels.ndim != 3 or self.pixels.shape[2] not in (3, 4):
            raise ValueError(f"RawImage pixels must be HxWx3 or HxWx4, got shape {self.pixels.shape}")
        if self.pixels.shape[0] < 1 or self.pixels.shape[1] < 1:
            raise ValueError("RawImage must be at least 1x1")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def channels(self) -> int:
        return int(self.pixels.shape[2])

    @property
    def has_alpha(self) -> bool:
        return self.channels == 4

    @property
    def size(self) -> Tuple[int, int]:
        """Get image dimensions as (width, height) tuple."""
        return (self.width, self.height)

    def __str__(self) -> str:
        mode = "RGBA" if self.has_alpha else "RGB"
        return f"RawImage({self.width}x{self.height}, {mode})"

    @classmethod
    def from_array(cls, array: np.ndarray) -> "RawImage":
        """
        Create a RawImage from any uint8 numpy array.

        Grayscale (HxW or HxWx1) arrays are expanded to RGB.

        Args:
            array: Pixel data

        Returns:
            RawImage owning a contiguous copy of the pixels
        """
        pixels = np.asarray(array)
        if pixels.ndim == 3 and pixels.shape[2] == 1:
            pixels = pixels[:, :, 0]
        if pixels.ndim == 2:
            pixels = np.stack([pixels] * 3, axis=-1)
        return cls(pixels=np.ascontiguousarray(pixels).copy())
