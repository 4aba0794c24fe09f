"""
Output Configuration Value Object
"""

from dataclasses import dataclass
from typing import Optional

from .image_format import ImageFormat


@dataclass(frozen=True)
class OutputConfig:
    """
    Target encoding for materialization.

    Attributes:
        format: Output image format
        quality: Passed to the encoder; meaning depends on the format
            (0-100 for JPEG/WEBP, zlib level for PNG). None = encoder default.
    """

    format: ImageFormat
    quality: Optional[int] = None

    @property
    def mime(self) -> str:
        return self.format.mime
