"""
Image Format Value Object

Output formats the pipeline can encode to.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Union


class ImageFormat(Enum):
    """Supported output formats, valued by MIME type."""

    JPEG = "image/jpeg"
    PNG = "image/png"
    WEBP = "image/webp"

    @property
    def mime(self) -> str:
        return self.value

    @property
    def pil_format(self) -> str:
        """Pillow format identifier used for encoding."""
        return self.name

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self][0]

    @property
    def supports_alpha(self) -> bool:
        return self is not ImageFormat.JPEG

    @classmethod
    def parse(cls, value: Union["ImageFormat", str]) -> "ImageFormat":
        """
        Resolve a format from a member, short name, MIME type or extension.

        Args:
            value: e.g. ImageFormat.PNG, "png", "JPG", "image/webp", ".jpeg"

        Returns:
            Matching ImageFormat

        Raises:
            ValueError: If the value names no supported format
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unknown image format: {value!r}")

        key = value.strip().lower()
        for fmt in cls:
            if key == fmt.mime or key.lstrip(".") in _EXTENSIONS[fmt]:
                return fmt

        raise ValueError(f"Unknown image format: {value!r}")

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> Optional["ImageFormat"]:
        """Infer a format from a file extension, None if not recognized."""
        suffix = Path(path).suffix
        if not suffix:
            return None
        try:
            return cls.parse(suffix)
        except ValueError:
            return None


_EXTENSIONS = {
    ImageFormat.JPEG: ("jpg", "jpeg", "jpe"),
    ImageFormat.PNG: ("png",),
    ImageFormat.WEBP: ("webp",),
}
