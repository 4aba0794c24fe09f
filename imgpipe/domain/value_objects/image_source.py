"""
Image Source Value Objects

The three not-yet-decoded input representations. A pipeline holds exactly
one of them until the image is decoded, after which it is discarded.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class RawBytesSource:
    """Unparsed image byte stream."""

    data: bytes = field(repr=False)

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class DataUrlSource:
    """
    Data URL or data URI, e.g. as produced by FileReader.readAsDataURL.

    Attributes:
        data_url: "data:<mime>;base64,<payload>" text
    """

    data_url: str = field(repr=False)

    def __len__(self) -> int:
        return len(self.data_url)


@dataclass(frozen=True)
class FilePathSource:
    """Path to an image file on a readable filesystem."""

    path: Path

    def __str__(self) -> str:
        return str(self.path)


ImageSource = Union[RawBytesSource, DataUrlSource, FilePathSource]
