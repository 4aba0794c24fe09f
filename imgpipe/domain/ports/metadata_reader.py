"""
Metadata Reader Port

Abstract interface for embedded-metadata (EXIF) extraction.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Union


class MetadataReaderPort(ABC):
    """
    Port (interface) for metadata extraction implementations.

    Readers work on the original encoded source, never on a decoded
    bitmap, since decoding drops the metadata.
    """

    @abstractmethod
    def read_metadata(self, source: Union[bytes, Path]) -> Dict[str, Any]:
        """
        Extract metadata tags from an encoded image.

        Args:
            source: Encoded image bytes or a path to an image file

        Returns:
            Mapping of tag name to value; empty if the image carries none

        Raises:
            MetadataReadError: If the source cannot be parsed
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the reader identifier."""
        pass
