"""
Metadata Reader Factory

Factory for creating metadata reader instances.
"""

from typing import Dict, Any
from enum import Enum

from ...domain.ports.metadata_reader import MetadataReaderPort
from .exif_reader import PillowExifReader, NullMetadataReader


class MetadataReaderType(Enum):
    """Available metadata reader implementations."""

    PILLOW_EXIF = "pillow_exif"
    NONE = "none"


class MetadataReaderFactory:
    """
    Factory for creating metadata reader instances.

    Usage:
        reader = MetadataReaderFactory.create(MetadataReaderType.PILLOW_EXIF)
    """

    @staticmethod
    def create(reader_type: MetadataReaderType) -> MetadataReaderPort:
        """
        Create a metadata reader instance.

        Args:
            reader_type: Type of reader to create

        Returns:
            MetadataReaderPort implementation
        """
        if reader_type == MetadataReaderType.PILLOW_EXIF:
            return PillowExifReader()

        elif reader_type == MetadataReaderType.NONE:
            return NullMetadataReader()

        else:
            raise ValueError(f"Unknown metadata reader type: {reader_type}")

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> MetadataReaderPort:
        """
        Create reader from configuration dictionary.

        Args:
            config: Configuration dictionary with a 'reader' key

        Returns:
            MetadataReaderPort implementation
        """
        reader_type = MetadataReaderType(config.get("reader", "pillow_exif"))
        return MetadataReaderFactory.create(reader_type)
