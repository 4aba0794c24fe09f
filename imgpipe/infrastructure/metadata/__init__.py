"""
Metadata reader adapters.
"""

from .exif_reader import PillowExifReader, NullMetadataReader
from .factory import MetadataReaderFactory, MetadataReaderType

__all__ = [
    "PillowExifReader",
    "NullMetadataReader",
    "MetadataReaderFactory",
    "MetadataReaderType",
]
