"""
Infrastructure Layer

Concrete adapters implementing the domain ports.
"""

from .codec import PillowImageCodec, ImageCodecFactory, ImageCodecType
from .metadata import (
    PillowExifReader,
    NullMetadataReader,
    MetadataReaderFactory,
    MetadataReaderType,
)

__all__ = [
    "PillowImageCodec",
    "ImageCodecFactory",
    "ImageCodecType",
    "PillowExifReader",
    "NullMetadataReader",
    "MetadataReaderFactory",
    "MetadataReaderType",
]
