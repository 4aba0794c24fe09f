"""
Ports (Interfaces)

Abstract interfaces defining the contracts for infrastructure adapters.
Following Hexagonal Architecture / Ports & Adapters pattern.
"""

from .image_codec import ImageCodecPort
from .metadata_reader import MetadataReaderPort

__all__ = [
    "ImageCodecPort",
    "MetadataReaderPort",
]
