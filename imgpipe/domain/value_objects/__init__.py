"""
Value Objects

Objects that represent domain concepts with no identity.
"""

from .image_format import ImageFormat
from .image_source import ImageSource, RawBytesSource, DataUrlSource, FilePathSource
from .raw_image import RawImage
from .metadata import MetadataSnapshot, ORIENTATION_TAG
from .output_config import OutputConfig

__all__ = [
    "ImageFormat",
    "ImageSource",
    "RawBytesSource",
    "DataUrlSource",
    "FilePathSource",
    "RawImage",
    "MetadataSnapshot",
    "ORIENTATION_TAG",
    "OutputConfig",
]
