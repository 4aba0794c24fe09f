"""
Image codec adapters.
"""

from .pillow_codec import PillowImageCodec, PNG_DEFAULT_COMPRESSION, WEBP_LOSSLESS_QUALITY
from .factory import ImageCodecFactory, ImageCodecType

__all__ = [
    "PillowImageCodec",
    "PNG_DEFAULT_COMPRESSION",
    "WEBP_LOSSLESS_QUALITY",
    "ImageCodecFactory",
    "ImageCodecType",
]
