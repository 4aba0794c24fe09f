"""
Image Codec Factory

Factory for creating image codec instances.
"""

from typing import Dict, Any
from enum import Enum

from ...domain.ports.image_codec import ImageCodecPort
from .pillow_codec import PillowImageCodec


class ImageCodecType(Enum):
    """Available image codec implementations."""

    PILLOW = "pillow"


class ImageCodecFactory:
    """
    Factory for creating image codec instances.

    Usage:
        codec = ImageCodecFactory.create(ImageCodecType.PILLOW)

        # With a decode size limit
        codec = ImageCodecFactory.create(
            ImageCodecType.PILLOW,
            max_image_pixels=50_000_000
        )
    """

    @staticmethod
    def create(
        codec_type: ImageCodecType,
        **kwargs
    ) -> ImageCodecPort:
        """
        Create an image codec instance.

        Args:
            codec_type: Type of codec to create
            **kwargs: Additional configuration options
                For PILLOW:
                - max_image_pixels: Pixel-count limit for decoding

        Returns:
            ImageCodecPort implementation
        """
        if codec_type == ImageCodecType.PILLOW:
            return PillowImageCodec(
                max_image_pixels=kwargs.get("max_image_pixels")
            )

        else:
            raise ValueError(f"Unknown codec type: {codec_type}")

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> ImageCodecPort:
        """
        Create codec from configuration dictionary.

        Args:
            config: Configuration dictionary with 'type' and other options

        Returns:
            ImageCodecPort implementation
        """
        codec_type = ImageCodecType(config.get("type", "pillow"))
        return ImageCodecFactory.create(codec_type, **config)
