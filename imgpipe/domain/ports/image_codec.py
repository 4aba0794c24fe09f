"""
Image Codec Port

Abstract interface for image decode/encode implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional, FrozenSet

from ..value_objects.image_format import ImageFormat
from ..value_objects.raw_image import RawImage


class ImageCodecPort(ABC):
    """
    Port (interface) for image codec implementations.

    Responsible for:
    - Identifying the image type of a byte stream by content
    - Decoding BMP/GIF/PNG/JPEG/WEBP bytes into a RawImage
    - Encoding a RawImage to JPEG/PNG/WEBP bytes
    """

    @abstractmethod
    def probe_mime(self, data: bytes) -> Optional[str]:
        """
        Identify the image MIME type from content.

        Args:
            data: Encoded image bytes

        Returns:
            MIME type (e.g. "image/png"), or None if the content is not a
            recognizable image

        Raises:
            DecodeFailedError: If the content has a known signature but a
                malformed header
        """
        pass

    @abstractmethod
    def decode(self, data: bytes, mime: Optional[str] = None) -> RawImage:
        """
        Decode image bytes.

        Args:
            data: Encoded image bytes
            mime: Decoder to use; when None the format is sniffed among
                the supported formats

        Returns:
            Decoded RawImage

        Raises:
            UnsupportedFormatError: If mime has no registered decoder
            DecodeFailedError: If the decoder rejects the data
        """
        pass

    @abstractmethod
    def encode(
        self,
        image: RawImage,
        fmt: ImageFormat,
        quality: Optional[int] = None
    ) -> bytes:
        """
        Encode a RawImage.

        Args:
            image: Image to encode
            fmt: Output format
            quality: Format-specific quality, None for the encoder default

        Returns:
            Encoded bytes

        Raises:
            EncodeFailedError: If the encoder rejects the image or quality
        """
        pass

    @property
    @abstractmethod
    def supported_mimes(self) -> FrozenSet[str]:
        """MIME types that have a registered decoder."""
        pass

    def supports(self, mime: Optional[str]) -> bool:
        """Check whether a MIME type can be decoded."""
        return mime is not None and mime in self.supported_mimes
