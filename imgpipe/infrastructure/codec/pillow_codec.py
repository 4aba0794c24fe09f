"""
Pillow Image Codec

Decode/encode implementation backed by Pillow, producing numpy RawImages.
"""

from functools import partial
from io import BytesIO
from typing import Callable, Dict, FrozenSet, Optional, Any
import logging

import numpy as np
from PIL import Image, UnidentifiedImageError

from ...domain.ports.image_codec import ImageCodecPort
from ...domain.value_objects.image_format import ImageFormat
from ...domain.value_objects.raw_image import RawImage
from ...domain.exceptions import (
    DecodeFailedError,
    EncodeFailedError,
    UnsupportedFormatError,
)


logger = logging.getLogger(__name__)

Decoder = Callable[[bytes], RawImage]

# zlib's "default compression" sentinel, used when no PNG level is given
PNG_DEFAULT_COMPRESSION = -1

# WEBP quality value that selects lossless encoding
WEBP_LOSSLESS_QUALITY = 101

# Multi-picture JPEGs (common from phone cameras) decode with the JPEG plugin
_FORMAT_ALIASES = {"MPO": "JPEG"}

_DECODE_ERRORS = (OSError, SyntaxError, ValueError, EOFError, Image.DecompressionBombError)
_ENCODE_ERRORS = (OSError, ValueError, TypeError, KeyError)


class PillowImageCodec(ImageCodecPort):
    """
    Image codec implementation using Pillow.

    Decoders are kept in a capability table keyed by MIME type, so new input
    formats are added with register_decoder() instead of editing the
    dispatch logic.

    Attributes:
        max_image_pixels: Optional pixel-count limit enforced before decoding
    """

    # MIME type -> Pillow format identifier for the built-in decoders
    DEFAULT_DECODERS: Dict[str, str] = {
        "image/bmp": "BMP",
        "image/gif": "GIF",
        "image/png": "PNG",
        "image/jpeg": "JPEG",
        "image/webp": "WEBP",
    }

    def __init__(self, max_image_pixels: Optional[int] = None):
        """
        Initialize the codec.

        Args:
            max_image_pixels: Reject images with more pixels than this
        """
        self.max_image_pixels = max_image_pixels
        self._decoders: Dict[str, Decoder] = {}

        for mime, pil_format in self.DEFAULT_DECODERS.items():
            self.register_decoder(mime, partial(self._decode_as, pil_format))

    # -- ImageCodecPort -------------------------------------------------------

    @property
    def supported_mimes(self) -> FrozenSet[str]:
        return frozenset(self._decoders)

    def register_decoder(self, mime: str, decoder: Decoder) -> None:
        """
        Register (or replace) the decoder for a MIME type.

        Args:
            mime: MIME type, e.g. "image/tiff"
            decoder: Callable turning encoded bytes into a RawImage
        """
        self._decoders[mime.lower()] = decoder
        logger.debug(f"Registered decoder for {mime}")

    def probe_mime(self, data: bytes) -> Optional[str]:
        try:
            with Image.open(BytesIO(data)) as img:
                pil_format = _FORMAT_ALIASES.get(img.format, img.format)
                return Image.MIME.get(pil_format or "")
        except UnidentifiedImageError:
            return None
        except Image.DecompressionBombError as e:
            raise DecodeFailedError(f"Image exceeds the decompression limit: {e}") from e
        except _DECODE_ERRORS as e:
            # Recognized signature, but the plugin rejected the header
            raise DecodeFailedError(f"Unsuccessful image loading - malformed image header: {e}") from e

    def decode(self, data: bytes, mime: Optional[str] = None) -> RawImage:
        if mime is None:
            mime = self.probe_mime(data)
            if not self.supports(mime):
                raise DecodeFailedError(
                    f"Unsuccessful image loading - unrecognized image data ({mime or 'unknown type'})"
                )

        decoder = self._decoders.get(mime.lower())
        if decoder is None:
            raise UnsupportedFormatError(mime)
        return decoder(data)

    def encode(
        self,
        image: RawImage,
        fmt: ImageFormat,
        quality: Optional[int] = None
    ) -> bytes:
        params = self._encode_params(fmt, quality)
        buffer = BytesIO()

        try:
            pil_image = Image.fromarray(image.pixels)
            if not fmt.supports_alpha and pil_image.mode != "RGB":
                pil_image = pil_image.convert("RGB")
            pil_image.save(buffer, format=fmt.pil_format, **params)
        except _ENCODE_ERRORS as e:
            raise EncodeFailedError(f"Failed to encode {fmt.name}: {e}", image_format=fmt.name) from e

        encoded = buffer.getvalue()
        logger.debug(f"Encoded {image} as {fmt.name} ({len(encoded)} bytes, params={params})")
        return encoded

    # -- Internal -------------------------------------------------------------

    def _decode_as(self, pil_format: str, data: bytes) -> RawImage:
        """Decode with a single Pillow plugin."""
        try:
            with Image.open(BytesIO(data), formats=[pil_format]) as img:
                self._check_pixel_limit(img)
                img.load()
                pixels = np.array(self._normalize_mode(img), dtype=np.uint8)
        except _DECODE_ERRORS as e:
            raise DecodeFailedError(
                f"Unsuccessful image loading - could be damaged or an unsupported format: {e}"
            ) from e

        return RawImage.from_array(pixels)

    def _check_pixel_limit(self, img: Image.Image) -> None:
        if self.max_image_pixels is None:
            return
        pixels = img.width * img.height
        if pixels > self.max_image_pixels:
            raise DecodeFailedError(
                f"Image has {pixels} pixels, exceeding the limit of {self.max_image_pixels}",
                details={"width": img.width, "height": img.height},
            )

    @staticmethod
    def _normalize_mode(img: Image.Image) -> Image.Image:
        """Convert any decoded mode to RGB, or RGBA when transparency exists."""
        if img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info:
            return img if img.mode == "RGBA" else img.convert("RGBA")
        if img.mode != "RGB":
            return img.convert("RGB")
        return img

    @staticmethod
    def _encode_params(fmt: ImageFormat, quality: Optional[int]) -> Dict[str, Any]:
        """Translate the pipeline quality into Pillow save() options."""
        if fmt is ImageFormat.PNG:
            level = PNG_DEFAULT_COMPRESSION if quality is None else quality
            if not PNG_DEFAULT_COMPRESSION <= level <= 9:
                raise EncodeFailedError(
                    f"PNG compression level must be between -1 and 9, got {quality}",
                    image_format=fmt.name,
                )
            return {"compress_level": level}

        if quality is None:
            return {}

        if fmt is ImageFormat.WEBP and quality == WEBP_LOSSLESS_QUALITY:
            return {"lossless": True}

        if not 0 <= quality <= 100:
            raise EncodeFailedError(
                f"{fmt.name} quality must be between 0 and 100, got {quality}",
                image_format=fmt.name,
            )
        return {"quality": quality}
