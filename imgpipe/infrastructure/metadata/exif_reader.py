"""
EXIF Metadata Readers

Metadata extraction implementations for the pipeline's metadata port.
"""

from io import BytesIO
from pathlib import Path
from typing import Any, Dict, Mapping, Union
import logging
import struct

from PIL import Image, ExifTags

from ...domain.ports.metadata_reader import MetadataReaderPort
from ...domain.exceptions import MetadataReadError


logger = logging.getLogger(__name__)

# Pointer from the base IFD to the Exif sub-IFD (DateTimeOriginal, etc.)
EXIF_IFD_POINTER = 0x8769

_READ_ERRORS = (OSError, SyntaxError, ValueError, EOFError, struct.error, Image.DecompressionBombError)


class PillowExifReader(MetadataReaderPort):
    """
    EXIF reader implementation using Pillow.

    Reads the base IFD (Orientation, Make, Model, ...) and the Exif
    sub-IFD from any container Pillow can extract EXIF from: JPEG, PNG
    (eXIf chunk), WEBP and TIFF. Tags are keyed by their standard names;
    tags unknown to Pillow keep their numeric id as a string.
    """

    @property
    def name(self) -> str:
        return "pillow_exif"

    def read_metadata(self, source: Union[bytes, Path]) -> Dict[str, Any]:
        fp = BytesIO(source) if isinstance(source, (bytes, bytearray)) else source

        try:
            with Image.open(fp) as img:
                exif = img.getexif()
                tags = self._named(exif)
                tags.update(self._named(exif.get_ifd(EXIF_IFD_POINTER)))
        except _READ_ERRORS as e:
            raise MetadataReadError(f"Failed to read EXIF data: {e}") from e

        logger.debug(f"Read {len(tags)} metadata tags")
        return tags

    @staticmethod
    def _named(ifd: Mapping[int, Any]) -> Dict[str, Any]:
        return {ExifTags.TAGS.get(tag_id, str(tag_id)): value for tag_id, value in ifd.items()}


class NullMetadataReader(MetadataReaderPort):
    """
    Reader that never finds metadata.

    Useful when orientation correction should be disabled globally.
    """

    @property
    def name(self) -> str:
        return "none"

    def read_metadata(self, source: Union[bytes, Path]) -> Dict[str, Any]:
        return {}
