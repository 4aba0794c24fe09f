"""
Data URL helpers

Text encoding of binary images as "data:<mime>;base64,<payload>".
"""

import base64
import binascii
from typing import Optional, Tuple

from ...domain.exceptions import DecodeFailedError


def parse_data_url(data_url: str) -> Tuple[Optional[str], bytes]:
    """
    Split a data URL and decode its payload.

    Everything up to the first comma is the header; the MIME type is taken
    from it when present but callers should still sniff the content.

    Args:
        data_url: Data URL text

    Returns:
        Tuple of (mime or None, payload bytes)

    Raises:
        DecodeFailedError: If there is no comma or the payload is not base64
    """
    header, separator, payload = data_url.partition(",")
    if not separator:
        raise DecodeFailedError("Malformed data URL: missing ',' separator")

    mime = None
    if header.startswith("data:"):
        mime = header[len("data:"):].lstrip("/").split(";")[0].strip().lower() or None

    try:
        data = base64.b64decode(payload.strip())
    except (binascii.Error, ValueError) as e:
        raise DecodeFailedError(f"Malformed data URL payload: {e}") from e

    return mime, data


def build_data_url(data: bytes, mime: str) -> str:
    """Encode bytes as a base64 data URL with the given MIME type."""
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
