"""
OpenCV-based Image Processing Utilities

Orientation correction and aspect-preserving downscaling on HxWxC numpy
arrays. Both operate on RGB and RGBA buffers alike.
"""

import cv2
import numpy as np
from typing import Dict, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


# EXIF orientation code -> rotation that brings the stored pixels upright
_ORIENTATION_ROTATIONS: Dict[int, int] = {
    3: cv2.ROTATE_180,
    4: cv2.ROTATE_180,
    5: cv2.ROTATE_90_CLOCKWISE,
    6: cv2.ROTATE_90_CLOCKWISE,
    7: cv2.ROTATE_90_COUNTERCLOCKWISE,
    8: cv2.ROTATE_90_COUNTERCLOCKWISE,
}

# Codes whose rotation is followed by a horizontal (mirror) flip
_ORIENTATION_FLIPS = frozenset({2, 4, 5, 7})

# Smoothing filters only, no nearest-neighbour
INTERPOLATIONS: Dict[str, int] = {
    "area": cv2.INTER_AREA,
    "linear": cv2.INTER_LINEAR,
    "cubic": cv2.INTER_CUBIC,
    "lanczos": cv2.INTER_LANCZOS4,
}


def interpolation_flag(name: str) -> int:
    """
    Map an interpolation name to its OpenCV flag.

    Raises:
        ValueError: If the name is not one of INTERPOLATIONS
    """
    try:
        return INTERPOLATIONS[name.lower()]
    except (KeyError, AttributeError):
        raise ValueError(
            f"Unknown interpolation: {name!r}. Supported: {', '.join(INTERPOLATIONS)}"
        ) from None


def rotate_from_orientation(img: np.ndarray, orientation: int) -> np.ndarray:
    """
    Re-orient an image according to its EXIF orientation code.

    Code 6 means the camera was rotated 90 degrees clockwise relative to
    the stored pixels, so the pixels are rotated 90 degrees clockwise to
    compensate; code 8 is the opposite. Codes 2, 4, 5 and 7 additionally
    mirror the rotated result horizontally.

    Args:
        img: Input image
        orientation: EXIF orientation code (1-8); other values are ignored

    Returns:
        Re-oriented image (the input itself for code 1 or unknown codes)
    """
    rotation = _ORIENTATION_ROTATIONS.get(orientation)
    result = cv2.rotate(img, rotation) if rotation is not None else img

    if orientation in _ORIENTATION_FLIPS:
        result = cv2.flip(result, 1)

    if result is not img:
        logger.debug(f"Applied orientation {orientation}: {img.shape[1]}x{img.shape[0]} -> "
                     f"{result.shape[1]}x{result.shape[0]}")
    return result


def compute_downscaled_size(
    width: int,
    height: int,
    max_width: int,
    max_height: int
) -> Optional[Tuple[int, int]]:
    """
    Compute the target size for an aspect-preserving downscale.

    Landscape images are fitted to max_width, portrait and square ones to
    max_height. Images already within both bounds are never upscaled.

    Args:
        width: Current width
        height: Current height
        max_width: Width bound
        max_height: Height bound

    Returns:
        (new_width, new_height), or None if no resize is needed
    """
    if width <= max_width and height <= max_height:
        return None

    ratio = width / height

    if ratio > 1:  # landscape
        new_width = max_width
        new_height = max_width / ratio
    else:  # portrait
        new_height = max_height
        new_width = max_height * ratio

    return max(1, int(round(new_width))), max(1, int(round(new_height)))


def resize_image(
    img: np.ndarray,
    size: Tuple[int, int],
    interpolation: int = cv2.INTER_AREA
) -> Tuple[np.ndarray, float]:
    """
    Resample an image to an exact size.

    Args:
        img: Input image
        size: Target (width, height)
        interpolation: OpenCV interpolation method
            - INTER_AREA: Best for shrinking (default)
            - INTER_LINEAR: Fast bilinear
            - INTER_CUBIC: Slower but better quality

    Returns:
        Tuple of (resized_image, scale_factor)
    """
    height, width = img.shape[:2]
    new_width, new_height = size

    resized = cv2.resize(img, (new_width, new_height), interpolation=interpolation)
    scale = new_width / width

    logger.debug(f"Resized image from {width}x{height} to {new_width}x{new_height}")

    return resized, scale
