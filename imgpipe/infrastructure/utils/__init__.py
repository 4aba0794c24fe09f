"""
Utility modules for the infrastructure layer.
"""

from .image_processing import (
    INTERPOLATIONS,
    interpolation_flag,
    rotate_from_orientation,
    compute_downscaled_size,
    resize_image,
)
from .data_url import parse_data_url, build_data_url

__all__ = [
    "INTERPOLATIONS",
    "interpolation_flag",
    "rotate_from_orientation",
    "compute_downscaled_size",
    "resize_image",
    "parse_data_url",
    "build_data_url",
]
