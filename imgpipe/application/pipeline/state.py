"""
Pipeline State

The two states of an image held by a pipeline: a not-yet-decoded source,
or a decoded bitmap. Decoding is a one-way transition.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ...domain.value_objects.image_source import ImageSource
from ...domain.value_objects.raw_image import RawImage


class PipelineStep(Enum):
    """Steps of the pipeline, used to label log records."""

    DECODE = "decode"
    METADATA = "metadata"
    ROTATE = "rotate"
    DOWNSCALE = "downscale"
    ENCODE = "encode"


@dataclass(frozen=True)
class Unresolved:
    """Holds the original encoded source until the first decode."""

    source: ImageSource


@dataclass
class Resolved:
    """
    Holds the decoded bitmap.

    Attributes:
        image: Owned RawImage, replaced by each transform
        origin_path: Input file path for file sources, None otherwise
    """

    image: RawImage
    origin_path: Optional[Path] = None


PipelineState = Union[Unresolved, Resolved]
