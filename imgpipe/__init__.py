"""
imgpipe

Image ingestion and normalization pipeline.
Pipeline: SOURCE → DECODE → ORIENT → DOWNSCALE → ENCODE
"""

from .application.pipeline import ImagePipeline
from .config.settings import AppConfig, get_default_config
from .cross_cutting.logging import setup_logging
from .domain.value_objects import (
    ImageFormat,
    RawImage,
    MetadataSnapshot,
    OutputConfig,
    RawBytesSource,
    DataUrlSource,
    FilePathSource,
)
from .domain.exceptions import (
    DomainException,
    ImagePipelineError,
    NotInitializedError,
    UnsupportedFormatError,
    DecodeFailedError,
    EncodeFailedError,
    OutputNotConfiguredError,
    InvalidArgumentError,
    MetadataReadError,
)

__version__ = "1.0.0"

__all__ = [
    "ImagePipeline",
    "AppConfig",
    "get_default_config",
    "setup_logging",
    "ImageFormat",
    "RawImage",
    "MetadataSnapshot",
    "OutputConfig",
    "RawBytesSource",
    "DataUrlSource",
    "FilePathSource",
    "DomainException",
    "ImagePipelineError",
    "NotInitializedError",
    "UnsupportedFormatError",
    "DecodeFailedError",
    "EncodeFailedError",
    "OutputNotConfiguredError",
    "InvalidArgumentError",
    "MetadataReadError",
]
