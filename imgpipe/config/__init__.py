"""
Configuration Module

Application settings and configuration management.
"""

from .settings import (
    AppConfig,
    CodecConfig,
    MetadataConfig,
    TransformConfig,
    LoggingConfig,
    get_default_config,
)

__all__ = [
    "AppConfig",
    "CodecConfig",
    "MetadataConfig",
    "TransformConfig",
    "LoggingConfig",
    "get_default_config",
]
