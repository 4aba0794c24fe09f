"""
Application Configuration

Settings and configuration management for the image pipeline.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import os

from dotenv import find_dotenv, load_dotenv


@dataclass
class CodecConfig:
    """Image codec configuration."""

    type: str = "pillow"
    max_image_pixels: Optional[int] = None  # None = no limit beyond Pillow's own


@dataclass
class MetadataConfig:
    """Metadata extraction configuration."""

    reader: str = "pillow_exif"  # pillow_exif, none


@dataclass
class TransformConfig:
    """Transform configuration."""

    interpolation: str = "area"  # area, linear, cubic, lanczos


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    log_file: Optional[str] = None
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


@dataclass
class AppConfig:
    """
    Main application configuration.

    Aggregates all component configurations.
    """

    codec: CodecConfig = field(default_factory=CodecConfig)
    metadata: MetadataConfig = field(default_factory=MetadataConfig)
    transform: TransformConfig = field(default_factory=TransformConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "AppConfig":
        """
        Create configuration from environment variables.

        Values from a .env file are loaded first; variables already set in
        the environment take precedence.

        Environment variables:
            IMGPIPE_CODEC_TYPE: Codec implementation (pillow)
            IMGPIPE_MAX_IMAGE_PIXELS: Decode pixel-count limit
            IMGPIPE_METADATA_READER: Metadata reader (pillow_exif/none)
            IMGPIPE_INTERPOLATION: Downscale filter (area/linear/cubic/lanczos)
            IMGPIPE_LOG_LEVEL: Logging level
            IMGPIPE_LOG_FILE: Optional log file path
        """
        load_dotenv(dotenv_path=env_file or find_dotenv(usecwd=True))
        config = cls()

        # Codec
        if codec_type := os.getenv("IMGPIPE_CODEC_TYPE"):
            config.codec.type = codec_type
        if max_pixels := os.getenv("IMGPIPE_MAX_IMAGE_PIXELS"):
            config.codec.max_image_pixels = int(max_pixels)

        # Metadata
        if reader := os.getenv("IMGPIPE_METADATA_READER"):
            config.metadata.reader = reader

        # Transforms
        if interpolation := os.getenv("IMGPIPE_INTERPOLATION"):
            config.transform.interpolation = interpolation

        # Logging
        if log_level := os.getenv("IMGPIPE_LOG_LEVEL"):
            config.logging.level = log_level
        if log_file := os.getenv("IMGPIPE_LOG_FILE"):
            config.logging.log_file = log_file

        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create configuration from dictionary."""
        config = cls()

        for section in ("codec", "metadata", "transform", "logging"):
            if section in data:
                target = getattr(config, section)
                for key, value in data[section].items():
                    if hasattr(target, key):
                        setattr(target, key, value)

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "codec": {
                "type": self.codec.type,
                "max_image_pixels": self.codec.max_image_pixels,
            },
            "metadata": {
                "reader": self.metadata.reader,
            },
            "transform": {
                "interpolation": self.transform.interpolation,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
                "format": self.logging.format,
            },
        }


def get_default_config() -> AppConfig:
    """Get default application configuration."""
    return AppConfig.from_env()
