"""
Domain Exceptions

Custom exceptions for the image normalization pipeline.
Every pipeline error is terminal for the operation that raised it.
"""

from typing import Optional, Dict, Any


class DomainException(Exception):
    """
    Base exception for all domain-level errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details
        is_recoverable: Whether the operation can be retried
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        is_recoverable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.is_recoverable = is_recoverable

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "is_recoverable": self.is_recoverable,
        }


# =============================================================================
# Pipeline Exceptions
# =============================================================================

class ImagePipelineError(DomainException):
    """Base exception for image pipeline errors."""
    pass


class NotInitializedError(ImagePipelineError):
    """No image source was provided, or the original source is gone."""

    def __init__(self, message: str = "Pipeline has no image source", **kwargs):
        super().__init__(message, **kwargs)


class UnsupportedFormatError(ImagePipelineError):
    """The input's image type has no registered decoder."""

    def __init__(
        self,
        mime: Optional[str] = None,
        message: Optional[str] = None,
        **kwargs
    ):
        message = message or f"Unsupported image format: {mime or 'unrecognized content'}"
        super().__init__(message, **kwargs)
        self.mime = mime
        self.details["mime"] = mime


class DecodeFailedError(ImagePipelineError):
    """The decoder rejected the input (corrupt, truncated or oversized)."""

    def __init__(
        self,
        message: str = "Unsuccessful image loading - could be damaged or an unsupported format",
        **kwargs
    ):
        super().__init__(message, **kwargs)


class EncodeFailedError(ImagePipelineError):
    """The encoder rejected the in-memory image or its parameters."""

    def __init__(
        self,
        message: str = "Failed to encode image",
        image_format: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        if image_format:
            self.details["format"] = image_format


class OutputNotConfiguredError(ImagePipelineError):
    """Materialization was requested before an output format was set."""

    def __init__(
        self,
        message: str = "No output format specified, call set_output() first",
        **kwargs
    ):
        super().__init__(message, **kwargs)


class InvalidArgumentError(ImagePipelineError):
    """Invalid argument provided to a pipeline operation."""

    def __init__(
        self,
        field: str,
        reason: str,
        **kwargs
    ):
        message = f"Invalid argument '{field}': {reason}"
        super().__init__(message, **kwargs)
        self.details["field"] = field
        self.details["reason"] = reason


# =============================================================================
# Metadata Exceptions
# =============================================================================

class MetadataReadError(DomainException):
    """
    Metadata could not be extracted from the source.

    Raised by metadata readers; the pipeline treats it as "no metadata".
    """

    def __init__(self, message: str = "Failed to read image metadata", **kwargs):
        super().__init__(message, is_recoverable=True, **kwargs)
