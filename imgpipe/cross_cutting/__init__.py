"""
Cross-Cutting Concerns

Utilities and services that span across multiple layers.
"""

from .logging import setup_logging, get_logger, PipelineLogger
from .validation import validate_dimension, validate_quality, validate_output_path
from .error_handling import handle_exception, ErrorHandler

__all__ = [
    "setup_logging",
    "get_logger",
    "PipelineLogger",
    "validate_dimension",
    "validate_quality",
    "validate_output_path",
    "handle_exception",
    "ErrorHandler",
]
