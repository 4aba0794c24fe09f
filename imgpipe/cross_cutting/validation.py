"""
Input Validation

Validation utilities for pipeline arguments.
"""

from typing import Any, Optional, Tuple
from pathlib import Path
import os


def validate_dimension(value: Any, name: str = "dimension") -> Tuple[bool, Optional[str]]:
    """
    Validate a size bound.

    Args:
        value: Candidate bound
        name: Argument name used in the error message

    Returns:
        Tuple of (is_valid, error_message)
    """
    # bool is an int subclass but never a meaningful size
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{name} must be an integer, got {type(value).__name__}"

    if value <= 0:
        return False, f"{name} must be positive, got {value}"

    return True, None


def validate_quality(value: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate an output quality setting.

    Range checks are format-specific and left to the encoder.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value is None:
        return True, None

    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"quality must be an integer or None, got {type(value).__name__}"

    return True, None


def validate_output_path(path: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate an output file path.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(path, (str, os.PathLike)):
        return False, f"path must be a string or path-like, got {type(path).__name__}"

    fs_path = os.fspath(path)
    if not isinstance(fs_path, str):
        return False, "path must decode to text"

    if not fs_path.strip():
        return False, "path is empty"

    if Path(fs_path).is_dir():
        return False, f"path is a directory: {path}"

    return True, None
