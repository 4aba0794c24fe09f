"""
Logging Configuration

Structured logging for the image pipeline.
"""

import logging
import sys
from typing import Dict, Optional, Union
from datetime import datetime


LOGGER_NAMESPACE = "imgpipe"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Logging level (default: INFO), as int or name
        log_file: Optional file path for log output
        format_string: Custom format string
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if format_string is None:
        format_string = (
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        )

    # Create formatter
    formatter = logging.Formatter(format_string)

    # Get root logger for our package
    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    root_logger.setLevel(level)

    # Clear existing handlers
    root_logger.handlers = []

    # Console handler; stdout may carry image output, so logs go to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger inside the imgpipe namespace
    """
    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


class PipelineLogger:
    """
    Specialized logger for pipeline execution.

    Logs start, completion and duration of each pipeline step
    (decode, metadata, rotate, downscale, encode).
    """

    def __init__(self, pipeline_id: str):
        self.pipeline_id = pipeline_id
        self.logger = logging.getLogger(f"{LOGGER_NAMESPACE}.pipeline.{pipeline_id[:8]}")
        self._step_start_times: Dict[str, datetime] = {}

    def step_start(self, step_name: str) -> None:
        """Log step start."""
        self._step_start_times[step_name] = datetime.now()
        self.logger.debug(f"Step '{step_name}' started")

    def step_end(self, step_name: str, success: bool = True, detail: str = "") -> float:
        """
        Log step completion.

        Returns:
            Step duration in milliseconds
        """
        duration = 0.0
        started = self._step_start_times.pop(step_name, None)
        if started is not None:
            delta = datetime.now() - started
            duration = delta.total_seconds() * 1000

        status = "completed" if success else "failed"
        suffix = f" ({detail})" if detail else ""
        self.logger.info(f"Step '{step_name}' {status} in {duration:.2f}ms{suffix}")
        return duration

    def step_skipped(self, step_name: str, reason: str) -> None:
        """Log a step that had nothing to do."""
        self.logger.debug(f"Step '{step_name}' skipped: {reason}")

    def step_error(self, step_name: str, error: Exception) -> None:
        """Log step error."""
        self._step_start_times.pop(step_name, None)
        self.logger.error(f"Step '{step_name}' error: {error}")
