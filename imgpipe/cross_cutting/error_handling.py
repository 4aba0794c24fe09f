"""
Error Handling

Centralized error handling utilities.
"""

from typing import Callable, TypeVar, Optional, Tuple, Type
from functools import wraps
import logging
import traceback

from ..domain.exceptions import DomainException


logger = logging.getLogger(__name__)

T = TypeVar("T")


def handle_exception(
    default_return: T,
    log_level: int = logging.ERROR,
    reraise: bool = False
) -> Callable:
    """
    Decorator turning exceptions into a fallback return value.

    Pipeline errors are expected outcomes (bad input, wrong arguments) and
    are logged as a one-line summary. Filesystem errors are reported with
    the offending path. Anything else is treated as a bug and its
    traceback is logged at DEBUG.

    Args:
        default_return: Value to return on exception
        log_level: Logging level for caught exceptions
        reraise: Whether to reraise the exception after logging

    Returns:
        Decorated function
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _log_failure(func.__name__, e, log_level)
                if reraise:
                    raise
                return default_return
        return wrapper
    return decorator


def _log_failure(func_name: str, error: Exception, log_level: int) -> None:
    if isinstance(error, DomainException):
        logger.log(log_level, f"{error.__class__.__name__}: {error.message}")
        if error.details:
            logger.debug(f"{func_name} error details: {error.to_dict()}")
    elif isinstance(error, OSError):
        location = f": {error.filename}" if error.filename else ""
        logger.log(log_level, f"{error.strerror or error}{location}")
    else:
        logger.log(log_level, f"{func_name} unexpected error: {error}")
        logger.debug(traceback.format_exc())


class ErrorHandler:
    """
    Context manager for error handling.

    Only the exception types listed in ``suppress`` are swallowed; anything
    else is logged and propagates.

    Usage:
        with ErrorHandler(logger, suppress=(MetadataReadError,)) as handler:
            # do something risky
        if handler.has_error:
            # handle error
    """

    def __init__(
        self,
        logger: logging.Logger,
        context: str = "",
        suppress: Tuple[Type[BaseException], ...] = (),
        log_level: int = logging.ERROR
    ):
        """
        Initialize error handler.

        Args:
            logger: Logger for error messages
            context: Context string for error messages
            suppress: Exception types to suppress
            log_level: Level used when logging a suppressed exception
        """
        self.logger = logger
        self.context = context
        self.suppress = suppress
        self.log_level = log_level
        self.error: Optional[BaseException] = None
        self.error_message: Optional[str] = None

    def __enter__(self) -> "ErrorHandler":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_val is None:
            return False

        self.error = exc_val
        self.error_message = str(exc_val)
        suppressed = isinstance(exc_val, self.suppress)
        level = self.log_level if suppressed else logging.ERROR

        if self.context:
            self.logger.log(level, f"[{self.context}] {exc_val}")
        else:
            self.logger.log(level, str(exc_val))

        if isinstance(exc_val, DomainException):
            self.logger.debug(f"Details: {exc_val.details}")
        elif not suppressed:
            self.logger.debug("".join(traceback.format_exception(exc_type, exc_val, exc_tb)))

        return suppressed

    @property
    def has_error(self) -> bool:
        """Check if an error occurred."""
        return self.error is not None
