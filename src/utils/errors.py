"""
Error handling utilities for the image search tool.

This module provides the exception classes raised across the search pipeline
and a helper that maps them to process exit codes.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel

from src.utils.logging import get_logger

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """Enumeration of error codes for consistent error reporting."""

    # General errors (1xxx)
    USAGE_ERROR = "1001"

    # Search errors (6xxx)
    SEARCH_TIMEOUT = "6002"
    FILTER_PARSE_ERROR = "6003"
    TEMPLATE_ERROR = "6004"

    # Registry errors (8xxx)
    REGISTRY_QUERY_ERROR = "8000"
    REGISTRY_UNAUTHORIZED = "8001"
    NO_REGISTRIES = "8002"


class ErrorDetail(BaseModel):
    """Model representing detailed error information."""

    location: Optional[str] = None
    param: Optional[str] = None
    value: Optional[Any] = None
    message: str


class ImageSearchError(Exception):
    """Base exception class for image search errors."""

    exit_code = 125

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[List[ErrorDetail]] = None,
    ):
        """
        Initialize a new image search error.

        Args:
            code: Error code
            message: Error message
            details: Optional list of error details
        """
        self.code = code
        self.message = message
        self.details = details or []
        super().__init__(self.message)


class UsageError(ImageSearchError):
    """Exception for wrong command-line usage."""

    def __init__(
        self,
        message: str = "Invalid usage",
        details: Optional[List[ErrorDetail]] = None,
    ):
        """Initialize a new usage error."""
        super().__init__(
            code=ErrorCode.USAGE_ERROR,
            message=message,
            details=details,
        )


class FilterParseError(ImageSearchError):
    """Exception for filter expressions that cannot be parsed."""

    def __init__(
        self,
        message: str = "Invalid filter",
        details: Optional[List[ErrorDetail]] = None,
    ):
        """Initialize a new filter parse error."""
        super().__init__(
            code=ErrorCode.FILTER_PARSE_ERROR,
            message=message,
            details=details,
        )


class RegistryQueryError(ImageSearchError):
    """Exception for a failed search against a single registry."""

    def __init__(
        self,
        message: str = "Registry query failed",
        registry: Optional[str] = None,
        details: Optional[List[ErrorDetail]] = None,
        code: ErrorCode = ErrorCode.REGISTRY_QUERY_ERROR,
    ):
        """Initialize a new registry query error."""
        self.registry = registry
        super().__init__(
            code=code,
            message=message,
            details=details,
        )


class AggregateError(ImageSearchError):
    """Exception for searches that cannot run at all, e.g. no registries."""

    def __init__(
        self,
        message: str = "No registries to search",
        details: Optional[List[ErrorDetail]] = None,
    ):
        """Initialize a new aggregate error."""
        super().__init__(
            code=ErrorCode.NO_REGISTRIES,
            message=message,
            details=details,
        )


class TemplateError(ImageSearchError):
    """Exception for output templates referencing unknown fields."""

    def __init__(
        self,
        message: str = "Invalid output template",
        details: Optional[List[ErrorDetail]] = None,
    ):
        """Initialize a new template error."""
        super().__init__(
            code=ErrorCode.TEMPLATE_ERROR,
            message=message,
            details=details,
        )


def handle_error(exc: Exception) -> int:
    """
    Log an error raised out of a command and return the exit code to use.

    Args:
        exc: The exception that ended the command

    Returns:
        Process exit code
    """
    if isinstance(exc, ImageSearchError):
        logger.error(
            f"{type(exc).__name__}: {exc.code.value} - {exc.message}",
            extra={
                "error_code": exc.code,
                "error_details": [detail.model_dump() for detail in exc.details],
            },
        )
        return exc.exit_code

    logger.exception(f"Unhandled exception: {exc}")
    return 1
