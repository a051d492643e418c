"""Exception handling utilities for consistent error formatting.

This module formats exceptions as structured JSON, logs them consistently
and maps them to HTTP responses the same way for every endpoint.
"""

import json
import logging
import traceback
from typing import Any

from ..core.domain.exceptions import ConfigurationError, InvalidArgumentError, RagChatError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred processing your request."


def format_exception_json(
    exc: Exception,
    include_trace: bool = False,
    extra_context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Format any exception as structured JSON.

    Works with both RagChatError and standard Python exceptions.

    Args:
        exc: The exception to format.
        include_trace: If True, include full stack trace.
        extra_context: Additional context to include in output.

    Returns:
        Dictionary with structured error information.
    """
    if isinstance(exc, RagChatError):
        result = exc.to_dict(include_trace=include_trace)
        if extra_context:
            result.setdefault("context", {}).update(extra_context)
        return result

    tb = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    last_frame = tb[-1] if tb else None

    result: dict[str, Any] = {
        "error": {
            "type": type(exc).__name__,
            "code": "PYTHON_ERR",
            "message": str(exc),
        },
        "location": {
            "class": "<unknown>",
            "method": last_frame.name if last_frame else "<unknown>",
            "file": (
                last_frame.filename.split("\\")[-1].split("/")[-1] if last_frame else "<unknown>"
            ),
            "line": last_frame.lineno if last_frame else 0,
        },
    }

    if extra_context:
        result["context"] = extra_context

    if include_trace:
        result["stack_trace"] = [
            line.strip()
            for line in traceback.format_exception(type(exc), exc, exc.__traceback__)
            if line.strip()
        ]

    return result


def log_exception(
    exc: Exception,
    log: logging.Logger | None = None,
    level: int = logging.ERROR,
    extra_context: dict[str, Any] | None = None,
) -> None:
    """Log exception in structured JSON format.

    Args:
        exc: The exception to log.
        log: Logger instance to use (defaults to module logger).
        level: Logging level (default: ERROR).
        extra_context: Additional context to include.
    """
    log_instance = log or logger

    exc_data = format_exception_json(exc, include_trace=True, extra_context=extra_context)
    log_instance.log(level, json.dumps(exc_data, indent=2, default=str))


def get_http_status_code(exc: Exception) -> int:
    """Map exception type to HTTP status code.

    Only input validation surfaces as 400; every other failure is a 500.

    Args:
        exc: The exception to map.

    Returns:
        400 or 500.
    """
    if isinstance(exc, InvalidArgumentError) and not isinstance(exc, ConfigurationError):
        return 400
    return 500


def get_public_message(exc: Exception) -> str:
    """Client-safe error message for an exception."""
    if get_http_status_code(exc) == 400:
        return exc.message if isinstance(exc, RagChatError) else str(exc)
    return GENERIC_ERROR_MESSAGE
