"""
Application error types and the log-then-rethrow helper.
AppError subclasses carry the HTTP status the app's exception handler answers with.
"""

import json
from typing import Any, NoReturn

from utils.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base error for failures the API reports back to the caller."""

    status_code: int = 400

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class DownloadError(AppError):
    """Upstream resource could not be fetched."""

    status_code = 502


class DatabaseConfigError(AppError):
    """Database handle cannot be built from the current settings."""

    status_code = 500


def handle_error(error: Any) -> NoReturn:
    """
    Log an error and raise it as an AppError.

    AppErrors are re-raised untouched. Other exceptions keep their message
    behind an "Error: " prefix, plain strings likewise; anything else is
    JSON-dumped into an "Unknown error" message.
    """
    if isinstance(error, AppError):
        logger.error("app_error", extra={"error": error.message})
        raise error
    if isinstance(error, Exception):
        logger.error("error", extra={"error": str(error), "error_type": type(error).__name__})
        raise AppError(f"Error: {error}") from error
    if isinstance(error, str):
        logger.error("error", extra={"error": error})
        raise AppError(f"Error: {error}")
    logger.error("unknown_error", extra={"error": repr(error)})
    raise AppError(f"Unknown error: {json.dumps(error, default=str)}")
