"""Logging infrastructure for the e2e harness.

This module provides structured logging for errors, debugging, and scenario events.
All logging functions use the standard library logging module so pytest's
log capture and the CLI share the same records.
"""

import logging
import sys
from typing import Any


class ErrorIds:
    """Constants for error IDs used in logging and failure triage."""

    # Wait / synchronization errors
    WAIT_TIMEOUT = "ERR_WAIT_TIMEOUT"
    WAIT_SNAPSHOT_FAILED = "ERR_WAIT_SNAPSHOT"
    DIALOG_MISSING = "ERR_DIALOG_MISSING"

    # Browser session errors
    SESSION_START_FAILED = "ERR_SESSION_START"
    SESSION_CLEANUP_FAILED = "ERR_SESSION_CLEANUP"
    NAVIGATION_FAILED = "ERR_NAVIGATE"
    NAVIGATION_RETRY = "ERR_NAVIGATE_RETRY"

    # Evidence errors
    SCREENSHOT_CAPTURE_FAILED = "ERR_SCREENSHOT"
    PAGE_SOURCE_CAPTURE_FAILED = "ERR_PAGE_SOURCE"

    # API errors
    API_REQUEST_FAILED = "ERR_API_REQUEST"

    # Configuration errors
    CONFIG_INVALID = "ERR_CONFIG_INVALID"
    CONFIG_MISSING = "ERR_CONFIG_MISSING"

    # General errors
    STEP_FAILED = "ERR_STEP_FAILED"
    UNEXPECTED_ERROR = "ERR_UNEXPECTED"


_logger: logging.Logger | None = None

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _get_logger() -> logging.Logger:
    """Get or create the logger instance."""
    global _logger
    if _logger is None:
        _logger = logging.getLogger("e2e_harness")
        _logger.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        _logger.addHandler(console_handler)

    return _logger


def _with_extra(message: str, extra: dict[str, Any] | None) -> str:
    if not extra:
        return message
    extra_str = ", ".join(f"{k}={v}" for k, v in extra.items())
    return f"{message} | {extra_str}"


def logError(
    error_id: str,
    message: str,
    exc_info: bool = False,
    extra: dict[str, Any] | None = None,
) -> None:
    """Log an error with a stable error ID.

    Args:
        error_id: The error ID constant from ErrorIds.
        message: Human-readable error message.
        exc_info: If True, include exception info in the log.
        extra: Optional additional context as key-value pairs.
    """
    logger = _get_logger()
    logger.error(_with_extra(f"[{error_id}] {message}", extra), exc_info=exc_info)


def logForDebugging(
    message: str,
    level: str = "debug",
    extra: dict[str, Any] | None = None,
) -> None:
    """Log a diagnostic message.

    Args:
        message: The message to log.
        level: Log level - "debug", "info", "warning", or "error".
        extra: Optional additional context as key-value pairs.
    """
    logger = _get_logger()
    log_level = getattr(logging, level.upper(), logging.DEBUG)
    logger.log(log_level, _with_extra(message, extra))


def logEvent(
    event_name: str,
    properties: dict[str, Any] | None = None,
) -> None:
    """Log a harness event (scenario started, navigation done, ...).

    Args:
        event_name: The name of the event (e.g., "scenario_started", "dialog_handled").
        properties: Optional event properties as key-value pairs.
    """
    logger = _get_logger()
    logger.info(_with_extra(f"[EVENT] {event_name}", properties))


def set_log_level(level: str | int) -> None:
    """Set the logging level for the harness console output.

    Args:
        level: Log level as string ("debug", "info", "warning", "error")
               or int (logging.DEBUG, logging.INFO, etc.).
    """
    logger = _get_logger()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)
    logger.handlers[0].setLevel(level)


def enable_file_logging(filepath: str) -> None:
    """Enable file logging to a specific file.

    Args:
        filepath: Path to the log file.
    """
    logger = _get_logger()
    file_handler = logging.FileHandler(filepath)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    logger.addHandler(file_handler)
