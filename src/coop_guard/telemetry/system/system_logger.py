"""System logger for operational events.

This module provides a singleton system logger for operational events
such as interceptor configuration and pipeline short-circuits.

Logging strategy:
- Console (stderr): INFO and above by default (DEBUG when configured)
- File (system.jsonl): Only issues (WARNING, ERROR, CRITICAL)

The file handler is configured separately via configure_system_logger_file()
once the log_dir from config is available.
"""

from __future__ import annotations

__all__ = [
    "ConsoleFormatter",
    "configure_system_logger_file",
    "get_system_logger",
    "reset_system_logger",
    "set_system_log_level",
]

import logging
import sys
from pathlib import Path

from coop_guard.constants import APP_NAME
from coop_guard.utils.logging.iso_formatter import ISO8601Formatter


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output.

    Extracts 'message' or 'event' field from dict messages for cleaner stderr output.
    """

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
            return f"{record.levelname}: {msg}"
        return f"{record.levelname}: {record.getMessage()}"


# Module-level singleton logger
_system_logger: logging.Logger | None = None
_file_handler_configured: bool = False


def get_system_logger() -> logging.Logger:
    """Get the singleton system logger instance.

    Creates the logger on first call with stderr handler only.
    File handler is added later via configure_system_logger_file().

    Returns:
        logging.Logger: Configured system logger instance.

    Example:
        >>> from coop_guard.telemetry.system.system_logger import get_system_logger
        >>> logger = get_system_logger()
        >>> logger.info({"event": "coop_interceptor_configured", "message": "..."})
    """
    global _system_logger

    if _system_logger is not None:
        return _system_logger

    _system_logger = logging.getLogger(f"{APP_NAME}.system")
    _system_logger.setLevel(logging.INFO)
    _system_logger.propagate = False  # Don't propagate to root logger

    # Close and remove any existing handlers to avoid duplicates
    for handler in _system_logger.handlers:
        handler.close()
    _system_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.DEBUG)  # Logger level decides what reaches stderr
    stderr_handler.setFormatter(ConsoleFormatter())
    _system_logger.addHandler(stderr_handler)

    return _system_logger


def set_system_log_level(level: str | int) -> None:
    """Set the system logger level (e.g., "DEBUG", "INFO", "WARNING").

    Args:
        level: Level name or numeric logging level.
    """
    get_system_logger().setLevel(level)


def configure_system_logger_file(log_path: Path) -> None:
    """Add a JSONL file handler to the system logger.

    Should be called once after config is loaded. The file handler logs
    WARNING, ERROR, CRITICAL only. Subsequent calls are ignored.

    Args:
        log_path: Path to the system log file.

    Raises:
        OSError: If the log directory cannot be created or the file opened.
    """
    global _file_handler_configured

    if _file_handler_configured:
        return

    logger = get_system_logger()

    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.WARNING)
    file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(file_handler)

    _file_handler_configured = True


def reset_system_logger() -> None:
    """Close all handlers and drop the singleton.

    Used by tests to get a fresh logger between cases.
    """
    global _system_logger, _file_handler_configured

    if _system_logger is not None:
        for handler in _system_logger.handlers:
            handler.close()
        _system_logger.handlers.clear()
    _system_logger = None
    _file_handler_configured = False
