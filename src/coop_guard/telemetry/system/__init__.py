"""System operational logging.

Provides the system logger for operational events (interceptor
configuration, short-circuited responses, handler failures).
"""

from coop_guard.telemetry.system.system_logger import (
    ConsoleFormatter,
    configure_system_logger_file,
    get_system_logger,
    set_system_log_level,
)

__all__ = [
    "ConsoleFormatter",
    "configure_system_logger_file",
    "get_system_logger",
    "set_system_log_level",
]
