"""Application configuration for coop-guard.

Defines configuration models for logging and the pipeline-wide COOP policies.
Config is a JSON file:

    {
      "logging": {"log_dir": "/var/log", "log_level": "INFO"},
      "coop": {
        "policies": [
          {"mode": "same-origin", "reporting_group": "coop"},
          {"mode": "same-origin", "report_only": true}
        ]
      }
    }

Example usage:
    config = AppConfig.load_from_files(config_path)
    configure_logging(config)
    interceptor = config.coop.build_interceptor()
"""

from __future__ import annotations

__all__ = [
    "AppConfig",
    "CoopConfig",
    "LoggingConfig",
    "configure_logging",
    "get_system_log_path",
]

import json
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from coop_guard.constants import APP_NAME, SYSTEM_LOG_FILENAME
from coop_guard.coop import Interceptor, Mode, Overrider, Policy, create_interceptor, create_override
from coop_guard.telemetry.system.system_logger import (
    configure_system_logger_file,
    get_system_logger,
    set_system_log_level,
)
from coop_guard.utils.file_helpers import load_validated_json, require_file_exists


def _default_policies() -> list[Policy]:
    return [Policy(mode=Mode.SAME_ORIGIN)]


class LoggingConfig(BaseModel):
    """Logging configuration settings.

    Attributes:
        log_dir: Base directory for logs. System issues go to
            <log_dir>/coop-guard/system.jsonl. None logs to stderr only.
        log_level: System logger level.
    """

    log_dir: Annotated[str, Field(min_length=1)] | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING"] = "INFO"


class CoopConfig(BaseModel):
    """Pipeline-wide Cross-Origin-Opener-Policy settings.

    Attributes:
        policies: Policies applied to every handler without an override.
            Defaults to a single enforcing same-origin policy. An empty list
            disables both COOP headers.
    """

    policies: list[Policy] = Field(default_factory=_default_policies)

    def build_interceptor(self) -> Interceptor:
        """Build the pipeline-wide Interceptor.

        Returns:
            Interceptor built from the configured policies.
        """
        interceptor = create_interceptor(*self.policies)
        get_system_logger().info(
            {
                "event": "coop_interceptor_configured",
                "message": (
                    f"COOP configured: {len(interceptor.enforced)} enforced, "
                    f"{len(interceptor.report_only)} report-only"
                ),
                "component": "config",
                "details": {
                    "enforced": list(interceptor.enforced),
                    "report_only": list(interceptor.report_only),
                },
            }
        )
        return interceptor

    def build_override(self) -> Overrider:
        """Build an Overrider from these policies, for attaching to a handler."""
        return create_override(*self.policies)


class AppConfig(BaseModel):
    """Top-level coop-guard configuration.

    Attributes:
        logging: Logging settings.
        coop: Pipeline-wide COOP policies.
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    coop: CoopConfig = Field(default_factory=CoopConfig)

    @classmethod
    def load_from_files(cls, config_path: Path) -> "AppConfig":
        """Load configuration from JSON file.

        Args:
            config_path: Path to the config JSON file.

        Returns:
            AppConfig instance with loaded configuration.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ValueError: If config file is invalid.
        """
        require_file_exists(config_path, file_type="configuration")
        return load_validated_json(config_path, cls, file_type="config")

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to JSON file.

        Args:
            config_path: Path where config file should be saved.
        """
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)
            f.write("\n")


def get_system_log_path(config: AppConfig) -> Path | None:
    """Get the system log file path, or None when logging to stderr only."""
    if config.logging.log_dir is None:
        return None
    return Path(config.logging.log_dir).expanduser() / APP_NAME / SYSTEM_LOG_FILENAME


def configure_logging(config: AppConfig) -> None:
    """Apply logging settings to the system logger.

    Args:
        config: Loaded configuration.

    Raises:
        OSError: If the log directory cannot be created.
    """
    set_system_log_level(config.logging.log_level)
    log_path = get_system_log_path(config)
    if log_path is not None:
        configure_system_logger_file(log_path)
