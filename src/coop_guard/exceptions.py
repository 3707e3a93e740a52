"""Custom exceptions for coop-guard.

This module contains all custom exceptions used throughout the package.
The COOP interceptor itself never raises; these cover the pipeline
collaborators and configuration loading.

Pipeline Errors (programming errors, propagate to the caller):
    - HeaderClaimError: A response header was claimed twice, or a claimed
      header was written directly
    - ResponseAlreadyWrittenError: A response was written twice

Configuration Failures:
    - ConfigurationError: Config is invalid or handler configs are ambiguous

Usage:
    from coop_guard.exceptions import HeaderClaimError, ConfigurationError
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "HeaderClaimError",
    "ResponseAlreadyWrittenError",
]


# =============================================================================
# Pipeline Errors
# =============================================================================


class HeaderClaimError(Exception):
    """Raised when header ownership is violated.

    A claimed header belongs to exactly one component for the lifetime of the
    response. Raised when:
    - A second component claims an already-claimed header
    - A component sets, adds or deletes a claimed header directly

    Attributes:
        header_name: Name of the header whose ownership was violated.
    """

    def __init__(self, header_name: str, message: str | None = None) -> None:
        self.header_name = header_name
        super().__init__(message or f"Header {header_name!r} is already claimed")


class ResponseAlreadyWrittenError(Exception):
    """Raised when a ResponseWriter is written more than once."""


# =============================================================================
# Configuration Failures
# =============================================================================


class ConfigurationError(Exception):
    """Configuration is invalid or incomplete.

    Raised when:
    - More than one per-handler config matches the same interceptor
    - A config object does not implement the InterceptorConfig protocol

    Exit code 16 indicates configuration failure.

    Attributes:
        exit_code: Process exit code for startup failures.
        failure_type: Category string for logging.
    """

    exit_code: int = 16
    failure_type: str = "configuration_failure"
