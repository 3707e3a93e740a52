"""Result of an interceptor lifecycle callback.

Interceptors report whether they wrote the response themselves. A written
result stops the remaining interceptors and the handler from running.
"""

from __future__ import annotations

__all__ = [
    "Result",
    "not_written",
    "written",
]

from dataclasses import dataclass


@dataclass(frozen=True)
class Result:
    """Outcome of a lifecycle callback.

    Attributes:
        written: True if the callback wrote the response body.
    """

    written: bool = False


_NOT_WRITTEN = Result(written=False)
_WRITTEN = Result(written=True)


def not_written() -> Result:
    """Result signalling that no response body was written."""
    return _NOT_WRITTEN


def written() -> Result:
    """Result signalling that the response was written."""
    return _WRITTEN
