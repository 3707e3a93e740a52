"""Incoming request descriptor passed to interceptors."""

from __future__ import annotations

__all__ = ["IncomingRequest"]

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from starlette.requests import Request


@dataclass(frozen=True)
class IncomingRequest:
    """Read-only view of the request being processed.

    Attributes:
        method: HTTP method (e.g., "GET").
        path: URL path.
        headers: Request headers with lowercased names.
    """

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_starlette(cls, request: "Request") -> "IncomingRequest":
        """Build a descriptor from a Starlette request.

        Repeated request headers are collapsed to their first value.
        """
        headers: dict[str, str] = {}
        for name, value in request.headers.items():
            headers.setdefault(name.lower(), value)
        return cls(
            method=request.method,
            path=request.url.path,
            headers=MappingProxyType(headers),
        )
