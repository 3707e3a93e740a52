"""Protocol definitions for pipeline interceptors and their per-handler configs.

Interceptors are attached to the whole pipeline. A handler can carry
InterceptorConfig objects that override an interceptor's behaviour for that
handler only. The dispatcher knows nothing about any interceptor's domain: it
asks each config whether it matches an interceptor (match) and hands the
matching config to that interceptor's callbacks.

Implementations satisfy these protocols structurally (no inheritance needed).

Example:

    class NoCacheInterceptor:
        def before(self, w, r, cfg=None):
            w.header.claim("Cache-Control")(["no-store"])
            return not_written()

        def commit(self, w, r, resp, cfg=None):
            return not_written()

        def on_error(self, w, r, resp, cfg=None):
            return not_written()
"""

from __future__ import annotations

__all__ = [
    "Interceptor",
    "InterceptorConfig",
]

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from coop_guard.safehttp.request import IncomingRequest
    from coop_guard.safehttp.response import ResponseWriter
    from coop_guard.safehttp.result import Result


@runtime_checkable
class Interceptor(Protocol):
    """Protocol for pipeline interceptors.

    Lifecycle:
    - before(): runs before the handler; may write the response to stop the pipeline
    - commit(): runs after the handler succeeded, before the response is sent
    - on_error(): runs instead of commit() when the handler failed

    Thread-safety:
    - Interceptors are shared across requests and must not mutate themselves
    """

    def before(
        self,
        w: "ResponseWriter",
        r: "IncomingRequest",
        cfg: "InterceptorConfig | None" = None,
    ) -> "Result":
        """Run before the handler.

        Args:
            w: Response under construction.
            r: Incoming request.
            cfg: Per-handler config matching this interceptor, if any.

        Returns:
            Result telling the pipeline whether the response was written.
        """
        ...

    def commit(
        self,
        w: "ResponseWriter",
        r: "IncomingRequest",
        resp: Any,
        cfg: "InterceptorConfig | None" = None,
    ) -> "Result":
        """Run after the handler produced a response."""
        ...

    def on_error(
        self,
        w: "ResponseWriter",
        r: "IncomingRequest",
        resp: Any,
        cfg: "InterceptorConfig | None" = None,
    ) -> "Result":
        """Run when the handler failed."""
        ...


@runtime_checkable
class InterceptorConfig(Protocol):
    """Protocol for per-handler interceptor configs."""

    def match(self, interceptor: Interceptor) -> bool:
        """Return True if this config applies to the given interceptor.

        The test is about the interceptor's domain, not its content: a
        config matches every interceptor of the kind it was written for.
        """
        ...
