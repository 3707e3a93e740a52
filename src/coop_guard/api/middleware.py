"""ASGI adapter running safehttp interceptors on a Starlette/FastAPI app.

Per-handler configs are attached to endpoints with the interceptor_configs
decorator. The middleware resolves the matched route before the handler runs,
binds its configs to the pipeline interceptors and runs the lifecycle:

    1. before()   - interceptors claim/set headers, may write the response
    2. handler    - the route endpoint (via call_next)
    3. commit()   - on success; on_error() if the handler raised, after which
                    a 500 (or the response on_error wrote) is returned
    4. headers    - writer headers are copied onto the handler's response

Claimed headers are owned by their interceptor: any value the handler set for
them is replaced, and a claimed header with no values is removed.

Usage:
    app = FastAPI()
    app.add_middleware(InterceptorMiddleware, interceptors=[create_default_interceptor()])
"""

from __future__ import annotations

__all__ = [
    "INTERCEPTOR_CONFIGS_ATTR",
    "InterceptorMiddleware",
    "interceptor_configs",
    "resolve_handler_configs",
]

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Match
from starlette.types import ASGIApp

from coop_guard.safehttp.dispatch import Dispatcher
from coop_guard.safehttp.header import Header
from coop_guard.safehttp.interceptor import Interceptor, InterceptorConfig
from coop_guard.safehttp.request import IncomingRequest
from coop_guard.safehttp.response import ResponseWriter
from coop_guard.telemetry.system.system_logger import get_system_logger

logger = get_system_logger()

# Endpoint attribute holding per-handler configs
INTERCEPTOR_CONFIGS_ATTR = "__interceptor_configs__"

F = TypeVar("F", bound=Callable[..., Any])


def interceptor_configs(*configs: InterceptorConfig) -> Callable[[F], F]:
    """Attach per-handler interceptor configs to an endpoint.

    Apply below the route decorator so the router registers the tagged
    function:

        @app.get("/popup")
        @interceptor_configs(create_override(Policy(mode=Mode.UNSAFE_NONE)))
        async def popup(): ...

    Args:
        *configs: Configs for this handler (at most one per interceptor).

    Returns:
        Decorator returning the endpoint unchanged apart from the attribute.
    """

    def decorator(endpoint: F) -> F:
        existing = getattr(endpoint, INTERCEPTOR_CONFIGS_ATTR, ())
        setattr(endpoint, INTERCEPTOR_CONFIGS_ATTR, tuple(existing) + configs)
        return endpoint

    return decorator


def resolve_handler_configs(request: Request) -> tuple[InterceptorConfig, ...]:
    """Find the configs attached to the endpoint that will handle a request.

    Routes are matched the same way the router will match them. Mounted
    sub-applications and unmatched paths have no configs.

    Args:
        request: Incoming request.

    Returns:
        Configs attached to the matched endpoint (possibly empty).
    """
    app = request.scope.get("app")
    router = getattr(app, "router", None)
    routes = getattr(router, "routes", ())
    for route in routes:
        match, child_scope = route.matches(request.scope)
        if match is not Match.FULL:
            continue
        endpoint = child_scope.get("endpoint") or getattr(route, "endpoint", None)
        return tuple(getattr(endpoint, INTERCEPTOR_CONFIGS_ATTR, ()))
    return ()


def _apply_headers(header: Header, response: Response) -> None:
    """Copy writer headers onto a Starlette response."""
    for name in header.claimed():
        del response.headers[name]
    for name, values in header.items():
        del response.headers[name]
        for value in values:
            response.headers.append(name, value)


def _written_response(writer: ResponseWriter) -> Response:
    return Response(content=writer.body, status_code=writer.status_code or 200)


class InterceptorMiddleware(BaseHTTPMiddleware):
    """Middleware running safehttp interceptors around every request."""

    def __init__(self, app: ASGIApp, interceptors: Iterable[Interceptor] = ()) -> None:
        """Initialize middleware.

        Args:
            app: ASGI application.
            interceptors: Pipeline-wide interceptors, run in order.

        Raises:
            ConfigurationError: If an interceptor does not implement the protocol.
        """
        super().__init__(app)
        self._dispatcher = Dispatcher(interceptors)

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Run the interceptor lifecycle around the handler.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Interceptor-written response, the handler's response, or a 500
            if the handler raised. Interceptor headers are applied to each.
        """
        pipeline = self._dispatcher.bind(resolve_handler_configs(request))
        incoming = IncomingRequest.from_starlette(request)
        writer = ResponseWriter()

        if pipeline.before(writer, incoming).written:
            response = _written_response(writer)
            _apply_headers(writer.header, response)
            return response

        try:
            response = await call_next(request)
        except Exception as e:
            logger.warning(
                {
                    "event": "handler_failed",
                    "message": f"Handler failed for {request.method} {request.url.path}: {e}",
                    "component": "interceptor_middleware",
                    "details": {"path": str(request.url.path), "error_type": type(e).__name__},
                }
            )
            if pipeline.on_error(writer, incoming, None).written:
                response = _written_response(writer)
            else:
                response = PlainTextResponse("Internal Server Error", status_code=500)
            _apply_headers(writer.header, response)
            return response

        if pipeline.commit(writer, incoming, response).written:
            response = _written_response(writer)

        _apply_headers(writer.header, response)
        return response
