"""Interceptor dispatch.

The Dispatcher owns the pipeline-wide interceptors. For each handler it binds
the handler's configs to interceptors through InterceptorConfig.match, then
runs the lifecycle callbacks in order.

Binding rules:
- Each interceptor gets at most one config (the one whose match() accepts it)
- Two configs matching the same interceptor is a configuration error
- Configs that match no interceptor are ignored
"""

from __future__ import annotations

__all__ = [
    "BoundPipeline",
    "Dispatcher",
    "select_config",
]

from collections.abc import Iterable, Sequence
from typing import Any

from coop_guard.exceptions import ConfigurationError
from coop_guard.safehttp.interceptor import Interceptor, InterceptorConfig
from coop_guard.safehttp.request import IncomingRequest
from coop_guard.safehttp.response import ResponseWriter
from coop_guard.safehttp.result import Result, not_written
from coop_guard.telemetry.system.system_logger import get_system_logger

_system_logger = get_system_logger()


def select_config(
    interceptor: Interceptor,
    configs: Iterable[InterceptorConfig],
) -> InterceptorConfig | None:
    """Pick the config that applies to an interceptor.

    Args:
        interceptor: Interceptor to find a config for.
        configs: Configs attached to a handler.

    Returns:
        The single matching config, or None if none matches.

    Raises:
        ConfigurationError: If a config does not implement InterceptorConfig,
            or more than one config matches the interceptor.
    """
    selected: InterceptorConfig | None = None
    for cfg in configs:
        if not isinstance(cfg, InterceptorConfig):
            raise ConfigurationError(f"{type(cfg).__name__} is not an InterceptorConfig (missing match())")
        if not cfg.match(interceptor):
            continue
        if selected is not None:
            raise ConfigurationError(
                f"Multiple configs match interceptor {type(interceptor).__name__}: "
                f"{type(selected).__name__} and {type(cfg).__name__}"
            )
        selected = cfg
    return selected


class BoundPipeline:
    """Interceptors paired with the configs of one handler."""

    def __init__(self, bindings: Sequence[tuple[Interceptor, InterceptorConfig | None]]) -> None:
        self._bindings = tuple(bindings)

    @property
    def bindings(self) -> tuple[tuple[Interceptor, InterceptorConfig | None], ...]:
        return self._bindings

    def before(self, w: ResponseWriter, r: IncomingRequest) -> Result:
        """Run before() on every interceptor until one writes the response."""
        for interceptor, cfg in self._bindings:
            result = interceptor.before(w, r, cfg)
            if result.written:
                _system_logger.info(
                    {
                        "event": "pipeline_short_circuited",
                        "message": f"{type(interceptor).__name__} wrote the response for {r.method} {r.path}",
                        "component": "dispatch",
                        "details": {"interceptor": type(interceptor).__name__, "path": r.path},
                    }
                )
                return result
        return not_written()

    def commit(self, w: ResponseWriter, r: IncomingRequest, resp: Any) -> Result:
        """Run commit() on every interceptor until one writes the response."""
        for interceptor, cfg in self._bindings:
            result = interceptor.commit(w, r, resp, cfg)
            if result.written:
                return result
        return not_written()

    def on_error(self, w: ResponseWriter, r: IncomingRequest, resp: Any) -> Result:
        """Run on_error() on every interceptor until one writes the response."""
        for interceptor, cfg in self._bindings:
            result = interceptor.on_error(w, r, resp, cfg)
            if result.written:
                return result
        return not_written()


class Dispatcher:
    """Pipeline-wide interceptor chain.

    Built once at startup and shared read-only across requests.
    """

    def __init__(self, interceptors: Iterable[Interceptor]) -> None:
        self._interceptors = tuple(interceptors)
        for interceptor in self._interceptors:
            if not isinstance(interceptor, Interceptor):
                raise ConfigurationError(
                    f"{type(interceptor).__name__} is not an Interceptor (needs before/commit/on_error)"
                )

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return self._interceptors

    def bind(self, configs: Iterable[InterceptorConfig] = ()) -> BoundPipeline:
        """Bind a handler's configs to the interceptors.

        Args:
            configs: Configs attached to the handler (may be empty).

        Returns:
            BoundPipeline ready to run the lifecycle.

        Raises:
            ConfigurationError: If configs are ambiguous or malformed.
        """
        configs = tuple(configs)
        bindings: list[tuple[Interceptor, InterceptorConfig | None]] = []
        for interceptor in self._interceptors:
            cfg = select_config(interceptor, configs)
            if cfg is not None:
                _system_logger.debug(
                    {
                        "event": "interceptor_config_selected",
                        "message": f"{type(cfg).__name__} overrides {type(interceptor).__name__}",
                        "component": "dispatch",
                    }
                )
            bindings.append((interceptor, cfg))
        return BoundPipeline(bindings)
