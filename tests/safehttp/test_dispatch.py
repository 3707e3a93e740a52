"""Unit tests for the safehttp Dispatcher.

Uses the COOP interceptor alongside small fake interceptors of other domains
to check that configs reach only the interceptor they match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from coop_guard.constants import COOP_HEADER
from coop_guard.coop import Mode, Policy, create_default_interceptor, create_override
from coop_guard.exceptions import ConfigurationError, HeaderClaimError
from coop_guard.safehttp import (
    Dispatcher,
    IncomingRequest,
    ResponseWriter,
    Result,
    not_written,
    select_config,
)


@dataclass(frozen=True)
class CacheInterceptor:
    """Claims Cache-Control; can be configured per handler."""

    value: str = "no-store"

    def before(self, w: ResponseWriter, r: IncomingRequest, cfg: Any = None) -> Result:
        value = cfg.value if isinstance(cfg, CacheConfig) else self.value
        w.header.claim("Cache-Control")([value])
        return not_written()

    def commit(self, w: ResponseWriter, r: IncomingRequest, resp: Any, cfg: Any = None) -> Result:
        return not_written()

    def on_error(self, w: ResponseWriter, r: IncomingRequest, resp: Any, cfg: Any = None) -> Result:
        return not_written()


@dataclass(frozen=True)
class CacheConfig:
    value: str

    def match(self, interceptor: Any) -> bool:
        return isinstance(interceptor, CacheInterceptor)


class RecordingInterceptor:
    """Records calls; writes the response in the configured phase."""

    def __init__(self, name: str, calls: list[str], write_in: str | None = None) -> None:
        self.name = name
        self.calls = calls
        self.write_in = write_in

    def _run(self, phase: str, w: ResponseWriter) -> Result:
        self.calls.append(f"{self.name}.{phase}")
        if phase == self.write_in:
            return w.write(f"{self.name} wrote", status_code=418)
        return not_written()

    def before(self, w: ResponseWriter, r: IncomingRequest, cfg: Any = None) -> Result:
        return self._run("before", w)

    def commit(self, w: ResponseWriter, r: IncomingRequest, resp: Any, cfg: Any = None) -> Result:
        return self._run("commit", w)

    def on_error(self, w: ResponseWriter, r: IncomingRequest, resp: Any, cfg: Any = None) -> Result:
        return self._run("on_error", w)


@pytest.fixture
def request_() -> IncomingRequest:
    return IncomingRequest(method="GET", path="/popup")


class TestSelectConfig:
    """Tests for select_config()."""

    def test_no_configs_returns_none(self) -> None:
        assert select_config(create_default_interceptor(), ()) is None

    def test_picks_matching_domain(self) -> None:
        """Given configs of several domains, returns the one that matches."""
        override = create_override(Policy(mode=Mode.UNSAFE_NONE))
        cache = CacheConfig("no-cache")

        assert select_config(create_default_interceptor(), [cache, override]) is override
        assert select_config(CacheInterceptor(), [cache, override]) is cache

    def test_ambiguous_configs_raise(self) -> None:
        """Given two configs for the same domain, raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Multiple configs"):
            select_config(create_default_interceptor(), [create_override(), create_override()])

    def test_non_config_raises(self) -> None:
        """Given an object without match(), raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="not an InterceptorConfig"):
            select_config(create_default_interceptor(), [object()])  # type: ignore[list-item]


class TestDispatcher:
    """Tests for Dispatcher.bind() and the bound lifecycle."""

    def test_rejects_non_interceptor(self) -> None:
        with pytest.raises(ConfigurationError, match="not an Interceptor"):
            Dispatcher([object()])  # type: ignore[list-item]

    def test_override_reaches_only_its_interceptor(self, request_: IncomingRequest) -> None:
        """COOP override changes COOP; cache interceptor keeps its default."""
        dispatcher = Dispatcher([create_default_interceptor(), CacheInterceptor()])
        pipeline = dispatcher.bind([create_override(Policy(mode=Mode.UNSAFE_NONE))])
        w = ResponseWriter()

        result = pipeline.before(w, request_)

        assert result.written is False
        assert w.header.values(COOP_HEADER) == ["unsafe-none"]
        assert w.header.values("Cache-Control") == ["no-store"]

    def test_unbound_handler_uses_defaults(self, request_: IncomingRequest) -> None:
        """Given no configs, every interceptor uses its own settings."""
        pipeline = Dispatcher([create_default_interceptor(), CacheInterceptor()]).bind()
        w = ResponseWriter()

        pipeline.before(w, request_)

        assert w.header.values(COOP_HEADER) == ["same-origin"]
        assert pipeline.bindings[0][1] is None

    def test_unmatched_configs_are_ignored(self, request_: IncomingRequest) -> None:
        """A config whose interceptor is not in the pipeline has no effect."""
        pipeline = Dispatcher([create_default_interceptor()]).bind([CacheConfig("private")])
        w = ResponseWriter()

        pipeline.before(w, request_)

        assert w.header.values(COOP_HEADER) == ["same-origin"]
        assert "Cache-Control" not in w.header

    @pytest.mark.parametrize("phase", ["before", "commit", "on_error"])
    def test_stops_at_first_written(self, phase: str, request_: IncomingRequest) -> None:
        """The first interceptor that writes stops the rest."""
        calls: list[str] = []
        pipeline = Dispatcher(
            [
                RecordingInterceptor("a", calls),
                RecordingInterceptor("b", calls, write_in=phase),
                RecordingInterceptor("c", calls),
            ]
        ).bind()
        w = ResponseWriter()

        if phase == "before":
            result = pipeline.before(w, request_)
        elif phase == "commit":
            result = pipeline.commit(w, request_, object())
        else:
            result = pipeline.on_error(w, request_, None)

        assert result.written is True
        assert calls == [f"a.{phase}", f"b.{phase}"]
        assert w.body == b"b wrote"

    def test_runs_all_when_none_write(self, request_: IncomingRequest) -> None:
        calls: list[str] = []
        pipeline = Dispatcher([RecordingInterceptor("a", calls), RecordingInterceptor("b", calls)]).bind()

        result = pipeline.commit(ResponseWriter(), request_, object())

        assert result.written is False
        assert calls == ["a.commit", "b.commit"]

    def test_two_coop_interceptors_conflict_on_claim(self, request_: IncomingRequest) -> None:
        """Header ownership is exclusive even across interceptors of one domain."""
        pipeline = Dispatcher([create_default_interceptor(), create_default_interceptor("g")]).bind()

        with pytest.raises(HeaderClaimError):
            pipeline.before(ResponseWriter(), request_)
