"""COOP interceptor and per-handler override.

The Interceptor is built once from a list of Policies and shared read-only
across requests. Its before() phase claims both COOP headers on the response
and sets them to the precomputed directive lists.

A handler can carry an Overrider (built with create_override) to replace the
pipeline-wide policies for that handler only. The dispatcher pairs the
Overrider with this Interceptor through Overrider.match().

Example:
    interceptor = create_default_interceptor("coop-reports")

    @app.get("/oauth/popup")
    @interceptor_configs(create_override(Policy(mode=Mode.SAME_ORIGIN_ALLOW_POPUPS)))
    async def oauth_popup(): ...
"""

from __future__ import annotations

__all__ = [
    "Interceptor",
    "Overrider",
    "create_default_interceptor",
    "create_interceptor",
    "create_override",
]

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from coop_guard.constants import COOP_HEADER, COOP_REPORT_ONLY_HEADER
from coop_guard.coop.policy import Mode, Policy
from coop_guard.safehttp.request import IncomingRequest
from coop_guard.safehttp.response import ResponseWriter
from coop_guard.safehttp.result import Result, not_written


def _partition(policies: Iterable[Policy]) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Serialize policies into (enforced, report_only), keeping input order."""
    enforced: list[str] = []
    report_only: list[str] = []
    for policy in policies:
        if policy.report_only:
            report_only.append(policy.serialize())
        else:
            enforced.append(policy.serialize())
    return tuple(enforced), tuple(report_only)


@dataclass(frozen=True)
class Interceptor:
    """Interceptor that sets the COOP enforcing and report-only headers.

    Attributes:
        enforced: Directives for Cross-Origin-Opener-Policy.
        report_only: Directives for Cross-Origin-Opener-Policy-Report-Only.
    """

    enforced: tuple[str, ...] = ()
    report_only: tuple[str, ...] = ()

    def before(
        self,
        w: ResponseWriter,
        r: IncomingRequest,
        cfg: Any = None,
    ) -> Result:
        """Claim and set the COOP headers.

        If cfg is an Overrider, its policies are applied instead of this
        interceptor's. An empty directive list leaves that header out.

        Args:
            w: Response under construction.
            r: Incoming request.
            cfg: Per-handler config selected by the dispatcher, if any.

        Returns:
            not_written(); this phase only manipulates headers.
        """
        if isinstance(cfg, Overrider):
            # Run the override's before phase; no further config lookup
            return cfg.as_interceptor().before(w, r, None)

        w.header.claim(COOP_HEADER)(self.enforced)
        w.header.claim(COOP_REPORT_ONLY_HEADER)(self.report_only)
        return not_written()

    def commit(
        self,
        w: ResponseWriter,
        r: IncomingRequest,
        resp: Any,
        cfg: Any = None,
    ) -> Result:
        """No-op."""
        return not_written()

    def on_error(
        self,
        w: ResponseWriter,
        r: IncomingRequest,
        resp: Any,
        cfg: Any = None,
    ) -> Result:
        """No-op."""
        return not_written()


@dataclass(frozen=True)
class Overrider:
    """Per-handler config replacing the COOP policies for one handler.

    Attributes:
        enforced: Directives for Cross-Origin-Opener-Policy.
        report_only: Directives for Cross-Origin-Opener-Policy-Report-Only.
    """

    enforced: tuple[str, ...] = ()
    report_only: tuple[str, ...] = ()

    def match(self, interceptor: Any) -> bool:
        """Return True for any COOP Interceptor, regardless of its policies."""
        return isinstance(interceptor, Interceptor)

    def as_interceptor(self) -> Interceptor:
        """Interceptor carrying this override's directives."""
        return Interceptor(enforced=self.enforced, report_only=self.report_only)


def create_interceptor(*policies: Policy) -> Interceptor:
    """Create an Interceptor applying the given policies.

    Policies are not deduplicated or validated; every policy produces one
    directive on its header, in the order given.

    Args:
        *policies: Policies to apply. None gives an interceptor that emits
            no COOP headers.

    Returns:
        Interceptor with precomputed directive lists.
    """
    enforced, report_only = _partition(policies)
    return Interceptor(enforced=enforced, report_only=report_only)


def create_default_interceptor(reporting_group: str = "") -> Interceptor:
    """Create an enforcing same-origin Interceptor.

    Args:
        reporting_group: Optional Reporting API group (empty for none).

    Returns:
        Interceptor with a single same-origin directive.
    """
    return create_interceptor(Policy(mode=Mode.SAME_ORIGIN, reporting_group=reporting_group))


def create_override(*policies: Policy) -> Overrider:
    """Create an Overrider applying the given policies to one handler.

    Args:
        *policies: Policies to apply instead of the interceptor's.

    Returns:
        Overrider with precomputed directive lists.
    """
    enforced, report_only = _partition(policies)
    return Overrider(enforced=enforced, report_only=report_only)
