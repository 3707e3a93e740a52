"""Cross-Origin-Opener-Policy models.

A Policy describes one COOP directive: the isolation mode, an optional
Reporting API group, and whether the directive is enforced or report-only.

Wire format (one directive per Policy):
    <mode>
    <mode>; report-to "<reporting_group>"

The reporting group is embedded verbatim between double quotes. It is not
escaped: callers must supply a token that is safe inside a quoted string
(no '"' or control characters).

Reference: https://html.spec.whatwg.org/#cross-origin-opener-policies
"""

from __future__ import annotations

__all__ = [
    "Mode",
    "Policy",
]

from enum import Enum

from pydantic import BaseModel, ConfigDict

from coop_guard.constants import REPORT_TO_DIRECTIVE


class Mode(str, Enum):
    """COOP isolation mode.

    Inherits from str for easy serialization and comparison.

    Attributes:
        SAME_ORIGIN: Strictest mode. Windows keep references to windows they
            open only if those are same-origin.
        SAME_ORIGIN_ALLOW_POPUPS: Windows on this origin keep references to
            popups they open, but not the other way round.
        UNSAFE_NONE: No isolation. This is the browser default.
    """

    SAME_ORIGIN = "same-origin"
    SAME_ORIGIN_ALLOW_POPUPS = "same-origin-allow-popups"
    UNSAFE_NONE = "unsafe-none"


class Policy(BaseModel):
    """A single Cross-Origin-Opener-Policy directive.

    Attributes:
        mode: Isolation mode.
        reporting_group: Reporting API group violations are sent to.
            Empty means no report-to parameter. The group must be defined
            with the Reporting API elsewhere; it is not validated here.
        report_only: Emit on the report-only header instead of enforcing.
    """

    mode: Mode
    reporting_group: str = ""
    report_only: bool = False

    model_config = ConfigDict(frozen=True)

    def serialize(self) -> str:
        """Serialize the policy to a header directive.

        Returns:
            The mode token, followed by a report-to parameter if a
            reporting group is set.
        """
        if not self.reporting_group:
            return self.mode.value
        return f'{self.mode.value}; {REPORT_TO_DIRECTIVE} "{self.reporting_group}"'

    def __str__(self) -> str:
        return self.serialize()
