"""Unit tests for COOP Mode and Policy serialization."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from coop_guard.coop import Mode, Policy


class TestMode:
    """Tests for Mode enum."""

    def test_tokens(self) -> None:
        """Modes serialize to their lowercase-with-hyphens tokens."""
        assert Mode.SAME_ORIGIN.value == "same-origin"
        assert Mode.SAME_ORIGIN_ALLOW_POPUPS.value == "same-origin-allow-popups"
        assert Mode.UNSAFE_NONE.value == "unsafe-none"

    def test_closed_set(self) -> None:
        """Exactly three modes exist."""
        assert len(Mode) == 3

    def test_mode_compares_as_string(self) -> None:
        """Mode inherits from str."""
        assert Mode.SAME_ORIGIN == "same-origin"


class TestPolicySerialize:
    """Tests for Policy.serialize()."""

    def test_without_reporting_group_returns_mode_token(self) -> None:
        """Given empty reporting group, returns the mode token verbatim."""
        policy = Policy(mode=Mode.SAME_ORIGIN, reporting_group="", report_only=False)

        assert policy.serialize() == "same-origin"

    def test_with_reporting_group_appends_report_to(self) -> None:
        """Given a reporting group, appends a quoted report-to parameter."""
        policy = Policy(mode=Mode.SAME_ORIGIN_ALLOW_POPUPS, reporting_group="grp1", report_only=True)

        assert policy.serialize() == 'same-origin-allow-popups; report-to "grp1"'

    def test_report_only_does_not_change_directive(self) -> None:
        """The report-only flag selects the header, not the directive text."""
        enforced = Policy(mode=Mode.UNSAFE_NONE, reporting_group="g")
        report_only = Policy(mode=Mode.UNSAFE_NONE, reporting_group="g", report_only=True)

        assert enforced.serialize() == report_only.serialize()

    def test_reporting_group_is_not_escaped(self) -> None:
        """Reporting group is embedded verbatim (caller contract)."""
        policy = Policy(mode=Mode.SAME_ORIGIN, reporting_group='a"b')

        assert policy.serialize() == 'same-origin; report-to "a"b"'

    def test_str_matches_serialize(self) -> None:
        """str(policy) is the serialized directive."""
        policy = Policy(mode=Mode.SAME_ORIGIN, reporting_group="g")

        assert str(policy) == policy.serialize()


class TestPolicyModel:
    """Tests for Policy model behavior."""

    def test_defaults(self) -> None:
        """Reporting group defaults to empty, report_only to False."""
        policy = Policy(mode=Mode.SAME_ORIGIN)

        assert policy.reporting_group == ""
        assert policy.report_only is False

    def test_is_frozen(self) -> None:
        """Policies cannot be mutated after construction."""
        policy = Policy(mode=Mode.SAME_ORIGIN)

        with pytest.raises(ValidationError):
            policy.mode = Mode.UNSAFE_NONE  # type: ignore[misc]

    def test_accepts_mode_token(self) -> None:
        """Mode can be given as its wire token (e.g. from JSON config)."""
        policy = Policy.model_validate({"mode": "unsafe-none"})

        assert policy.mode is Mode.UNSAFE_NONE

    def test_rejects_unknown_mode(self) -> None:
        """Unknown mode tokens are rejected."""
        with pytest.raises(ValidationError):
            Policy.model_validate({"mode": "same-site"})

    def test_equal_by_value(self) -> None:
        """Policies have no identity beyond their fields."""
        assert Policy(mode=Mode.SAME_ORIGIN, reporting_group="g") == Policy(
            mode=Mode.SAME_ORIGIN, reporting_group="g"
        )
