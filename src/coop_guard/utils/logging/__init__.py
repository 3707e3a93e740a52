"""Logging utilities and helpers.

- iso_formatter: ISO 8601 timestamp formatting for JSONL logs

Import directly from submodules:
    from coop_guard.utils.logging.iso_formatter import ISO8601Formatter
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)
