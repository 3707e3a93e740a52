"""Log formatting utilities for JSONL output."""

from __future__ import annotations

__all__ = ["ISO8601Formatter"]

import json
import logging
from datetime import datetime, timezone


class ISO8601Formatter(logging.Formatter):
    """Formatter with ISO 8601 timestamps (UTC) for JSONL output.

    Format: YYYY-MM-DDTHH:MM:SS.sssZ
    Example: 2026-10-18T10:48:37.123Z
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a JSONL entry with a leading "time" field.

        Args:
            record: The log record to format.

        Returns:
            str: JSON-formatted log entry.
        """
        timestamp = (
            datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )

        # Structured logging passes dicts; anything else is wrapped
        if isinstance(record.msg, dict):
            log_data = record.msg
        else:
            log_data = {"message": record.getMessage()}

        log_entry = {"time": timestamp, "level": record.levelname, **log_data}
        return json.dumps(log_entry, default=str)
