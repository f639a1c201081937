"""JSON log formatter for mkvprops.

Tool runs log the executable under ``command`` and the edited container under
``file_path``. Those two are lifted to top-level ``tool`` and ``file`` keys
so log queries can filter on them; any other ``extra=`` values go under
``context``.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries, plus the ones Formatter adds
_RECORD_ATTRS: frozenset[str] = frozenset(logging.makeLogRecord({}).__dict__) | {
    "message",
    "asctime",
}

# extra= keys promoted to the top level, with their output names
PROMOTED_FIELDS: dict[str, str] = {
    "command": "tool",
    "file_path": "file",
}


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        record_time = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": record_time.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context: dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key.startswith("_"):
                continue
            if key in PROMOTED_FIELDS:
                entry[PROMOTED_FIELDS[key]] = value
            else:
                context[key] = value
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
