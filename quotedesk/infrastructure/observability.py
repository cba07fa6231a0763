"""Structured Logging — one JSON object per line, carrying record context.

Invariants:
    - Every line has timestamp (from the log record), level, logger and message
    - Record extras (entity_kind, record_id, error_code, context_label, ...)
      appear only when set
    - setup_logging is idempotent: a repeated lifespan replaces its own handler
      instead of stacking a second one

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency
    - "text" format for local development, JSON everywhere else
"""

import json
import logging
from datetime import datetime, timezone

RECORD_EXTRAS = (
    "entity_kind", "record_id", "error_code", "context_label",
    "attempt", "severity", "path", "retryable", "status_code",
)

_HANDLER_NAME = "quotedesk"


class JSONFormatter(logging.Formatter):
    """Render a LogRecord plus its record extras as a JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            (key, record.__dict__[key]) for key in RECORD_EXTRAS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the QuoteDesk handler on the root logger."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")
        if fmt == "text" else JSONFormatter(),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
