"""Logging setup shared by the CLI and host services.

``configure_logging`` installs either a human-readable ``basicConfig``
format or, with ``structured_logging`` enabled, a single-line JSON handler
suitable for log aggregators::

    {"timestamp": "...", "level": "INFO", "logger": "preview_engine.versioning.ledger",
     "message": "Version recorded: ...", "project_id": "p1"}
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from preview_engine.config import Settings

_TEXT_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"

# Optional ``extra=`` keys copied into the JSON payload.
_CONTEXT_FIELDS = ("project_id", "actor_id", "mode")


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in _CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc_info"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(settings: Settings, *, level: int | None = None) -> None:
    """Install the root handler described by *settings*."""
    if level is None:
        level = logging.DEBUG if settings.debug else logging.INFO

    root_logger = logging.getLogger()
    if settings.structured_logging:
        root_logger.handlers.clear()
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        root_logger.addHandler(handler)
        root_logger.setLevel(level)
        return

    logging.basicConfig(level=level, format=_TEXT_FORMAT)
