"""Structured logging configuration.

Log records are emitted as JSON lines on stderr. stdout belongs to the
commands: prompts, "Found issue ..." and "Pushed ..." lines go there,
and only there.

Context travels as keyword data rather than in the message text::

    logger.info("Branch created", extra={"branch": name, "base": base})

renders as ``{"message": "Branch created", "extra": {"branch": ..., "base": ...}}``.
Keys must not collide with ``LogRecord`` attributes (``name``, ``msg``,
``args``...); the logging module rejects those.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import IO, Any

# Attributes every LogRecord carries; anything else was passed through `extra=`.
_STANDARD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Render a log record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str, *, stream: IO[str] | None = None) -> None:
    """Install a single JSON handler on the root logger.

    Replaces any handlers already there; repeated calls never duplicate lines.
    ``stream`` defaults to ``sys.stderr`` as it is at call time.
    """

    root = logging.getLogger()

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.setFormatter(JsonFormatter())

    root.addHandler(handler)
    root.setLevel(level.upper())

    # urllib3 logs every connection at DEBUG; only show it when it matters.
    logging.getLogger("urllib3").setLevel(max(root.level, logging.WARNING))
