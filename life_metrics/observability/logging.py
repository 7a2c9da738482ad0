"""
Log formatting for hosts that want to see aggregation diagnostics.

Aggregators only call ``logger.debug(..., extra={...})``; nothing is printed
until a host installs a handler with ``configure_logging``.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# Attributes every LogRecord carries; anything else arrived through ``extra=``
_STANDARD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _STANDARD_FIELDS}


class JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, UTC)
        payload: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        payload.update(_extras(record))
        return json.dumps(payload, default=str)


class HumanFormatter(logging.Formatter):
    """``<time> [LEVEL] logger: message key=value ...``"""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = f"{created} [{record.levelname}] {record.name}: {record.getMessage()}"
        pairs = " ".join(f"{k}={v}" for k, v in _extras(record).items())
        return f"{line} {pairs}" if pairs else line


def configure_logging(level: str = "INFO", json_format: bool | None = None) -> None:
    """
    Replace the root handlers with one stderr handler.

    Unknown level names fall back to INFO. ``json_format=None`` picks JSON
    when stderr is not a terminal.
    """
    if json_format is None:
        json_format = not sys.stderr.isatty()

    root = logging.getLogger()
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_format else HumanFormatter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def silent_logger(name: str = "life_metrics.silent") -> logging.Logger:
    """A disabled, non-propagating logger."""
    log = logging.getLogger(name)
    log.disabled = True
    log.propagate = False
    return log
