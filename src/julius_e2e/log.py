"""Logging setup for the julius-e2e CLI."""

from __future__ import annotations

import json
import logging
import sys

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for CI log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time": self.formatTime(record, DATE_FORMAT),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: str = "INFO", *, json_output: bool = False) -> None:
    """Configure the root logger.

    Args:
        level: Level name (``"DEBUG"``, ``"INFO"`` ...). Unknown names fall back to INFO.
        json_output: Emit JSON lines instead of the plain format.
    """
    resolved = getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT))
    logging.root.handlers.clear()
    logging.root.addHandler(handler)
    logging.root.setLevel(resolved)

    # Noisy at INFO
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("faker").setLevel(logging.WARNING)
