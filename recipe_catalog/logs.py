"""Logging setup for the recipe API.

Output goes to stdout either as plain text or as one JSON object per line,
selected through ``LOG_FORMAT``.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict

# Structured attributes copied into JSON output when a record carries them.
EXTRA_FIELDS = ("method", "path", "status", "remote_addr", "recipe_id", "body")

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s %(message)s"


class JSONFormatter(logging.Formatter):
    """Formatter that outputs structured JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging(level: str = "INFO", log_format: str = "text") -> logging.Logger:
    """Attach a single stdout handler to the package logger and return it.

    Calling this again replaces the handler instead of stacking another one.
    """

    logger = logging.getLogger("recipe_catalog")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        if getattr(handler, "_recipe_catalog", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler._recipe_catalog = True  # type: ignore[attr-defined]
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logger.addHandler(handler)

    # Firestore's transport is chatty at DEBUG.
    logging.getLogger("google").setLevel(logging.WARNING)
    return logger


__all__ = ["JSONFormatter", "configure_logging"]
