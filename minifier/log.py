"""Structured JSON-lines logging for the ``minifier`` logger."""

from __future__ import annotations

import json
import logging

HANDLER_NAME = "minifier-json"


class StructuredFormatter(logging.Formatter):
    """One JSON object per record.

    Pass context through ``extra=``; any of *fields* found on the record
    is copied into the object (``path``, ``dialect``, ``kind`` ...).
    """

    def __init__(
        self,
        fields: tuple[str, ...] = ("path", "dialect", "kind", "value", "matcher"),
    ) -> None:
        super().__init__()
        self.fields = fields

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key))
            for key in self.fields
            if getattr(record, key, None) is not None
        )
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach the structured handler to the ``minifier`` logger (once)."""
    logger = logging.getLogger("minifier")
    if all(h.get_name() != HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
