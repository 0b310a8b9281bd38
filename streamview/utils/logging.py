from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, TextIO


PACKAGE_LOGGER = "streamview"

# LogRecord attributes that are not user-supplied ``extra=`` fields
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` fields become top-level keys."""

    def __init__(self, static_fields: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__()
        self._static: Dict[str, Any] = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = dict(self._static)
        payload.update(
            {
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
                "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            }
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                payload[key] = value
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(
    level: str = "INFO",
    stream: Optional[TextIO] = None,
    logger_name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """Attach a single JSON stdout handler to ``logger_name``.

    Defaults to the package logger, which stops propagating so an embedding
    application's root handlers do not print streamview records twice. Pass
    ``logger_name=""`` to configure the root logger instead.
    """
    log = logging.getLogger(logger_name)
    log.setLevel(level.upper())
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(JsonFormatter())
    log.handlers.clear()
    log.addHandler(handler)
    if logger_name:
        log.propagate = False
    return log
