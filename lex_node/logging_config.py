"""Logging setup for the Lex node."""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional


DEFAULT_LOG_LEVEL = os.getenv("LEX_NODE_LOG_LEVEL", "INFO")

_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def __init__(self, labels: Optional[dict[str, str]] = None):
        super().__init__()
        self.labels = labels or {}

    def format(self, record: logging.LogRecord) -> str:
        """Format record as JSON."""
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.labels:
            payload["labels"] = self.labels
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(
    level: str = DEFAULT_LOG_LEVEL,
    json_output: bool = False,
    labels: Optional[dict[str, str]] = None,
) -> logging.Handler:
    """Attach a stdout handler to the ``lex_node`` logger and return it."""
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JsonFormatter(labels))
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )

    logger = logging.getLogger("lex_node")
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    return handler
