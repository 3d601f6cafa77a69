"""
Logging setup for the API process.

Modules log through ``logging.getLogger(__name__)``; this module only
installs the root handler, either as plain text or as one JSON object
per line for log aggregation.
"""

import json
import logging
import sys
from typing import Any, Dict

PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class StructuredFormatter(logging.Formatter):
    """Render log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure the root logger.

    Calling it again replaces the handler installed by a previous call,
    so repeated app creation (tests) does not duplicate output.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if json_logs else logging.Formatter(PLAIN_FORMAT))
    handler.set_name("rizyland")

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == "rizyland":
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())
