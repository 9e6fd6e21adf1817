"""
Structured Logging for textshaper.
Outputs JSON-formatted logs on stderr; stdout is left for shaped results.
"""

import json
import logging
import sys
from datetime import datetime, timezone

# Configure package logger
logger = logging.getLogger("textshaper")
logger.setLevel(logging.INFO)
handler = logging.StreamHandler(sys.stderr)
logger.addHandler(handler)
logger.propagate = False


class JsonFormatter(logging.Formatter):
    """JSON formatter that dynamically extracts all extra fields."""

    # Standard LogRecord attributes to exclude (these are Python logging internals)
    STANDARD_ATTRS = {
        'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
        'levelno', 'lineno', 'module', 'msecs', 'message', 'pathname', 'process',
        'processName', 'relativeCreated', 'thread', 'threadName', 'exc_info',
        'exc_text', 'stack_info', 'asctime', 'taskName'
    }

    def format(self, record):
        # Base fields
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
        }

        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS and not key.startswith('_'):
                try:
                    json.dumps(value)  # Test if JSON-serializable
                    log_record[key] = value
                except (TypeError, ValueError):
                    log_record[key] = str(value)

        return json.dumps(log_record)


handler.setFormatter(JsonFormatter())


def get_logger(component: str = "textshaper"):
    return ComponentLogger(component)


class ComponentLogger:
    def __init__(self, component):
        self.component = component
        self.logger = logging.getLogger("textshaper")

    def _extra(self, fields):
        extra = {"component": self.component}
        extra.update(fields)
        return extra

    def debug(self, msg, **fields):
        self.logger.debug(msg, extra=self._extra(fields))

    def info(self, msg, **fields):
        self.logger.info(msg, extra=self._extra(fields))

    def warning(self, msg, **fields):
        self.logger.warning(msg, extra=self._extra(fields))

    def error(self, msg, **fields):
        self.logger.error(msg, extra=self._extra(fields))
