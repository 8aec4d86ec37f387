"""
Structured JSON Logger
======================

One JSON object per log line, keyed by a typed LogEvent.

Example:
    >>> logger = create_logger("capture")
    >>> logger.info(LogEvent.RING_COMMITTED, "Ring committed (42 points)", {'points': 42})

    {"timestamp": "2026-10-18T15:30:45.123456+00:00", "level": "INFO",
     "component": "capture", "event": "ring.committed",
     "message": "Ring committed (42 points)", "metadata": {"points": 42}}
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .events import LogEvent

Metadata = Optional[Dict[str, Any]]


class JSONFormatter(logging.Formatter):
    """Records already carry a JSON payload; emit it unchanged."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


class StructuredLogger:
    """
    Component logger writing JSON lines to stderr.

    Loggers are named `scribble.<component>` so a host application can
    route or silence them with the standard logging tree.
    """

    def __init__(self, component: str, level: int = logging.INFO):
        self.component = component
        self.logger = logging.getLogger(f"scribble.{component}")
        self.logger.setLevel(level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def _emit(
        self,
        level: int,
        event: LogEvent,
        message: str,
        metadata: Metadata = None,
        exc: Optional[BaseException] = None,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return

        entry: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': logging.getLevelName(level),
            'component': self.component,
            'event': event.value,
            'message': message,
        }
        if metadata:
            entry['metadata'] = metadata
        if exc is not None:
            entry['exception'] = {'type': type(exc).__name__, 'message': str(exc)}

        self.logger.log(level, json.dumps(entry, default=str))

    def debug(self, event: LogEvent, message: str, metadata: Metadata = None) -> None:
        self._emit(logging.DEBUG, event, message, metadata)

    def info(self, event: LogEvent, message: str, metadata: Metadata = None) -> None:
        self._emit(logging.INFO, event, message, metadata)

    def warning(self, event: LogEvent, message: str, metadata: Metadata = None) -> None:
        self._emit(logging.WARNING, event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Metadata = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        """Log a failure; `exc_info` is summarised under "exception"."""
        self._emit(logging.ERROR, event, message, metadata, exc_info)


def create_logger(component: str, level: int = logging.INFO) -> StructuredLogger:
    """
    Factory for component loggers.

    Example:
        >>> logger = create_logger("view", level=logging.DEBUG)
    """
    return StructuredLogger(component=component, level=level)
