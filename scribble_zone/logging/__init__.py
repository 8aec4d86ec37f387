"""
Structured Logging for Scribble Map
===================================

Bounded Context: Observability

JSON-structured logging with a typed event taxonomy.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from scribble_zone.logging import create_logger, LogEvent
    >>> logger = create_logger("view")
    >>> logger.info(
    ...     event=LogEvent.FILTER_APPLIED,
    ...     message="Filtered 3 of 10 restaurants",
    ...     metadata={'visible': 3, 'total': 10}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
