"""
Notification sinks.

The cart reports every failed operation as a human-readable string. Sinks
are fire-and-forget: they must not raise back into the cart.
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from shopcart.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)


class NotificationSink(ABC):
    """Receives user-facing error messages."""

    @abstractmethod
    def error(self, message: str) -> None:
        ...


class LoggingNotificationSink(NotificationSink):
    """Writes messages to the log (headless use)."""

    def error(self, message: str) -> None:
        logger.warning("Notification: %s", sanitize_string_for_logging(message, max_length=200))


class RecordingNotificationSink(NotificationSink):
    """Keeps messages in order; optionally forwards each to a callback."""

    def __init__(self, callback: Optional[Callable[[str], None]] = None):
        self.messages: List[str] = []
        self._callback = callback

    def error(self, message: str) -> None:
        self.messages.append(message)
        if self._callback is None:
            return
        try:
            self._callback(message)
        except Exception:
            logger.exception("Notification callback failed")

    def clear(self) -> None:
        self.messages.clear()
