"""
Operator Notifications.

Replaces the toast popups of a graphical front end: every notification is
logged, appended to a bounded history and pushed to subscribed sinks
(the CLI prints them).
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    """Severity of an operator notification."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


_LOG_LEVELS = {
    NotificationLevel.SUCCESS: logging.INFO,
    NotificationLevel.INFO: logging.INFO,
    NotificationLevel.WARNING: logging.WARNING,
    NotificationLevel.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class Notification:
    """A single message shown to the operator."""

    level: NotificationLevel
    message: str
    created_at: datetime = field(default_factory=datetime.now)


NotificationSink = Callable[[Notification], None]


class Notifier:
    """
    Collects operator notifications.

    Sinks are called synchronously in subscription order. A failing sink is
    logged and skipped.
    """

    def __init__(self, max_history: int = 200) -> None:
        self._history: list[Notification] = []
        self._max_history = max_history
        self._sinks: list[NotificationSink] = []

    def subscribe(self, sink: NotificationSink) -> Callable[[], None]:
        """Register a sink; returns a callable that removes it again."""
        self._sinks.append(sink)

        def _unsubscribe() -> None:
            if sink in self._sinks:
                self._sinks.remove(sink)

        return _unsubscribe

    def notify(self, level: NotificationLevel, message: str) -> Notification:
        notification = Notification(level=level, message=message)

        self._history.append(notification)
        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history:]

        logger.log(_LOG_LEVELS[level], f"[{level}] {message}")

        for sink in list(self._sinks):
            try:
                sink(notification)
            except Exception as e:
                logger.error(f"Notification sink failed: {e}")
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(NotificationLevel.SUCCESS, message)

    def info(self, message: str) -> Notification:
        return self.notify(NotificationLevel.INFO, message)

    def warning(self, message: str) -> Notification:
        return self.notify(NotificationLevel.WARNING, message)

    def error(self, message: str) -> Notification:
        return self.notify(NotificationLevel.ERROR, message)

    @property
    def history(self) -> list[Notification]:
        """Copy of the recorded notifications, oldest first."""
        return self._history.copy()

    @property
    def last(self) -> Notification | None:
        return self._history[-1] if self._history else None
