"""Transient user notifications with automatic dismissal."""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from tracking import t

from infrastructure import constants


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    message: str
    level: NotificationLevel
    sequence: int = 0


NotificationListener = Callable[[Optional[Notification]], None]


class NotificationCenter:
    """Holds at most one notification at a time.

    A new notification replaces the current one and restarts the dismissal
    timer. Listeners are called with the new current value (``None`` once it
    has been dismissed).
    """

    def __init__(
        self,
        *,
        duration: float = constants.NOTIFICATION_DURATION_SECONDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        t('bookings.notifications.NotificationCenter.__init__')
        self.duration = duration
        self.logger = logger or logging.getLogger('NotificationCenter')
        self._current: Optional[Notification] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._listeners: List[NotificationListener] = []
        self._sequence = itertools.count(1)

    @property
    def current(self) -> Optional[Notification]:
        return self._current

    def add_listener(self, listener: NotificationListener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that removes it."""

        t('bookings.notifications.NotificationCenter.add_listener')
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def show(self, message: str, level: NotificationLevel = NotificationLevel.SUCCESS) -> Notification:
        """Display ``message``; must be called from a running event loop."""

        t('bookings.notifications.NotificationCenter.show')
        self._cancel_timer()
        notification = Notification(
            message=message,
            level=NotificationLevel(level),
            sequence=next(self._sequence),
        )
        self._current = notification
        self.logger.debug("Notification #%s (%s): %s", notification.sequence, notification.level.value, message)

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.duration, self.dismiss, notification.sequence)
        self._publish()
        return notification

    def success(self, message: str) -> Notification:
        return self.show(message, NotificationLevel.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.show(message, NotificationLevel.ERROR)

    def info(self, message: str) -> Notification:
        return self.show(message, NotificationLevel.INFO)

    def dismiss(self, sequence: Optional[int] = None) -> None:
        """Clear the current notification.

        With ``sequence`` the call only clears that specific notification, so
        a timer that fires late never removes a newer one.
        """

        t('bookings.notifications.NotificationCenter.dismiss')
        if self._current is None:
            return
        if sequence is not None and self._current.sequence != sequence:
            return
        self._cancel_timer()
        self._current = None
        self._publish()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _publish(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._current)
            except Exception as exc:  # pragma: no cover
                self.logger.error("Notification listener failed: %s", exc, exc_info=True)


__all__ = [
    "Notification",
    "NotificationCenter",
    "NotificationLevel",
    "NotificationListener",
]
