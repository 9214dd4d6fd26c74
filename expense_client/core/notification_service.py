"""
Notification Service - transient user-facing messages.

Responsibilities:
- Record one notification per reported outcome
- Expire notifications after the configured duration
- Fan notifications out to presentation subscribers
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from expense_client.utils.enums import NotificationType

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 5.0


@dataclass
class Notification:
    message: str
    type: NotificationType
    created_at: float
    expires_at: float
    dismissed: bool = field(default=False)

    def is_active(self, now: float) -> bool:
        return not self.dismissed and now < self.expires_at


class Notifier:
    """Collects notifications and hands them to whoever renders them."""

    def __init__(self, duration: float = DEFAULT_DURATION, clock: Callable[[], float] = time.monotonic):
        self.duration = duration
        self.clock = clock
        self.history: List[Notification] = []
        self._subscribers: List[Callable[[Notification], None]] = []

    def subscribe(self, callback: Callable[[Notification], None]) -> None:
        self._subscribers.append(callback)

    def notify(self, message: str, notification_type=NotificationType.INFO) -> Notification:
        """
        Emit a notification.

        Args:
            message: Text shown to the user
            notification_type: success, error, info or warning; unknown
                values fall back to info

        Returns:
            The recorded Notification
        """
        try:
            kind = NotificationType(notification_type)
        except ValueError:
            kind = NotificationType.INFO

        now = self.clock()
        notification = Notification(
            message=message,
            type=kind,
            created_at=now,
            expires_at=now + self.duration,
        )
        self.history.append(notification)

        level = logging.WARNING if kind in (NotificationType.ERROR, NotificationType.WARNING) else logging.INFO
        logger.log(level, "[Notify] %s: %s", kind.value, message)

        for callback in self._subscribers:
            callback(notification)
        return notification

    def dismiss(self, notification: Notification) -> None:
        notification.dismissed = True

    def active(self, now: Optional[float] = None) -> List[Notification]:
        """Notifications still on screen at ``now``."""
        if now is None:
            now = self.clock()
        return [n for n in self.history if n.is_active(now)]

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None
