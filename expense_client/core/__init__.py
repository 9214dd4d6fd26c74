"""Side channels the core reports through: notifications and navigation."""

from .notification_service import Notification, Notifier
from .navigation import Navigator

__all__ = [
    "Notification",
    "Notifier",
    "Navigator",
]
