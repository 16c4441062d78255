"""Notifications raised by closed-period edits."""

from timesheet_access.notifications.dispatcher import (
    LoggingNotificationDispatcher,
    NotificationDispatcher,
    NotificationEvent,
    RabbitMQNotificationDispatcher,
)
from timesheet_access.notifications.payloads import build_timesheet_adjusted_payload

__all__ = [
    "LoggingNotificationDispatcher",
    "NotificationDispatcher",
    "NotificationEvent",
    "RabbitMQNotificationDispatcher",
    "build_timesheet_adjusted_payload",
]
