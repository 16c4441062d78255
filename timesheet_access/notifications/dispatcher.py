"""Notification dispatch. Fire-and-forget from the caller's point of view."""

import logging
import uuid
from enum import Enum
from typing import Any, Dict, Protocol

from timesheet_access.infrastructure.messaging.rabbitmq_publisher import RabbitMQPublisher

logger = logging.getLogger(__name__)


class NotificationEvent(str, Enum):
    TIMESHEET_ADJUSTED = "timesheet_adjusted"


class NotificationDispatcher(Protocol):
    async def notify(self, event: str, recipient: str, payload: Dict[str, Any]) -> None:
        ...


class LoggingNotificationDispatcher:
    """Used when no broker is configured: records the notification in the log only."""

    async def notify(self, event: str, recipient: str, payload: Dict[str, Any]) -> None:
        logger.info(
            "notification_logged",
            extra={"notification_event": str(event), "recipient": recipient},
        )


class RabbitMQNotificationDispatcher:
    """Publishes notifications to a topic exchange; delivery workers live outside this service."""

    def __init__(self, publisher: RabbitMQPublisher, exchange_name: str) -> None:
        self._publisher = publisher
        self._exchange_name = exchange_name

    async def notify(self, event: str, recipient: str, payload: Dict[str, Any]) -> None:
        event_name = event.value if isinstance(event, NotificationEvent) else str(event)
        await self._publisher.publish(
            self._exchange_name,
            f"notification.{event_name}",
            {"event": event_name, "recipient": recipient, "payload": payload},
            message_id=str(uuid.uuid4()),
        )
