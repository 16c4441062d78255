"""Notification dispatch and payloads."""

import logging
from datetime import date
from unittest.mock import AsyncMock

from timesheet_access.notifications.dispatcher import (
    LoggingNotificationDispatcher,
    NotificationEvent,
    RabbitMQNotificationDispatcher,
)
from timesheet_access.notifications.payloads import build_timesheet_adjusted_payload


def test_timesheet_adjusted_payload():
    payload = build_timesheet_adjusted_payload(
        tenant_id="t1",
        employee_id="e1",
        manager_id="m1",
        timesheet_id="ts-1",
        period_month=date(2025, 1, 1),
        justification="  late correction  ",
    )
    assert payload == {
        "tenant_id": "t1",
        "employee_id": "e1",
        "manager_id": "m1",
        "timesheet_id": "ts-1",
        "entry_id": None,
        "period": "2025-01-01",
        "action": "update",
        "justification": "late correction",
    }


async def test_rabbitmq_dispatcher_publishes_to_topic():
    publisher = AsyncMock()
    dispatcher = RabbitMQNotificationDispatcher(publisher, "timesheet_notifications")

    await dispatcher.notify(NotificationEvent.TIMESHEET_ADJUSTED, "e1", {"period": "2025-01-01"})

    args, kwargs = publisher.publish.call_args
    assert args[0] == "timesheet_notifications"
    assert args[1] == "notification.timesheet_adjusted"
    assert args[2] == {
        "event": "timesheet_adjusted",
        "recipient": "e1",
        "payload": {"period": "2025-01-01"},
    }
    assert kwargs["message_id"]


async def test_logging_dispatcher_only_logs(caplog):
    with caplog.at_level(logging.INFO, logger="timesheet_access.notifications.dispatcher"):
        await LoggingNotificationDispatcher().notify("timesheet_adjusted", "e1", {})
    assert any(r.getMessage() == "notification_logged" for r in caplog.records)
