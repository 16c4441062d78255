"""Governance tests: audit immutability, field completeness, best-effort writes."""

import logging
from datetime import timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from timesheet_access.governance.audit_logger import AuditLogger
from timesheet_access.governance.audit_models import AuditAction, AuditRecord
from timesheet_access.governance.exceptions import AuditWriteFailed


@pytest.fixture
def audit_repository():
    repo = AsyncMock()
    repo.save = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def audit_logger(audit_repository):
    return AuditLogger(repository=audit_repository)


async def test_audit_immutability(audit_logger, audit_repository):
    """Audit record must not allow mutation; stored via repository."""
    written = await audit_logger.log_action(
        actor_id="user-1",
        tenant_id="t1",
        action=AuditAction.UPDATE,
        resource_type="timesheet_entry",
        resource_id="entry-1",
        old_values={"hours": 8},
        new_values={"hours": 6},
        correlation_id="corr-1",
    )
    assert written is True
    assert audit_repository.save.await_count == 1
    record = audit_repository.save.call_args[0][0]
    assert isinstance(record, AuditRecord)
    assert record.actor_id == "user-1"
    assert record.tenant_id == "t1"
    assert record.action is AuditAction.UPDATE
    assert record.old_values == {"hours": 8}
    assert record.new_values == {"hours": 6}
    with pytest.raises(AttributeError):
        record.actor_id = "other"  # type: ignore[misc]


async def test_audit_fields_completeness(audit_logger, audit_repository):
    """Must include who, what, when (UTC), where from, correlation_id."""
    await audit_logger.log_action(
        actor_id="who",
        tenant_id="t1",
        action=AuditAction.MANAGER_EDIT_CLOSED_PERIOD,
        resource_type="timesheet_entry",
        resource_id="id-1",
        ip_address="10.0.0.1",
        user_agent="pytest",
        correlation_id="corr-id",
    )
    record = audit_repository.save.call_args[0][0]
    assert record.timestamp_utc.tzinfo == timezone.utc
    d = record.to_dict()
    assert d["action"] == "manager_edit_closed_period"
    assert d["ip_address"] == "10.0.0.1"
    assert d["user_agent"] == "pytest"
    assert d["correlation_id"] == "corr-id"
    assert "timestamp_utc" in d


async def test_failed_write_never_raises(audit_repository, caplog):
    audit_repository.save = AsyncMock(side_effect=RuntimeError("disk full"))
    audit_logger = AuditLogger(repository=audit_repository)

    with caplog.at_level(logging.ERROR, logger="timesheet_access.ops"):
        written = await audit_logger.log_action(
            actor_id="m1",
            tenant_id="t1",
            action=AuditAction.ACCESS_DENIED,
            resource_type="employee_data",
        )

    assert written is False
    assert any(r.getMessage() == "audit_write_failed" for r in caplog.records)


async def test_failed_write_reaches_error_channel(audit_repository):
    audit_repository.save = AsyncMock(side_effect=RuntimeError("disk full"))
    channel = MagicMock()
    audit_logger = AuditLogger(repository=audit_repository, error_channel=channel)

    await audit_logger.log_action(
        actor_id="m1", tenant_id="t1", action=AuditAction.VIEW, resource_type="report"
    )

    failure = channel.call_args[0][0]
    assert isinstance(failure, AuditWriteFailed)
    assert failure.record.action is AuditAction.VIEW
    assert "disk full" in failure.message


async def test_broken_error_channel_is_contained(audit_repository):
    audit_repository.save = AsyncMock(side_effect=RuntimeError("disk full"))
    channel = MagicMock(side_effect=ValueError("pager down"))
    audit_logger = AuditLogger(repository=audit_repository, error_channel=channel)

    written = await audit_logger.log_action(
        actor_id="m1", tenant_id="t1", action=AuditAction.VIEW, resource_type="report"
    )
    assert written is False
