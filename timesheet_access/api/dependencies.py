"""FastAPI dependency injection: DB stores, services, publisher, tenant, actor, correlation_id."""

from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_access.application.access_service import AccessService
from timesheet_access.application.edit_gate import EditGate
from timesheet_access.application.entry_edit_service import EntryEditService
from timesheet_access.config.settings import AppSettings, get_settings
from timesheet_access.governance.audit_logger import AuditLogger
from timesheet_access.infrastructure.database.audit_repository_db import DbAuditRepository
from timesheet_access.infrastructure.database.lock_store_db import DbLockOverrideStore
from timesheet_access.infrastructure.database.membership_store_db import DbGroupMembershipStore
from timesheet_access.infrastructure.database.session import get_db
from timesheet_access.infrastructure.messaging.rabbitmq_publisher import RabbitMQPublisher
from timesheet_access.notifications.dispatcher import (
    LoggingNotificationDispatcher,
    NotificationDispatcher,
    RabbitMQNotificationDispatcher,
)
from timesheet_access.periods.lock_resolver import LockResolver
from timesheet_access.periods.lock_service import PeriodLockService
from timesheet_access.security.access_validator import AccessValidator
from timesheet_access.security.rbac import RBACService
from timesheet_access.security.scope_resolver import ScopeResolver

_publisher: RabbitMQPublisher | None = None


@dataclass(frozen=True)
class Actor:
    actor_id: str
    role: str


def get_publisher(settings: Annotated[AppSettings, Depends(get_settings)]) -> Optional[RabbitMQPublisher]:
    """Return singleton RabbitMQ publisher, or None when no broker is configured."""
    global _publisher
    if not settings.rabbitmq_url:
        return None
    if _publisher is None:
        _publisher = RabbitMQPublisher(settings.rabbitmq_url)
    return _publisher


def get_notification_dispatcher(
    settings: Annotated[AppSettings, Depends(get_settings)],
    publisher: Annotated[Optional[RabbitMQPublisher], Depends(get_publisher)],
) -> NotificationDispatcher:
    if publisher is None:
        return LoggingNotificationDispatcher()
    return RabbitMQNotificationDispatcher(publisher, settings.notification_exchange)


def get_membership_store(db: Annotated[AsyncSession, Depends(get_db)]) -> DbGroupMembershipStore:
    return DbGroupMembershipStore(db)


def get_lock_store(db: Annotated[AsyncSession, Depends(get_db)]) -> DbLockOverrideStore:
    return DbLockOverrideStore(db)


def get_audit_logger(db: Annotated[AsyncSession, Depends(get_db)]) -> AuditLogger:
    return AuditLogger(DbAuditRepository(db))


def get_access_validator(
    membership: Annotated[DbGroupMembershipStore, Depends(get_membership_store)],
) -> AccessValidator:
    return AccessValidator(ScopeResolver(membership), membership)


def get_lock_resolver(
    membership: Annotated[DbGroupMembershipStore, Depends(get_membership_store)],
    locks: Annotated[DbLockOverrideStore, Depends(get_lock_store)],
) -> LockResolver:
    return LockResolver(membership, locks)


def get_access_service(
    validator: Annotated[AccessValidator, Depends(get_access_validator)],
    audit_logger: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> AccessService:
    return AccessService(validator, audit_logger)


def get_period_lock_service(
    locks: Annotated[DbLockOverrideStore, Depends(get_lock_store)],
    membership: Annotated[DbGroupMembershipStore, Depends(get_membership_store)],
    audit_logger: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> PeriodLockService:
    return PeriodLockService(locks, membership, audit_logger, RBACService())


def get_entry_edit_service(
    settings: Annotated[AppSettings, Depends(get_settings)],
    validator: Annotated[AccessValidator, Depends(get_access_validator)],
    resolver: Annotated[LockResolver, Depends(get_lock_resolver)],
    audit_logger: Annotated[AuditLogger, Depends(get_audit_logger)],
    dispatcher: Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)],
) -> EntryEditService:
    gate = EditGate(validator, resolver, settings.justification_min_length)
    return EntryEditService(gate, audit_logger, dispatcher)


def get_tenant_id(request: Request) -> str:
    """Extract tenant_id from request.state (set by middleware)."""
    return request.state.tenant_id


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""


def get_actor(request: Request) -> Actor:
    """Actor asserted by the gateway; 401 when either header is missing."""
    actor_id = getattr(request.state, "actor_id", None)
    role = getattr(request.state, "actor_role", None)
    if not actor_id or not role:
        raise HTTPException(status_code=401, detail="X-Actor-ID and X-Actor-Role headers are required")
    return Actor(actor_id=actor_id, role=role)
