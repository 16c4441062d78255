# timesheet_access/infrastructure/database/models.py

import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from timesheet_access.infrastructure.database.session import Base

JsonType = JSON().with_variant(JSONB(), "postgresql")


class TenantScopedModel(Base):
    __abstract__ = True

    tenant_id = Column(String, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class Environment(TenantScopedModel):
    """Operational location (vessel, site) grouping several groups."""

    __tablename__ = "environments"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False, default="")


class Group(TenantScopedModel):
    __tablename__ = "groups"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False, default="")
    environment_id = Column(String, ForeignKey("environments.id"), nullable=True, index=True)


class Employee(TenantScopedModel):
    __tablename__ = "employees"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False, default="")
    # Login user linked to this employee record
    profile_user_id = Column(String, nullable=True, index=True)


class EmployeeGroupMember(TenantScopedModel):
    __tablename__ = "employee_group_members"

    group_id = Column(String, ForeignKey("groups.id"), primary_key=True)
    employee_id = Column(String, ForeignKey("employees.id"), primary_key=True)


class ManagerGroupAssignment(TenantScopedModel):
    __tablename__ = "manager_group_assignments"

    group_id = Column(String, ForeignKey("groups.id"), primary_key=True)
    manager_id = Column(String, primary_key=True)


class PeriodLockRecord(TenantScopedModel):
    """One row per (tenant, scope level, scope id, month). scope_id is the tenant id at tenant level."""

    __tablename__ = "period_locks"
    __table_args__ = (
        UniqueConstraint(
            "tenant_id", "scope_level", "scope_id", "period_month", name="uq_period_lock_scope"
        ),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    scope_level = Column(String, nullable=False)
    scope_id = Column(String, nullable=False)
    period_month = Column(Date, nullable=False)
    locked = Column(Boolean, nullable=False, default=True)
    reason = Column(String, nullable=True)


class TenantSettings(Base):
    __tablename__ = "tenant_settings"

    tenant_id = Column(String, primary_key=True)
    # 0 or NULL: last day of the month
    deadline_day = Column(Integer, nullable=True)
    auto_lock_enabled = Column(Boolean, nullable=False, default=True)


class AuditLog(Base):
    """Append-only. Rows are never updated or deleted by the service."""

    __tablename__ = "audit_log"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(String, nullable=False, index=True)
    actor_id = Column(String, nullable=False)
    action = Column(String, nullable=False, index=True)
    resource_type = Column(String, nullable=False)
    resource_id = Column(String, nullable=True)
    old_values = Column(JsonType, nullable=True)
    new_values = Column(JsonType, nullable=True)
    timestamp_utc = Column(DateTime(timezone=True), nullable=False)
    ip_address = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)
    correlation_id = Column(String, nullable=True)
