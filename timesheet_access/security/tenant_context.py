"""Tenant isolation checks applied to every record a resolver reads. No FastAPI."""

from typing import Iterable, Optional, Protocol, TypeVar

from timesheet_access.security.exceptions import TenantIsolationError


class TenantScoped(Protocol):
    tenant_id: str


T = TypeVar("T", bound=TenantScoped)


class TenantContext:
    """A resolution step may only combine records of the request tenant."""

    @staticmethod
    def validate_access(resource_tenant: Optional[str], request_tenant: str) -> None:
        """Raise TenantIsolationError unless both tenants are set and equal."""
        if not resource_tenant or not request_tenant:
            raise TenantIsolationError(
                "Tenant isolation: resource tenant and request tenant must be non-empty"
            )
        if resource_tenant != request_tenant:
            raise TenantIsolationError(
                f"Tenant isolation: access denied. "
                f"Resource tenant '{resource_tenant}' does not match request tenant '{request_tenant}'"
            )

    @classmethod
    def ensure_same_tenant(cls, records: Iterable[T], request_tenant: str) -> list[T]:
        """Return the records as a list; raise on the first one owned by another tenant."""
        checked = []
        for record in records:
            cls.validate_access(record.tenant_id, request_tenant)
            checked.append(record)
        return checked

    @classmethod
    def ensure_entity_in_tenant(
        cls,
        entity_tenant: Optional[str],
        request_tenant: str,
        entity: str,
    ) -> None:
        """Entity lookups return None when missing; a missing entity is never in the tenant."""
        if entity_tenant is None:
            raise TenantIsolationError(
                f"Tenant isolation: {entity} does not exist in tenant '{request_tenant}'"
            )
        cls.validate_access(entity_tenant, request_tenant)
