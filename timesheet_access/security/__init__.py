"""Security: RBAC, tenant isolation, manager scope and access decisions. No FastAPI."""

from timesheet_access.security.access_validator import AccessValidator
from timesheet_access.security.rbac import RBACService, Role, parse_role
from timesheet_access.security.scope_resolver import ScopeResolver
from timesheet_access.security.tenant_context import TenantContext

__all__ = [
    "AccessValidator",
    "RBACService",
    "Role",
    "ScopeResolver",
    "TenantContext",
    "parse_role",
]
