"""Role-based access control. No FastAPI."""

from enum import Enum
from typing import Optional

from timesheet_access.security.exceptions import AuthorizationError


class Role(str, Enum):
    USER = "USER"
    MANAGER = "MANAGER"
    MANAGER_TIMESHEET = "MANAGER_TIMESHEET"
    TENANT_ADMIN = "TENANT_ADMIN"
    ADMIN = "ADMIN"


MANAGER_ROLES = frozenset({Role.MANAGER, Role.MANAGER_TIMESHEET})
ADMIN_ROLES = frozenset({Role.ADMIN, Role.TENANT_ADMIN})


# Permission matrix:
# Role               ViewOwn  ViewTeam  EditEntry  ManageLocks  ViewAudit
# USER               ✓        ✗         ✓          ✗            ✗
# MANAGER            ✓        ✓         ✓          ✗            ✗
# MANAGER_TIMESHEET  ✓        ✓         ✓          ✗            ✗
# TENANT_ADMIN       ✓        ✓         ✓          ✓            ✓
# ADMIN              ✓        ✓         ✓          ✓            ✓

_ACTION_PERMISSIONS: dict[Role, frozenset[str]] = {
    Role.USER: frozenset({"view_own", "edit_entry"}),
    Role.MANAGER: frozenset({"view_own", "view_team", "edit_entry"}),
    Role.MANAGER_TIMESHEET: frozenset({"view_own", "view_team", "edit_entry"}),
    Role.TENANT_ADMIN: frozenset(
        {"view_own", "view_team", "edit_entry", "manage_locks", "view_audit"}
    ),
    Role.ADMIN: frozenset(
        {"view_own", "view_team", "edit_entry", "manage_locks", "view_audit"}
    ),
}


def parse_role(value: "Role | str | None") -> Optional[Role]:
    """Return the Role for a raw value, or None when it is not a known role."""
    if isinstance(value, Role):
        return value
    if not value:
        return None
    try:
        return Role(str(value).strip().upper())
    except ValueError:
        return None


class RBACService:
    """Check permission for role and action. Raise AuthorizationError if invalid."""

    def check_permission(self, role: "Role | str | None", action: str) -> Role:
        """Raises AuthorizationError if role does not have permission for action."""
        parsed = parse_role(role)
        if parsed is None:
            raise AuthorizationError(f"Unknown role '{role}'")
        if action not in _ACTION_PERMISSIONS.get(parsed, frozenset()):
            raise AuthorizationError(
                f"Role {parsed.value} does not have permission for action '{action}'"
            )
        return parsed
