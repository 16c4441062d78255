"""Tenant-scoped organisation records read by the resolvers."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Group:
    """Named collection of employees. Belongs to one tenant and at most one environment."""

    group_id: str
    tenant_id: str
    name: str = ""
    environment_id: Optional[str] = None

