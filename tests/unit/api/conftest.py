"""Fixtures for API unit tests: in-memory stores behind the FastAPI dependencies, AsyncClient."""

import pytest
from httpx import ASGITransport, AsyncClient

from timesheet_access.governance.audit_logger import AuditLogger
from timesheet_access.main import app


@pytest.fixture
def app_with_overrides(directory, lock_store, audit_repository, dispatcher):
    """App whose stores, audit sink and dispatcher are the in-memory fakes."""
    from timesheet_access.api import dependencies

    app.dependency_overrides[dependencies.get_membership_store] = lambda: directory
    app.dependency_overrides[dependencies.get_lock_store] = lambda: lock_store
    app.dependency_overrides[dependencies.get_audit_logger] = lambda: AuditLogger(audit_repository)
    app.dependency_overrides[dependencies.get_notification_dispatcher] = lambda: dispatcher
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def headers(org):
    def _headers(actor: str, role: str, tenant: str = org.tenant) -> dict:
        return {"X-Tenant-ID": tenant, "X-Actor-ID": actor, "X-Actor-Role": role}

    return _headers
