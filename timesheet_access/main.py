# timesheet_access/main.py

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from timesheet_access.api.middleware import (
    ActorContextMiddleware,
    AuditTriggerMiddleware,
    CorrelationIdMiddleware,
    TenantContextMiddleware,
)
from timesheet_access.api.routers import access, entries, health, locks
from timesheet_access.application.exceptions import ApplicationError, StoreUnavailableError
from timesheet_access.config.logging import configure_logging
from timesheet_access.config.settings import get_settings
from timesheet_access.domain.exceptions import DomainError, InvalidParameterError
from timesheet_access.periods.exceptions import PeriodError
from timesheet_access.security.exceptions import (
    AuthorizationError,
    ScopeResolutionFailed,
    TenantIsolationError,
)

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
)

# Middleware order: last added runs first (outermost).
# Request flow: CorrelationId -> TenantContext -> ActorContext -> AuditTrigger.
app.add_middleware(AuditTriggerMiddleware)
app.add_middleware(ActorContextMiddleware)
app.add_middleware(TenantContextMiddleware)
app.add_middleware(CorrelationIdMiddleware)


@app.exception_handler(InvalidParameterError)
async def invalid_parameter_error_handler(request, exc: InvalidParameterError):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request, exc: AuthorizationError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(TenantIsolationError)
async def tenant_isolation_error_handler(request, exc: TenantIsolationError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(ScopeResolutionFailed)
async def scope_resolution_failed_handler(request, exc: ScopeResolutionFailed):
    return JSONResponse(status_code=503, content={"detail": exc.message})


@app.exception_handler(PeriodError)
async def period_error_handler(request, exc: PeriodError):
    return JSONResponse(status_code=503, content={"detail": exc.message})


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_error_handler(request, exc: StoreUnavailableError):
    return JSONResponse(status_code=503, content={"detail": exc.message})


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    logger.exception("unhandled_error")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Routers: /health, /access, /locks, /timesheets
app.include_router(health.router)
app.include_router(access.router, prefix="/access")
app.include_router(locks.router, prefix="/locks")
app.include_router(entries.router, prefix="/timesheets")
