"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from payroll_core import __version__
from payroll_core.api.routes import (
    configuration_router,
    employees_router,
    health_router,
    pay_runs_router,
    reports_router,
    time_entries_router,
)
from payroll_core.config import get_settings
from payroll_core.database import create_schema, dispose_db, init_db
from payroll_core.errors import (
    NotFoundError,
    PayrollError,
    ReferentialIntegrityError,
    UniquenessViolationError,
)
from payroll_core.events import EventEmitter, log_event
from payroll_core.services.state_machine import InvalidTransitionError

logger = logging.getLogger(__name__)

# Domain error -> (HTTP status, error code)
ERROR_STATUS: dict[type[PayrollError], tuple[int, str]] = {
    NotFoundError: (status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    UniquenessViolationError: (status.HTTP_409_CONFLICT, "UNIQUENESS_VIOLATION"),
    ReferentialIntegrityError: (status.HTTP_409_CONFLICT, "REFERENTIAL_INTEGRITY"),
    InvalidTransitionError: (status.HTTP_409_CONFLICT, "INVALID_TRANSITION"),
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    init_db()
    if get_settings().create_schema:
        await create_schema()
    yield
    # Shutdown
    await dispose_db()


def create_app(events: EventEmitter | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Payroll Core API",
        description="Gross-to-net payroll: workforce, pay runs, configuration, reports",
        version=__version__,
        lifespan=lifespan,
    )

    if events is None:
        events = EventEmitter()
        events.on_all(log_event)
    app.state.events = events

    # Exception handlers
    @app.exception_handler(PayrollError)
    async def payroll_exception_handler(request: Request, exc: PayrollError) -> JSONResponse:
        """Map domain errors to 404/409."""
        status_code, code = status.HTTP_400_BAD_REQUEST, "PAYROLL_ERROR"
        for error_type, mapped in ERROR_STATUS.items():
            if isinstance(exc, error_type):
                status_code, code = mapped
                break
        return JSONResponse(status_code=status_code, content={"detail": str(exc), "code": code})

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc), "code": "INVALID_VALUE"},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(employees_router, prefix="/api/v1")
    app.include_router(time_entries_router, prefix="/api/v1")
    app.include_router(pay_runs_router, prefix="/api/v1")
    app.include_router(configuration_router, prefix="/api/v1")
    app.include_router(reports_router, prefix="/api/v1")

    return app
