"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_core.database import init_db
from payroll_core.events import EventBatch
from payroll_core.services import (
    ConfigurationService,
    PayRunService,
    ReportingService,
    WorkforceService,
)


async def get_events(request: Request) -> AsyncGenerator[EventBatch, None]:
    """Per-request batch on the application's event emitter.

    Events emitted while handling the request are published once the
    session has committed, and dropped if the request fails.
    """
    with request.app.state.events.batch() as batch:
        yield batch


Events = Annotated[EventBatch, Depends(get_events)]


async def get_db_session(events: Events) -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency.

    The request's work is committed when the endpoint returns and rolled
    back when it raises. Depends on the event batch so the batch closes
    after the commit.
    """
    _, factory = init_db()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_workforce_service(db: DbSession, events: Events) -> WorkforceService:
    return WorkforceService(db, events)


def get_pay_run_service(db: DbSession, events: Events) -> PayRunService:
    return PayRunService(db, events)


def get_configuration_service(db: DbSession) -> ConfigurationService:
    return ConfigurationService(db)


def get_reporting_service(db: DbSession) -> ReportingService:
    return ReportingService(db)


Workforce = Annotated[WorkforceService, Depends(get_workforce_service)]
PayRuns = Annotated[PayRunService, Depends(get_pay_run_service)]
Configuration = Annotated[ConfigurationService, Depends(get_configuration_service)]
Reporting = Annotated[ReportingService, Depends(get_reporting_service)]
