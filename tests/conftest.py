"""Pytest fixtures for payroll core tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from payroll_core.events import EventEmitter, PayrollEvent
from payroll_core.models import Base, Employee
from payroll_core.schemas import EmployeeCreate, PayRunCreate, TimeEntryCreate
from payroll_core.services import (
    ConfigurationService,
    PayRunService,
    ReportingService,
    WorkforceService,
)

# Use in-memory SQLite for tests (with async support)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


class RecordedEvents:
    """Collects every emitted event."""

    def __init__(self) -> None:
        self.events: list[PayrollEvent] = []

    def __call__(self, event: PayrollEvent) -> None:
        self.events.append(event)

    @property
    def names(self) -> list[str]:
        return [e.name for e in self.events]


@pytest.fixture
def recorded() -> RecordedEvents:
    return RecordedEvents()


@pytest.fixture
def events(recorded) -> EventEmitter:
    emitter = EventEmitter()
    emitter.on_all(recorded)
    return emitter


@pytest.fixture
def workforce(session, events) -> WorkforceService:
    return WorkforceService(session, events)


@pytest.fixture
def pay_runs(session, events) -> PayRunService:
    return PayRunService(session, events)


@pytest.fixture
def configuration(session) -> ConfigurationService:
    return ConfigurationService(session)


@pytest.fixture
def reporting(session) -> ReportingService:
    return ReportingService(session)


# =============================================================================
# Builders
# =============================================================================

_ssn_counter = iter(range(100000000, 999999999))


def employee_data(**overrides) -> EmployeeCreate:
    """Hourly CA employee at $50/hr unless overridden."""
    values = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "ssn": str(next(_ssn_counter)),
        "hire_date": date(2024, 1, 2),
        "pay_type": "hourly",
        "pay_rate": Decimal("50.00"),
        "pay_frequency": "biweekly",
        "state": "CA",
    }
    values.update(overrides)
    return EmployeeCreate(**values)


def pay_run_data(**overrides) -> PayRunCreate:
    values = {
        "period_start": date(2025, 1, 6),
        "period_end": date(2025, 1, 19),
        "pay_date": date(2025, 1, 24),
    }
    values.update(overrides)
    return PayRunCreate(**values)


@pytest.fixture
def make_employee(workforce):
    async def _make(**overrides) -> Employee:
        return await workforce.create_employee(employee_data(**overrides))

    return _make


@pytest.fixture
def log_hours(workforce):
    """Create a time entry and approve it unless approve=False."""

    async def _log(employee, hours, work_date=date(2025, 1, 7), pay_type="regular", approve=True):
        entry = await workforce.create_time_entry(
            TimeEntryCreate(
                employee_id=employee.employee_id,
                work_date=work_date,
                hours=Decimal(str(hours)),
                pay_type=pay_type,
            )
        )
        if approve:
            entry = await workforce.approve_time_entry(entry.time_entry_id, "supervisor")
        return entry

    return _log
