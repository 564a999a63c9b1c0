"""Workforce ledger - employees and their time entries."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from payroll_core.calculators.money import round_cents
from payroll_core.errors import NotFoundError, ReferentialIntegrityError, UniquenessViolationError
from payroll_core.events import (
    EMPLOYEE_CREATED,
    EMPLOYEE_DELETED,
    EMPLOYEE_UPDATED,
    TIME_ENTRY_APPROVED,
    TIME_ENTRY_CREATED,
    EventBatch,
    EventEmitter,
)
from payroll_core.models import Employee, PayCheck, TimeEntry
from payroll_core.schemas import EmployeeCreate, EmployeeUpdate, TimeEntryCreate, TimeEntryUpdate
from payroll_core.services.state_machine import InvalidTransitionError
from payroll_core.store import RecordStore

logger = logging.getLogger(__name__)


class WorkforceService:
    """Service for employee and time entry records.

    Operations:
    - create/update/delete/get employees, SSN lookup, filtered listing
    - create/update/approve time entries, lookups by employee, job and date range

    Every mutation emits a domain event.
    """

    def __init__(
        self,
        session: AsyncSession,
        events: EventEmitter | EventBatch | None = None,
    ):
        self.session = session
        self.events = events or EventEmitter()
        self.employees = RecordStore(session, Employee)
        self.time_entries = RecordStore(session, TimeEntry, label="TimeEntry")
        self.pay_checks = RecordStore(session, PayCheck)

    # ------------------------------------------------------------------
    # Employees
    # ------------------------------------------------------------------

    async def create_employee(self, data: EmployeeCreate) -> Employee:
        """Register an employee. SSN must be unique."""
        if await self.get_employee_by_ssn(data.ssn) is not None:
            raise UniquenessViolationError("Employee", "ssn", data.ssn)

        values = data.model_dump()
        values["pay_rate"] = round_cents(values["pay_rate"])
        employee = await self.employees.insert(values)

        self.events.emit(EMPLOYEE_CREATED, {"employee": employee})
        return employee

    async def update_employee(self, employee_id: UUID, data: EmployeeUpdate) -> Employee:
        """Apply HR changes to an employee."""
        employee = await self.get_employee(employee_id)
        changes = data.model_dump(exclude_unset=True)

        new_ssn = changes.get("ssn")
        if new_ssn is not None and new_ssn != employee.ssn:
            if await self.get_employee_by_ssn(new_ssn) is not None:
                raise UniquenessViolationError("Employee", "ssn", new_ssn)

        if changes.get("pay_rate") is not None:
            changes["pay_rate"] = round_cents(changes["pay_rate"])

        employee = await self.employees.update(employee_id, changes)
        self.events.emit(EMPLOYEE_UPDATED, {"employee": employee, "changes": changes})
        return employee

    async def delete_employee(self, employee_id: UUID) -> None:
        """Delete an employee that has never been paid."""
        await self.get_employee(employee_id)

        check_count = (
            await self.pay_checks.query().where("employee_id", "=", employee_id).count()
        )
        if check_count:
            raise ReferentialIntegrityError(
                "Employee",
                employee_id,
                f"{check_count} pay check(s) reference this employee",
            )

        await self.employees.remove(employee_id)
        self.events.emit(EMPLOYEE_DELETED, {"employee_id": employee_id})

    async def get_employee(self, employee_id: UUID) -> Employee:
        employee = await self.employees.get(employee_id)
        if employee is None:
            raise NotFoundError("Employee", employee_id)
        return employee

    async def get_employee_by_ssn(self, ssn: str) -> Employee | None:
        return await self.employees.query().where("ssn", "=", ssn).first()

    async def list_employees(
        self,
        status: str | None = None,
        department: str | None = None,
        entity_id: str | None = None,
        pay_type: str | None = None,
    ) -> list[Employee]:
        """List employees ordered by last name."""
        query = self.employees.query()
        filters: dict[str, Any] = {
            "status": status,
            "department": department,
            "entity_id": entity_id,
            "pay_type": pay_type,
        }
        for field, value in filters.items():
            if value is not None:
                query = query.where(field, "=", value)
        return await query.order_by("last_name").order_by("first_name").execute()

    # ------------------------------------------------------------------
    # Time entries
    # ------------------------------------------------------------------

    async def create_time_entry(self, data: TimeEntryCreate) -> TimeEntry:
        """Record hours for an existing employee. Entries start unapproved."""
        await self.get_employee(data.employee_id)

        values = data.model_dump()
        values["hours"] = round_cents(values["hours"])
        values["approved"] = False
        entry = await self.time_entries.insert(values)

        self.events.emit(TIME_ENTRY_CREATED, {"time_entry": entry})
        return entry

    async def update_time_entry(self, time_entry_id: UUID, data: TimeEntryUpdate) -> TimeEntry:
        """Correct an entry that has not been approved yet."""
        entry = await self.get_time_entry(time_entry_id)
        if entry.approved:
            raise InvalidTransitionError(
                "approved", "approved", "approved time entries cannot be edited"
            )

        changes = data.model_dump(exclude_unset=True)
        if changes.get("hours") is not None:
            changes["hours"] = round_cents(changes["hours"])
        return await self.time_entries.update(time_entry_id, changes)

    async def approve_time_entry(self, time_entry_id: UUID, approved_by: str) -> TimeEntry:
        """Approve an entry. Approval happens once and is never undone."""
        entry = await self.get_time_entry(time_entry_id)
        if entry.approved:
            raise InvalidTransitionError(
                "approved", "approved", "time entry is already approved"
            )

        entry = await self.time_entries.update(
            time_entry_id,
            {
                "approved": True,
                "approved_by": approved_by,
                "approved_at": datetime.now(timezone.utc),
            },
        )
        logger.info("Time entry %s approved by %s", time_entry_id, approved_by)
        self.events.emit(TIME_ENTRY_APPROVED, {"time_entry": entry})
        return entry

    async def get_time_entry(self, time_entry_id: UUID) -> TimeEntry:
        entry = await self.time_entries.get(time_entry_id)
        if entry is None:
            raise NotFoundError("TimeEntry", time_entry_id)
        return entry

    async def list_time_entries_by_employee(self, employee_id: UUID) -> list[TimeEntry]:
        return await (
            self.time_entries.query()
            .where("employee_id", "=", employee_id)
            .order_by("work_date", "desc")
            .execute()
        )

    async def list_time_entries_by_job(self, job_id: str) -> list[TimeEntry]:
        return await (
            self.time_entries.query()
            .where("job_id", "=", job_id)
            .order_by("work_date", "desc")
            .execute()
        )

    async def list_time_entries_by_date_range(
        self,
        start: date,
        end: date,
        employee_id: UUID | None = None,
    ) -> list[TimeEntry]:
        """Entries with start <= work_date <= end, oldest first."""
        query = (
            self.time_entries.query()
            .where("work_date", ">=", start)
            .where("work_date", "<=", end)
        )
        if employee_id is not None:
            query = query.where("employee_id", "=", employee_id)
        return await query.order_by("work_date").execute()

