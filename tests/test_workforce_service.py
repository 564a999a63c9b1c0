"""Tests for the workforce ledger (employees and time entries)."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from payroll_core.errors import NotFoundError, ReferentialIntegrityError, UniquenessViolationError
from payroll_core.events import (
    EMPLOYEE_CREATED,
    EMPLOYEE_DELETED,
    EMPLOYEE_UPDATED,
    TIME_ENTRY_APPROVED,
    TIME_ENTRY_CREATED,
)
from payroll_core.schemas import EmployeeUpdate, TimeEntryCreate, TimeEntryUpdate
from payroll_core.services import WorkforceService
from payroll_core.services.state_machine import InvalidTransitionError

from .conftest import employee_data, pay_run_data


class TestEmployees:
    async def test_create_employee_defaults(self, workforce, recorded):
        employee = await workforce.create_employee(employee_data(pay_rate=Decimal("31.255")))

        assert employee.status == "active"
        assert employee.allowances == 0
        assert employee.pay_rate == Decimal("31.26")
        assert recorded.names == [EMPLOYEE_CREATED]

    async def test_duplicate_ssn_rejected(self, workforce):
        await workforce.create_employee(employee_data(ssn="123-45-6789"))

        with pytest.raises(UniquenessViolationError, match="ssn"):
            await workforce.create_employee(employee_data(ssn="123-45-6789"))

    async def test_get_by_ssn(self, workforce, make_employee):
        employee = await make_employee(ssn="555-00-1111")

        assert (await workforce.get_employee_by_ssn("555-00-1111")).employee_id == (
            employee.employee_id
        )
        assert await workforce.get_employee_by_ssn("000-00-0000") is None

    async def test_get_missing_employee(self, workforce):
        with pytest.raises(NotFoundError, match="Employee not found"):
            await workforce.get_employee(uuid4())

    async def test_update_employee(self, workforce, make_employee, recorded):
        employee = await make_employee()

        updated = await workforce.update_employee(
            employee.employee_id,
            EmployeeUpdate(department="Field", pay_rate=Decimal("55.004")),
        )

        assert updated.department == "Field"
        assert updated.pay_rate == Decimal("55.00")
        assert updated.last_name == "Lovelace"
        assert recorded.names[-1] == EMPLOYEE_UPDATED

    async def test_update_to_taken_ssn_rejected(self, workforce, make_employee):
        await make_employee(ssn="111-11-1111")
        other = await make_employee(ssn="222-22-2222")

        with pytest.raises(UniquenessViolationError):
            await workforce.update_employee(other.employee_id, EmployeeUpdate(ssn="111-11-1111"))

    async def test_update_keeping_own_ssn_is_allowed(self, workforce, make_employee):
        employee = await make_employee(ssn="333-33-3333")

        updated = await workforce.update_employee(
            employee.employee_id, EmployeeUpdate(ssn="333-33-3333", job_title="Lead")
        )

        assert updated.job_title == "Lead"

    def test_update_schema_rejects_null_for_required_fields(self):
        with pytest.raises(ValidationError, match="pay_frequency, ssn cannot be null"):
            EmployeeUpdate(ssn=None, pay_frequency=None)

        with pytest.raises(ValidationError, match="hours cannot be null"):
            TimeEntryUpdate(hours=None)

    async def test_update_writing_null_to_required_field_rejected(self, workforce, make_employee):
        employee = await make_employee()

        with pytest.raises(ValueError, match="Employee.pay_rate cannot be null"):
            await workforce.update_employee(
                employee.employee_id, EmployeeUpdate.model_construct(pay_rate=None)
            )

        assert (await workforce.get_employee(employee.employee_id)).pay_rate == Decimal("50.00")

    async def test_update_clears_optional_field(self, workforce, make_employee):
        employee = await make_employee(termination_date=date(2025, 6, 30))

        updated = await workforce.update_employee(
            employee.employee_id, EmployeeUpdate(termination_date=None)
        )

        assert updated.termination_date is None

    async def test_batched_events_publish_on_clean_exit(self, session, events, recorded):
        with events.batch() as batch:
            service = WorkforceService(session, batch)
            await service.create_employee(employee_data())
            assert recorded.names == []
            await session.commit()

        assert recorded.names == [EMPLOYEE_CREATED]

    async def test_batched_events_dropped_on_failure(self, session, events, recorded):
        with pytest.raises(UniquenessViolationError):
            with events.batch() as batch:
                service = WorkforceService(session, batch)
                await service.create_employee(employee_data(ssn="444-44-4444"))
                await service.create_employee(employee_data(ssn="444-44-4444"))
        await session.rollback()

        assert recorded.names == []

    async def test_list_employees_ordered_by_last_name(self, workforce, make_employee):
        await make_employee(last_name="Turing", first_name="Alan")
        await make_employee(last_name="Hopper", first_name="Grace", department="Navy")
        await make_employee(last_name="Babbage", first_name="Charles", status="inactive")

        all_names = [e.last_name for e in await workforce.list_employees()]
        active = [e.last_name for e in await workforce.list_employees(status="active")]
        navy = [e.last_name for e in await workforce.list_employees(department="Navy")]

        assert all_names == ["Babbage", "Hopper", "Turing"]
        assert active == ["Hopper", "Turing"]
        assert navy == ["Hopper"]


class TestDeleteEmployee:
    async def test_delete_employee_without_checks(self, workforce, make_employee, log_hours, recorded):
        employee = await make_employee()
        await log_hours(employee, 8)

        await workforce.delete_employee(employee.employee_id)

        with pytest.raises(NotFoundError):
            await workforce.get_employee(employee.employee_id)
        assert recorded.names[-1] == EMPLOYEE_DELETED

    async def test_delete_employee_with_check_is_blocked(
        self, workforce, pay_runs, make_employee, log_hours
    ):
        employee = await make_employee()
        await log_hours(employee, 40)
        run = await pay_runs.create_pay_run(pay_run_data())
        await pay_runs.add_pay_check(run.pay_run_id, employee.employee_id)

        with pytest.raises(ReferentialIntegrityError, match="pay check"):
            await workforce.delete_employee(employee.employee_id)

        assert (await workforce.get_employee(employee.employee_id)) is not None

    async def test_delete_missing_employee(self, workforce):
        with pytest.raises(NotFoundError):
            await workforce.delete_employee(uuid4())


class TestTimeEntries:
    async def test_create_time_entry_starts_unapproved(self, workforce, make_employee, recorded):
        employee = await make_employee()

        entry = await workforce.create_time_entry(
            TimeEntryCreate(
                employee_id=employee.employee_id,
                work_date=date(2025, 1, 7),
                hours=Decimal("7.755"),
            )
        )

        assert entry.approved is False
        assert entry.pay_type == "regular"
        assert entry.hours == Decimal("7.76")
        assert recorded.names[-1] == TIME_ENTRY_CREATED

    async def test_create_time_entry_for_missing_employee(self, workforce):
        with pytest.raises(NotFoundError):
            await workforce.create_time_entry(
                TimeEntryCreate(employee_id=uuid4(), work_date=date(2025, 1, 7), hours=8)
            )

    async def test_approve_time_entry(self, workforce, make_employee, log_hours, recorded):
        employee = await make_employee()
        entry = await log_hours(employee, 8, approve=False)

        approved = await workforce.approve_time_entry(entry.time_entry_id, "manager")

        assert approved.approved is True
        assert approved.approved_by == "manager"
        assert approved.approved_at is not None
        assert recorded.names[-1] == TIME_ENTRY_APPROVED

    async def test_second_approval_is_rejected(self, workforce, make_employee, log_hours):
        employee = await make_employee()
        entry = await log_hours(employee, 8)

        with pytest.raises(InvalidTransitionError, match="already approved"):
            await workforce.approve_time_entry(entry.time_entry_id, "someone-else")

        assert (await workforce.get_time_entry(entry.time_entry_id)).approved_by == "supervisor"

    async def test_approve_missing_entry(self, workforce):
        with pytest.raises(NotFoundError, match="TimeEntry"):
            await workforce.approve_time_entry(uuid4(), "manager")

    async def test_update_unapproved_entry(self, workforce, make_employee, log_hours):
        employee = await make_employee()
        entry = await log_hours(employee, 8, approve=False)

        updated = await workforce.update_time_entry(
            entry.time_entry_id, TimeEntryUpdate(hours=Decimal("6.5"), pay_type="overtime")
        )

        assert updated.hours == Decimal("6.50")
        assert updated.pay_type == "overtime"

    async def test_approved_entry_cannot_be_edited(self, workforce, make_employee, log_hours):
        employee = await make_employee()
        entry = await log_hours(employee, 8)

        with pytest.raises(InvalidTransitionError):
            await workforce.update_time_entry(entry.time_entry_id, TimeEntryUpdate(hours=10))

    async def test_lookups(self, workforce, make_employee):
        ada = await make_employee()
        grace = await make_employee(last_name="Hopper")

        for employee, day, job in [
            (ada, date(2025, 1, 7), "J1"),
            (ada, date(2025, 1, 9), "J2"),
            (grace, date(2025, 1, 8), "J1"),
            (grace, date(2025, 2, 1), "J1"),
        ]:
            await workforce.create_time_entry(
                TimeEntryCreate(
                    employee_id=employee.employee_id, work_date=day, hours=8, job_id=job
                )
            )

        by_employee = await workforce.list_time_entries_by_employee(ada.employee_id)
        by_job = await workforce.list_time_entries_by_job("J1")
        in_range = await workforce.list_time_entries_by_date_range(
            date(2025, 1, 7), date(2025, 1, 9)
        )
        grace_in_range = await workforce.list_time_entries_by_date_range(
            date(2025, 1, 1), date(2025, 1, 31), grace.employee_id
        )

        assert [e.work_date for e in by_employee] == [date(2025, 1, 9), date(2025, 1, 7)]
        assert [e.work_date for e in by_job] == [
            date(2025, 2, 1),
            date(2025, 1, 8),
            date(2025, 1, 7),
        ]
        assert [e.work_date for e in in_range] == [
            date(2025, 1, 7),
            date(2025, 1, 8),
            date(2025, 1, 9),
        ]
        assert [e.work_date for e in grace_in_range] == [date(2025, 1, 8)]
