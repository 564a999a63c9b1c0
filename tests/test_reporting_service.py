"""Tests for payroll reports."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from payroll_core.errors import NotFoundError
from payroll_core.services.reporting_service import quarter_window

from .conftest import pay_run_data


async def paid_run(pay_runs, employees, pay_date=date(2025, 1, 24), complete=True):
    """A pay run with one check per employee, completed by default."""
    run = await pay_runs.create_pay_run(pay_run_data(pay_date=pay_date))
    for employee in employees:
        await pay_runs.add_pay_check(run.pay_run_id, employee.employee_id)
    if complete:
        await pay_runs.process_pay_run(run.pay_run_id)
        await pay_runs.complete_pay_run(run.pay_run_id)
    return run


class TestQuarterWindow:
    def test_windows(self):
        assert quarter_window(2025, 1) == (date(2025, 1, 1), date(2025, 4, 1))
        assert quarter_window(2025, 3) == (date(2025, 7, 1), date(2025, 10, 1))
        assert quarter_window(2025, 4) == (date(2025, 10, 1), date(2026, 1, 1))

    @pytest.mark.parametrize("quarter", [0, 5])
    def test_invalid_quarter(self, quarter):
        with pytest.raises(ValueError, match="quarter"):
            quarter_window(2025, quarter)


class TestPayrollRegister:
    async def test_rows_sorted_by_display_name(self, pay_runs, reporting, make_employee, log_hours):
        turing = await make_employee(last_name="Turing", first_name="Alan")
        hopper = await make_employee(last_name="hopper", first_name="Grace")
        for employee in (turing, hopper):
            await log_hours(employee, 10)
        run = await paid_run(pay_runs, [turing, hopper], complete=False)

        rows = await reporting.payroll_register(run.pay_run_id)

        assert [r.employee_name for r in rows] == ["hopper, Grace", "Turing, Alan"]
        assert rows[0].gross_pay == Decimal("500.00")
        assert rows[0].to_dict()["employee_id"] == hopper.employee_id

    async def test_missing_pay_run(self, reporting):
        with pytest.raises(NotFoundError):
            await reporting.payroll_register(uuid4())

    async def test_empty_run(self, pay_runs, reporting):
        run = await pay_runs.create_pay_run(pay_run_data())

        assert await reporting.payroll_register(run.pay_run_id) == []


class TestQuarterlyTaxSummary:
    async def test_sums_completed_runs_in_quarter(
        self, pay_runs, reporting, make_employee, log_hours
    ):
        ada = await make_employee()
        grace = await make_employee(last_name="Hopper")
        await log_hours(ada, 40)
        await log_hours(grace, 40)

        await paid_run(pay_runs, [ada, grace], pay_date=date(2025, 1, 24))
        await paid_run(pay_runs, [ada], pay_date=date(2025, 3, 31))
        # Not completed, and outside the quarter
        await paid_run(pay_runs, [grace], pay_date=date(2025, 2, 7), complete=False)
        await paid_run(pay_runs, [grace], pay_date=date(2025, 4, 1))

        summary = await reporting.quarterly_tax_summary(2025, 1)

        assert summary.pay_run_count == 2
        assert summary.employee_count == 2
        assert summary.total_wages == Decimal("6000.00")
        assert summary.total_federal_tax == Decimal("1320.00")
        assert summary.total_state_tax == Decimal("558.00")
        assert summary.total_local_tax == Decimal("0")
        assert summary.total_fica_ss == Decimal("372.00")
        assert summary.total_fica_med == Decimal("87.00")
        # 3 checks of 2000: FUTA 12.00 each, SUTA 54.00 each
        assert summary.total_futa == Decimal("36.00")
        assert summary.total_suta == Decimal("162.00")

    async def test_voided_runs_are_excluded(self, pay_runs, reporting, make_employee, log_hours):
        ada = await make_employee()
        await log_hours(ada, 40)
        run = await paid_run(pay_runs, [ada])
        await pay_runs.void_pay_run(run.pay_run_id)

        summary = await reporting.quarterly_tax_summary(2025, 1)

        assert summary.pay_run_count == 0
        assert summary.total_wages == Decimal("0")

    async def test_invalid_quarter(self, reporting):
        with pytest.raises(ValueError):
            await reporting.quarterly_tax_summary(2025, 5)


class TestEarningsHistory:
    async def test_running_totals(self, pay_runs, reporting, make_employee, log_hours):
        ada = await make_employee()
        await log_hours(ada, 40)
        await paid_run(pay_runs, [ada])
        await paid_run(pay_runs, [ada], pay_date=date(2025, 1, 31))

        history = await reporting.employee_earnings_history(ada.employee_id)

        assert history.employee_name == "Lovelace, Ada"
        assert len(history.pay_checks) == 2
        assert history.total_gross == Decimal("4000.00")
        assert history.total_federal_tax == Decimal("880.00")
        assert history.total_fica_ss == Decimal("248.00")
        assert history.total_deductions == Decimal("0")
        assert history.total_net == Decimal("2442.00")

    async def test_employee_without_checks(self, reporting, make_employee):
        ada = await make_employee()

        history = await reporting.employee_earnings_history(ada.employee_id)

        assert history.pay_checks == []
        assert history.total_gross == Decimal("0")

    async def test_missing_employee(self, reporting):
        with pytest.raises(NotFoundError):
            await reporting.employee_earnings_history(uuid4())
