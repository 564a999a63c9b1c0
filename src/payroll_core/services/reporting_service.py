"""Reporting - payroll register, quarterly tax summary, employee earnings history.

All reports are read-only aggregations over pay check records.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from payroll_core.calculators import TaxCalculator
from payroll_core.calculators.money import ZERO, round_cents
from payroll_core.errors import NotFoundError
from payroll_core.models import Employee, PayCheck, PayRun
from payroll_core.services.state_machine import PayRunStatus
from payroll_core.store import RecordStore


@dataclass(frozen=True)
class PayrollRegisterRow:
    """One line of a payroll register."""

    pay_check_id: UUID
    employee_id: UUID
    employee_name: str
    gross_pay: Decimal
    federal_tax: Decimal
    state_tax: Decimal
    local_tax: Decimal
    fica_ss: Decimal
    fica_med: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    hours: Decimal
    overtime_hours: Decimal

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class QuarterlyTaxSummary:
    """Tax totals for completed pay runs paid within one calendar quarter."""

    year: int
    quarter: int
    period_start: date
    period_end: date  # exclusive
    total_wages: Decimal = ZERO
    total_federal_tax: Decimal = ZERO
    total_state_tax: Decimal = ZERO
    total_local_tax: Decimal = ZERO
    total_fica_ss: Decimal = ZERO
    total_fica_med: Decimal = ZERO
    total_futa: Decimal = ZERO
    total_suta: Decimal = ZERO
    employee_count: int = 0
    pay_run_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class EmployeeEarningsHistory:
    """Every pay check for one employee with lifetime totals."""

    employee_id: UUID
    employee_name: str
    total_gross: Decimal = ZERO
    total_federal_tax: Decimal = ZERO
    total_state_tax: Decimal = ZERO
    total_local_tax: Decimal = ZERO
    total_fica_ss: Decimal = ZERO
    total_fica_med: Decimal = ZERO
    total_deductions: Decimal = ZERO
    total_net: Decimal = ZERO
    pay_checks: list[PayCheck] = field(default_factory=list)


def quarter_window(year: int, quarter: int) -> tuple[date, date]:
    """Half-open [start, end) date window of a calendar quarter."""
    if quarter not in (1, 2, 3, 4):
        raise ValueError(f"quarter must be 1-4, got {quarter}")
    start = date(year, (quarter - 1) * 3 + 1, 1)
    end = date(year + 1, 1, 1) if quarter == 4 else date(year, quarter * 3 + 1, 1)
    return start, end


class ReportingService:
    """Read-only payroll reports."""

    def __init__(self, session: AsyncSession, tax_calculator: TaxCalculator | None = None):
        self.session = session
        self.tax_calculator = tax_calculator or TaxCalculator()
        self.pay_runs = RecordStore(session, PayRun, label="PayRun")
        self.pay_checks = RecordStore(session, PayCheck, label="PayCheck")
        self.employees = RecordStore(session, Employee)

    async def payroll_register(self, pay_run_id: UUID) -> list[PayrollRegisterRow]:
        """Every check in a pay run with the employee's name, sorted by name."""
        if await self.pay_runs.get(pay_run_id) is None:
            raise NotFoundError("PayRun", pay_run_id)

        checks = await self.pay_checks.query().where("pay_run_id", "=", pay_run_id).execute()

        rows = []
        for check in checks:
            employee = await self.employees.get(check.employee_id)
            name = employee.display_name if employee else str(check.employee_id)
            rows.append(
                PayrollRegisterRow(
                    pay_check_id=check.pay_check_id,
                    employee_id=check.employee_id,
                    employee_name=name,
                    gross_pay=check.gross_pay,
                    federal_tax=check.federal_tax,
                    state_tax=check.state_tax,
                    local_tax=check.local_tax,
                    fica_ss=check.fica_ss,
                    fica_med=check.fica_med,
                    total_deductions=check.total_deductions,
                    net_pay=check.net_pay,
                    hours=check.hours,
                    overtime_hours=check.overtime_hours,
                )
            )

        rows.sort(key=lambda row: row.employee_name.casefold())
        return rows

    async def quarterly_tax_summary(self, year: int, quarter: int) -> QuarterlyTaxSummary:
        """Sum taxes over completed runs whose pay date falls in the quarter.

        FUTA and SUTA are recomputed from each check's gross.
        """
        start, end = quarter_window(year, quarter)

        runs = await (
            self.pay_runs.query()
            .where("status", "=", PayRunStatus.COMPLETED.value)
            .where("pay_date", ">=", start)
            .where("pay_date", "<", end)
            .execute()
        )

        totals = dict.fromkeys(
            ("wages", "federal", "state", "local", "fica_ss", "fica_med", "futa", "suta"), ZERO
        )
        employees: set[UUID] = set()

        for run in runs:
            checks = await (
                self.pay_checks.query().where("pay_run_id", "=", run.pay_run_id).execute()
            )
            for check in checks:
                gross = check.gross_pay
                totals["wages"] = round_cents(totals["wages"] + gross)
                totals["federal"] = round_cents(totals["federal"] + check.federal_tax)
                totals["state"] = round_cents(totals["state"] + check.state_tax)
                totals["local"] = round_cents(totals["local"] + check.local_tax)
                totals["fica_ss"] = round_cents(totals["fica_ss"] + check.fica_ss)
                totals["fica_med"] = round_cents(totals["fica_med"] + check.fica_med)
                totals["futa"] = round_cents(totals["futa"] + self.tax_calculator.futa(gross))
                totals["suta"] = round_cents(totals["suta"] + self.tax_calculator.suta(gross))
                employees.add(check.employee_id)

        return QuarterlyTaxSummary(
            year=year,
            quarter=quarter,
            period_start=start,
            period_end=end,
            total_wages=totals["wages"],
            total_federal_tax=totals["federal"],
            total_state_tax=totals["state"],
            total_local_tax=totals["local"],
            total_fica_ss=totals["fica_ss"],
            total_fica_med=totals["fica_med"],
            total_futa=totals["futa"],
            total_suta=totals["suta"],
            employee_count=len(employees),
            pay_run_count=len(runs),
        )

    async def employee_earnings_history(self, employee_id: UUID) -> EmployeeEarningsHistory:
        """All of an employee's checks with running totals."""
        employee = await self.employees.get(employee_id)
        if employee is None:
            raise NotFoundError("Employee", employee_id)

        checks = await (
            self.pay_checks.query()
            .where("employee_id", "=", employee_id)
            .order_by("created_at")
            .execute()
        )

        gross = federal = state = local = fica_ss = fica_med = deductions = net = ZERO
        for check in checks:
            gross = round_cents(gross + check.gross_pay)
            federal = round_cents(federal + check.federal_tax)
            state = round_cents(state + check.state_tax)
            local = round_cents(local + check.local_tax)
            fica_ss = round_cents(fica_ss + check.fica_ss)
            fica_med = round_cents(fica_med + check.fica_med)
            deductions = round_cents(deductions + check.total_deductions)
            net = round_cents(net + check.net_pay)

        return EmployeeEarningsHistory(
            employee_id=employee_id,
            employee_name=employee.display_name,
            total_gross=gross,
            total_federal_tax=federal,
            total_state_tax=state,
            total_local_tax=local,
            total_fica_ss=fica_ss,
            total_fica_med=fica_med,
            total_deductions=deductions,
            total_net=net,
            pay_checks=checks,
        )
