"""Payroll calculation engine - gross to net for one employee."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from payroll_core.calculators.money import ZERO, round_cents
from payroll_core.calculators.tax_calculator import TaxCalculator
from payroll_core.calculators.types import (
    CalculationResult,
    DeductionRule,
    EmployeeSnapshot,
    PayPeriod,
    TimeEntrySnapshot,
)
from payroll_core.models.enums import CalcMethod, PayBasis, TimeEntryPayType


class PayrollEngine:
    """Main payroll calculation engine.

    Calculation pipeline (stable order per employee):
    1) Keep approved time entries inside the period
    2) Gross = sum of hours x rate x pay-type multiplier
    3) Salaried fallback when there are no entries
    4) Employee taxes (federal, state, local, Social Security, Medicare)
    5) Deductions (every configured deduction applies to every check)
    6) Net = gross - taxes - deductions

    The engine performs no I/O and holds no state between calls.
    """

    def __init__(self, tax_calculator: TaxCalculator | None = None):
        self.tax_calculator = tax_calculator or TaxCalculator()

    def calculate(
        self,
        period: PayPeriod,
        employee: EmployeeSnapshot,
        time_entries: Iterable[TimeEntrySnapshot],
        deductions: Iterable[DeductionRule] = (),
    ) -> CalculationResult:
        """Calculate one pay check."""
        entries = [e for e in time_entries if e.approved and period.contains(e.work_date)]

        gross = ZERO
        regular_hours = ZERO
        overtime_hours = ZERO

        for entry in entries:
            gross = round_cents(gross + self.entry_amount(entry, employee.pay_rate))

            if entry.pay_type == TimeEntryPayType.REGULAR:
                regular_hours = round_cents(regular_hours + entry.hours)
            elif entry.pay_type.is_overtime:
                overtime_hours = round_cents(overtime_hours + entry.hours)

        if not entries and employee.pay_type == PayBasis.SALARY:
            gross = self.salary_gross(employee)

        taxes = self.tax_calculator.withhold(gross, employee)
        total_taxes = round_cents(taxes.total)
        total_deductions = self.total_deductions(gross, deductions)
        net = round_cents(gross - total_taxes - total_deductions)

        return CalculationResult(
            employee_id=employee.employee_id,
            gross=gross,
            taxes=taxes,
            total_taxes=total_taxes,
            total_deductions=total_deductions,
            net=net,
            regular_hours=regular_hours,
            overtime_hours=overtime_hours,
            entries_used=len(entries),
        )

    @staticmethod
    def entry_amount(entry: TimeEntrySnapshot, pay_rate: Decimal) -> Decimal:
        """Pay for one time entry."""
        return round_cents(entry.hours * pay_rate * entry.pay_type.multiplier)

    @staticmethod
    def salary_gross(employee: EmployeeSnapshot) -> Decimal:
        """One period's share of an annual salary."""
        return round_cents(employee.pay_rate / employee.periods_per_year)

    @staticmethod
    def deduction_amount(gross: Decimal, rule: DeductionRule) -> Decimal:
        """Amount withheld for one deduction, capped per period if configured."""
        if rule.method == CalcMethod.FLAT:
            amount = rule.amount
        else:
            amount = round_cents(gross * (rule.amount / Decimal("100")))

        if rule.max_per_period is not None:
            amount = min(amount, rule.max_per_period)
        return amount

    def total_deductions(self, gross: Decimal, deductions: Iterable[DeductionRule]) -> Decimal:
        total = ZERO
        for rule in deductions:
            total = round_cents(total + self.deduction_amount(gross, rule))
        return total
