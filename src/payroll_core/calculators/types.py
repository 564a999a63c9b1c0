"""Type definitions for the gross-to-net pipeline.

The engine works on frozen snapshots rather than ORM rows so it stays free
of I/O; services build snapshots from records with the from_model helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from payroll_core.calculators.money import ZERO, to_decimal
from payroll_core.models.enums import CalcMethod, PayBasis, PayFrequency, TimeEntryPayType


@dataclass(frozen=True)
class PayPeriod:
    """Inclusive date window a pay check covers."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @classmethod
    def from_model(cls, pay_run: Any) -> PayPeriod:
        return cls(start=pay_run.period_start, end=pay_run.period_end)


@dataclass(frozen=True)
class EmployeeSnapshot:
    """Fields of an employee that affect pay."""

    employee_id: UUID
    pay_type: PayBasis
    pay_rate: Decimal
    pay_frequency: str
    state: str | None = None
    locality: str | None = None

    @classmethod
    def from_model(cls, employee: Any) -> EmployeeSnapshot:
        return cls(
            employee_id=employee.employee_id,
            pay_type=PayBasis(employee.pay_type),
            pay_rate=to_decimal(employee.pay_rate),
            pay_frequency=employee.pay_frequency,
            state=employee.state,
            locality=employee.city,
        )

    @property
    def periods_per_year(self) -> int:
        """Pay periods per year; 26 when the frequency is not recognized."""
        try:
            return PayFrequency(self.pay_frequency).periods_per_year
        except ValueError:
            return 26


@dataclass(frozen=True)
class TimeEntrySnapshot:
    """One approved-or-not block of hours."""

    work_date: date
    hours: Decimal
    pay_type: TimeEntryPayType
    approved: bool

    @classmethod
    def from_model(cls, entry: Any) -> TimeEntrySnapshot:
        return cls(
            work_date=entry.work_date,
            hours=to_decimal(entry.hours),
            pay_type=TimeEntryPayType(entry.pay_type),
            approved=bool(entry.approved),
        )


@dataclass(frozen=True)
class DeductionRule:
    """A configured deduction as the engine applies it."""

    code: str
    method: CalcMethod
    amount: Decimal
    max_per_period: Decimal | None = None

    @classmethod
    def from_model(cls, deduction: Any) -> DeductionRule:
        return cls(
            code=deduction.code,
            method=CalcMethod(deduction.method),
            amount=to_decimal(deduction.amount),
            max_per_period=(
                to_decimal(deduction.max_per_period)
                if deduction.max_per_period is not None
                else None
            ),
        )


@dataclass(frozen=True)
class TaxWithholding:
    """Employee-side tax components of one check."""

    federal: Decimal = ZERO
    state: Decimal = ZERO
    local: Decimal = ZERO
    social_security: Decimal = ZERO
    medicare: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.federal + self.state + self.local + self.social_security + self.medicare


@dataclass(frozen=True)
class CalculationResult:
    """Result of calculating one employee's pay check."""

    employee_id: UUID
    gross: Decimal
    taxes: TaxWithholding
    total_taxes: Decimal
    total_deductions: Decimal
    net: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal
    entries_used: int

    def to_pay_check_values(self) -> dict[str, Any]:
        """Column values for a PayCheck row."""
        return {
            "employee_id": self.employee_id,
            "gross_pay": self.gross,
            "federal_tax": self.taxes.federal,
            "state_tax": self.taxes.state,
            "local_tax": self.taxes.local,
            "fica_ss": self.taxes.social_security,
            "fica_med": self.taxes.medicare,
            "total_deductions": self.total_deductions,
            "net_pay": self.net,
            "hours": self.regular_hours,
            "overtime_hours": self.overtime_hours,
        }
