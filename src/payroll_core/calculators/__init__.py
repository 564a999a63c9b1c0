"""Gross-to-net calculation."""

from payroll_core.calculators.engine import PayrollEngine
from payroll_core.calculators.tax_calculator import TaxCalculator
from payroll_core.calculators.types import (
    CalculationResult,
    DeductionRule,
    EmployeeSnapshot,
    PayPeriod,
    TaxWithholding,
    TimeEntrySnapshot,
)

__all__ = [
    "PayrollEngine",
    "TaxCalculator",
    "CalculationResult",
    "DeductionRule",
    "EmployeeSnapshot",
    "PayPeriod",
    "TaxWithholding",
    "TimeEntrySnapshot",
]
