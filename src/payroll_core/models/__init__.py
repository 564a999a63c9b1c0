"""ORM models for payroll records."""

from payroll_core.models.base import Base, TimestampMixin
from payroll_core.models.configuration import (
    Benefit,
    Deduction,
    Earning,
    TaxFiling,
    TaxTable,
    WorkerComp,
)
from payroll_core.models.employee import Employee, TimeEntry
from payroll_core.models.payroll import PayCheck, PayRun

__all__ = [
    "Base",
    "TimestampMixin",
    "Employee",
    "TimeEntry",
    "PayRun",
    "PayCheck",
    "Earning",
    "Deduction",
    "Benefit",
    "TaxTable",
    "TaxFiling",
    "WorkerComp",
]
