"""Earning, deduction, benefit, tax and workers' comp configuration models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import Boolean, Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from payroll_core.models.base import Base, TimestampMixin
from payroll_core.models.payroll import MONEY


class Earning(Base, TimestampMixin):
    """Earning type configuration."""

    __tablename__ = "earning"

    earning_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    code: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    earning_type: Mapped[str] = mapped_column(String, nullable=False)
    multiplier: Mapped[Decimal] = mapped_column(
        Numeric(6, 4), nullable=False, default=Decimal("1.0")
    )
    is_taxable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_overtime: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class Deduction(Base, TimestampMixin):
    """Deduction configuration. Applied to every computed pay check."""

    __tablename__ = "deduction"

    deduction_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    code: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    deduction_type: Mapped[str] = mapped_column(String, nullable=False)
    method: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    max_per_period: Mapped[Decimal | None] = mapped_column(MONEY, nullable=True)
    max_per_year: Mapped[Decimal | None] = mapped_column(MONEY, nullable=True)


class Benefit(Base, TimestampMixin):
    """Benefit plan configuration."""

    __tablename__ = "benefit"

    benefit_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    code: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    benefit_type: Mapped[str] = mapped_column(String, nullable=False)
    employee_contribution: Mapped[Decimal] = mapped_column(
        MONEY, nullable=False, default=Decimal("0")
    )
    employer_contribution: Mapped[Decimal] = mapped_column(
        MONEY, nullable=False, default=Decimal("0")
    )
    method: Mapped[str] = mapped_column(String, nullable=False)


class TaxTable(Base, TimestampMixin):
    """Jurisdiction-scoped tax rate, informational only.

    Withholding uses the built-in constants in the tax calculator.
    """

    __tablename__ = "tax_table"

    tax_table_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    jurisdiction: Mapped[str] = mapped_column(String, nullable=False)
    state: Mapped[str | None] = mapped_column(String, nullable=True)
    locality: Mapped[str | None] = mapped_column(String, nullable=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    tax_type: Mapped[str] = mapped_column(String, nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(10, 6), nullable=False)
    wage_base: Mapped[Decimal | None] = mapped_column(MONEY, nullable=True)
    filing_status: Mapped[str | None] = mapped_column(String, nullable=True)


class TaxFiling(Base, TimestampMixin):
    """Administrative record of a 941/940/W-2/state quarterly filing."""

    __tablename__ = "tax_filing"

    tax_filing_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    filing_type: Mapped[str] = mapped_column(String, nullable=False)
    period: Mapped[str] = mapped_column(String, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    quarter: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="draft")
    total_wages: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    total_tax: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)


class WorkerComp(Base, TimestampMixin):
    """Workers' compensation class code with its rate per $100 of payroll."""

    __tablename__ = "worker_comp"

    worker_comp_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    class_code: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    rate: Mapped[Decimal] = mapped_column(Numeric(10, 4), nullable=False)
    state_code: Mapped[str | None] = mapped_column(String, nullable=True)
    effective_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    expiration_date: Mapped[date | None] = mapped_column(Date, nullable=True)
