"""Pay run and pay check models."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_core.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from payroll_core.models.employee import Employee

MONEY = Numeric(14, 2)


class PayRun(Base, TimestampMixin):
    """A payroll batch for one period.

    Totals are accumulated as pay checks are added and are never edited
    independently.
    """

    __tablename__ = "pay_run"

    pay_run_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)
    pay_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="draft")
    total_gross: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    total_net: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    total_taxes: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    total_deductions: Mapped[Decimal] = mapped_column(
        MONEY, nullable=False, default=Decimal("0")
    )
    employee_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    entity_id: Mapped[str | None] = mapped_column(String, nullable=True)
    processed_at: Mapped[datetime | None] = mapped_column(nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(nullable=True)
    voided_at: Mapped[datetime | None] = mapped_column(nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'processing', 'completed', 'voided')",
            name="pay_run_status_check",
        ),
        CheckConstraint("period_end >= period_start", name="pay_run_period_check"),
    )

    # Relationships
    pay_checks: Mapped[list[PayCheck]] = relationship(back_populates="pay_run")


class PayCheck(Base, TimestampMixin):
    """One employee's computed result within a pay run. Immutable once created."""

    __tablename__ = "pay_check"

    pay_check_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    pay_run_id: Mapped[UUID] = mapped_column(
        ForeignKey("pay_run.pay_run_id", ondelete="RESTRICT"),
        nullable=False,
    )
    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employee.employee_id", ondelete="RESTRICT"),
        nullable=False,
    )
    gross_pay: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    federal_tax: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    state_tax: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    local_tax: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    fica_ss: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    fica_med: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    total_deductions: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    net_pay: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    hours: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False, default=Decimal("0"))
    overtime_hours: Mapped[Decimal] = mapped_column(
        Numeric(8, 2), nullable=False, default=Decimal("0")
    )

    __table_args__ = (
        UniqueConstraint("pay_run_id", "employee_id", name="pay_check_run_employee_unique"),
    )

    # Relationships
    pay_run: Mapped[PayRun] = relationship(back_populates="pay_checks")
    employee: Mapped[Employee] = relationship(back_populates="pay_checks")

    @property
    def total_taxes(self) -> Decimal:
        return self.federal_tax + self.state_tax + self.local_tax + self.fica_ss + self.fica_med
