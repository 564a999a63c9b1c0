"""Employee and time entry models."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_core.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from payroll_core.models.payroll import PayCheck


class Employee(Base, TimestampMixin):
    """Employee record."""

    __tablename__ = "employee"

    employee_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String, nullable=True)
    ssn: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="active")
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    termination_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    department: Mapped[str | None] = mapped_column(String, nullable=True)
    job_title: Mapped[str | None] = mapped_column(String, nullable=True)
    pay_type: Mapped[str] = mapped_column(String, nullable=False)
    pay_rate: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    pay_frequency: Mapped[str] = mapped_column(String, nullable=False)
    federal_filing_status: Mapped[str | None] = mapped_column(String, nullable=True)
    state_filing_status: Mapped[str | None] = mapped_column(String, nullable=True)
    allowances: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    entity_id: Mapped[str | None] = mapped_column(String, nullable=True)
    union_id: Mapped[str | None] = mapped_column(String, nullable=True)
    wc_class_code: Mapped[str | None] = mapped_column(String, nullable=True)
    address: Mapped[str | None] = mapped_column(String, nullable=True)
    city: Mapped[str | None] = mapped_column(String, nullable=True)
    state: Mapped[str | None] = mapped_column(String, nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String, nullable=True)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    email: Mapped[str | None] = mapped_column(String, nullable=True)
    emergency_contact: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'inactive', 'terminated')",
            name="employee_status_check",
        ),
        CheckConstraint("pay_type IN ('hourly', 'salary')", name="employee_pay_type_check"),
    )

    # Relationships
    time_entries: Mapped[list[TimeEntry]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
    )
    pay_checks: Mapped[list[PayCheck]] = relationship(
        back_populates="employee",
        passive_deletes="all",
    )

    @property
    def display_name(self) -> str:
        """Name as shown on registers: "Last, First"."""
        return f"{self.last_name}, {self.first_name}"


class TimeEntry(Base, TimestampMixin):
    """Hours worked by an employee on one date."""

    __tablename__ = "time_entry"

    time_entry_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    job_id: Mapped[str | None] = mapped_column(String, nullable=True)
    cost_code_id: Mapped[str | None] = mapped_column(String, nullable=True)
    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    hours: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    pay_type: Mapped[str] = mapped_column(String, nullable=False, default="regular")
    work_classification: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    approved_by: Mapped[str | None] = mapped_column(String, nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(nullable=True)

    __table_args__ = (
        CheckConstraint(
            "pay_type IN ('regular', 'overtime', 'doubletime', 'premium', 'perdiem')",
            name="time_entry_pay_type_check",
        ),
    )

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="time_entries")
