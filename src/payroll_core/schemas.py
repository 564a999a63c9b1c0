"""Pydantic schemas for service inputs and API responses."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from payroll_core.models.enums import (
    BenefitType,
    CalcMethod,
    DeductionType,
    EarningType,
    EmployeeStatus,
    PayBasis,
    PayFrequency,
    TaxFilingStatus,
    TaxFilingType,
    TaxJurisdiction,
    TaxType,
    TimeEntryPayType,
)


class InputBase(BaseModel):
    """Base for create/update payloads. Enums are stored by value."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True, extra="forbid")


class UpdateBase(InputBase):
    """Base for partial updates; only provided fields change.

    Fields listed in `required_fields` may be omitted but not set to null.
    """

    required_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _required_fields_not_null(self) -> UpdateBase:
        nulled = sorted(
            name
            for name in self.model_fields_set & set(self.required_fields)
            if getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"{', '.join(nulled)} cannot be null")
        return self


class ResponseBase(BaseModel):
    """Base for responses built from ORM records."""

    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# Employee schemas
# ============================================================================


class EmployeeCreate(InputBase):
    """Schema for registering an employee."""

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    middle_name: str | None = None
    ssn: str = Field(min_length=1)
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    hire_date: date
    termination_date: date | None = None
    department: str | None = None
    job_title: str | None = None
    pay_type: PayBasis
    pay_rate: Decimal = Field(ge=0)
    pay_frequency: PayFrequency
    federal_filing_status: str | None = None
    state_filing_status: str | None = None
    allowances: int = Field(default=0, ge=0)
    entity_id: str | None = None
    union_id: str | None = None
    wc_class_code: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone: str | None = None
    email: str | None = None
    emergency_contact: str | None = None


class EmployeeUpdate(UpdateBase):
    """Schema for HR updates."""

    required_fields = (
        "first_name",
        "last_name",
        "ssn",
        "status",
        "hire_date",
        "pay_type",
        "pay_rate",
        "pay_frequency",
        "allowances",
    )

    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    ssn: str | None = None
    status: EmployeeStatus | None = None
    hire_date: date | None = None
    termination_date: date | None = None
    department: str | None = None
    job_title: str | None = None
    pay_type: PayBasis | None = None
    pay_rate: Decimal | None = Field(default=None, ge=0)
    pay_frequency: PayFrequency | None = None
    federal_filing_status: str | None = None
    state_filing_status: str | None = None
    allowances: int | None = Field(default=None, ge=0)
    entity_id: str | None = None
    union_id: str | None = None
    wc_class_code: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone: str | None = None
    email: str | None = None
    emergency_contact: str | None = None


class EmployeeResponse(ResponseBase):
    """Schema for employee response. The SSN is never returned."""

    employee_id: UUID
    first_name: str
    last_name: str
    middle_name: str | None = None
    status: str
    hire_date: date
    termination_date: date | None = None
    department: str | None = None
    job_title: str | None = None
    pay_type: str
    pay_rate: Decimal
    pay_frequency: str
    entity_id: str | None = None
    wc_class_code: str | None = None
    state: str | None = None


# ============================================================================
# Time entry schemas
# ============================================================================


class TimeEntryCreate(InputBase):
    """Schema for recording hours."""

    employee_id: UUID
    job_id: str | None = None
    cost_code_id: str | None = None
    work_date: date
    hours: Decimal = Field(gt=0)
    pay_type: TimeEntryPayType = TimeEntryPayType.REGULAR
    work_classification: str | None = None
    description: str | None = None


class TimeEntryUpdate(UpdateBase):
    """Schema for correcting an unapproved time entry."""

    required_fields = ("work_date", "hours", "pay_type")

    job_id: str | None = None
    cost_code_id: str | None = None
    work_date: date | None = None
    hours: Decimal | None = Field(default=None, gt=0)
    pay_type: TimeEntryPayType | None = None
    work_classification: str | None = None
    description: str | None = None


class TimeEntryApproval(InputBase):
    """Schema for approving a time entry."""

    approved_by: str = Field(min_length=1)


class TimeEntryResponse(ResponseBase):
    """Schema for time entry response."""

    time_entry_id: UUID
    employee_id: UUID
    job_id: str | None = None
    cost_code_id: str | None = None
    work_date: date
    hours: Decimal
    pay_type: str
    description: str | None = None
    approved: bool
    approved_by: str | None = None
    approved_at: datetime | None = None


# ============================================================================
# Pay run schemas
# ============================================================================


class PayRunCreate(InputBase):
    """Schema for creating a new pay run."""

    period_start: date
    period_end: date
    pay_date: date
    entity_id: str | None = None

    @model_validator(mode="after")
    def _period_is_ordered(self) -> PayRunCreate:
        if self.period_end < self.period_start:
            raise ValueError("period_end must not be before period_start")
        return self


class PayRunResponse(ResponseBase):
    """Schema for pay run response."""

    pay_run_id: UUID
    period_start: date
    period_end: date
    pay_date: date
    status: str
    total_gross: Decimal
    total_net: Decimal
    total_taxes: Decimal
    total_deductions: Decimal
    employee_count: int
    entity_id: str | None = None
    processed_at: datetime | None = None
    completed_at: datetime | None = None
    voided_at: datetime | None = None


class PayCheckCreate(InputBase):
    """Schema for adding an employee's check to a pay run."""

    employee_id: UUID


class PayCheckResponse(ResponseBase):
    """Schema for pay check response."""

    pay_check_id: UUID
    pay_run_id: UUID
    employee_id: UUID
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


# ============================================================================
# Configuration schemas
# ============================================================================


class EarningCreate(InputBase):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    earning_type: EarningType
    multiplier: Decimal = Field(default=Decimal("1.0"), ge=0)
    is_taxable: bool = True
    is_overtime: bool = False


class EarningUpdate(UpdateBase):
    required_fields = ("name", "earning_type", "multiplier", "is_taxable", "is_overtime")

    name: str | None = None
    earning_type: EarningType | None = None
    multiplier: Decimal | None = Field(default=None, ge=0)
    is_taxable: bool | None = None
    is_overtime: bool | None = None


class EarningResponse(ResponseBase):
    earning_id: UUID
    name: str
    code: str
    earning_type: str
    multiplier: Decimal
    is_taxable: bool
    is_overtime: bool


class DeductionCreate(InputBase):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    deduction_type: DeductionType
    method: CalcMethod
    amount: Decimal = Field(ge=0)
    max_per_period: Decimal | None = Field(default=None, ge=0)
    max_per_year: Decimal | None = Field(default=None, ge=0)


class DeductionUpdate(UpdateBase):
    required_fields = ("name", "deduction_type", "method", "amount")

    name: str | None = None
    deduction_type: DeductionType | None = None
    method: CalcMethod | None = None
    amount: Decimal | None = Field(default=None, ge=0)
    max_per_period: Decimal | None = Field(default=None, ge=0)
    max_per_year: Decimal | None = Field(default=None, ge=0)


class DeductionResponse(ResponseBase):
    deduction_id: UUID
    name: str
    code: str
    deduction_type: str
    method: str
    amount: Decimal
    max_per_period: Decimal | None = None
    max_per_year: Decimal | None = None


class BenefitCreate(InputBase):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    benefit_type: BenefitType
    employee_contribution: Decimal = Field(default=Decimal("0"), ge=0)
    employer_contribution: Decimal = Field(default=Decimal("0"), ge=0)
    method: CalcMethod


class BenefitUpdate(UpdateBase):
    required_fields = (
        "name",
        "benefit_type",
        "employee_contribution",
        "employer_contribution",
        "method",
    )

    name: str | None = None
    benefit_type: BenefitType | None = None
    employee_contribution: Decimal | None = Field(default=None, ge=0)
    employer_contribution: Decimal | None = Field(default=None, ge=0)
    method: CalcMethod | None = None


class BenefitResponse(ResponseBase):
    benefit_id: UUID
    name: str
    code: str
    benefit_type: str
    employee_contribution: Decimal
    employer_contribution: Decimal
    method: str


class TaxTableCreate(InputBase):
    jurisdiction: TaxJurisdiction
    state: str | None = None
    locality: str | None = None
    year: int
    tax_type: TaxType
    rate: Decimal = Field(ge=0)
    wage_base: Decimal | None = Field(default=None, ge=0)
    filing_status: str | None = None


class TaxTableUpdate(UpdateBase):
    required_fields = ("jurisdiction", "year", "tax_type", "rate")

    jurisdiction: TaxJurisdiction | None = None
    state: str | None = None
    locality: str | None = None
    year: int | None = None
    tax_type: TaxType | None = None
    rate: Decimal | None = Field(default=None, ge=0)
    wage_base: Decimal | None = Field(default=None, ge=0)
    filing_status: str | None = None


class TaxTableResponse(ResponseBase):
    tax_table_id: UUID
    jurisdiction: str
    state: str | None = None
    locality: str | None = None
    year: int
    tax_type: str
    rate: Decimal
    wage_base: Decimal | None = None
    filing_status: str | None = None


class TaxFilingCreate(InputBase):
    filing_type: TaxFilingType
    period: str = Field(min_length=1)
    year: int
    quarter: int | None = Field(default=None, ge=1, le=4)
    status: TaxFilingStatus = TaxFilingStatus.DRAFT
    total_wages: Decimal = Decimal("0")
    total_tax: Decimal = Decimal("0")
    due_date: date | None = None


class TaxFilingUpdate(UpdateBase):
    required_fields = ("period", "status", "total_wages", "total_tax")

    period: str | None = None
    quarter: int | None = Field(default=None, ge=1, le=4)
    status: TaxFilingStatus | None = None
    total_wages: Decimal | None = None
    total_tax: Decimal | None = None
    due_date: date | None = None


class TaxFilingResponse(ResponseBase):
    tax_filing_id: UUID
    filing_type: str
    period: str
    year: int
    quarter: int | None = None
    status: str
    total_wages: Decimal
    total_tax: Decimal
    due_date: date | None = None


class WorkerCompCreate(InputBase):
    class_code: str = Field(min_length=1)
    description: str | None = None
    rate: Decimal = Field(ge=0)
    state_code: str | None = None
    effective_date: date | None = None
    expiration_date: date | None = None


class WorkerCompUpdate(UpdateBase):
    required_fields = ("rate",)

    description: str | None = None
    rate: Decimal | None = Field(default=None, ge=0)
    state_code: str | None = None
    effective_date: date | None = None
    expiration_date: date | None = None


class WorkerCompResponse(ResponseBase):
    worker_comp_id: UUID
    class_code: str
    description: str | None = None
    rate: Decimal
    state_code: str | None = None
    effective_date: date | None = None
    expiration_date: date | None = None


# ============================================================================
# Report schemas
# ============================================================================


class PayrollRegisterRowResponse(ResponseBase):
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


class QuarterlyTaxSummaryResponse(ResponseBase):
    """Quarter tax totals. period_end is exclusive."""

    year: int
    quarter: int
    period_start: date
    period_end: date
    total_wages: Decimal
    total_federal_tax: Decimal
    total_state_tax: Decimal
    total_local_tax: Decimal
    total_fica_ss: Decimal
    total_fica_med: Decimal
    total_futa: Decimal
    total_suta: Decimal
    employee_count: int
    pay_run_count: int


class EmployeeEarningsHistoryResponse(ResponseBase):
    employee_id: UUID
    employee_name: str
    total_gross: Decimal
    total_federal_tax: Decimal
    total_state_tax: Decimal
    total_local_tax: Decimal
    total_fica_ss: Decimal
    total_fica_med: Decimal
    total_deductions: Decimal
    total_net: Decimal
    pay_checks: list[PayCheckResponse]


class WcPremiumResponse(BaseModel):
    employee_id: UUID
    gross: Decimal
    premium: Decimal


# ============================================================================
# Error schema
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str
    code: str
