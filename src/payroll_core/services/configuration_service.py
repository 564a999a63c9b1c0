"""Configuration registry - earnings, deductions, benefits, tax and workers' comp records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_core.calculators.money import ZERO, round_cents, round_optional, to_decimal
from payroll_core.errors import NotFoundError, UniquenessViolationError
from payroll_core.models import (
    Base,
    Benefit,
    Deduction,
    Earning,
    Employee,
    TaxFiling,
    TaxTable,
    WorkerComp,
)
from payroll_core.schemas import (
    BenefitCreate,
    BenefitUpdate,
    DeductionCreate,
    DeductionUpdate,
    EarningCreate,
    EarningUpdate,
    TaxFilingCreate,
    TaxFilingUpdate,
    TaxTableCreate,
    TaxTableUpdate,
    WorkerCompCreate,
    WorkerCompUpdate,
)
from payroll_core.store import RecordStore

ModelT = TypeVar("ModelT", bound=Base)

# Fields rounded to the cent on every write
MONEY_FIELDS: dict[type[Base], tuple[str, ...]] = {
    Earning: (),
    Deduction: ("amount", "max_per_period", "max_per_year"),
    Benefit: ("employee_contribution", "employer_contribution"),
    TaxTable: ("wage_base",),
    TaxFiling: ("total_wages", "total_tax"),
    WorkerComp: (),
}


class ConfigurationService:
    """CRUD over the configuration records.

    Earning, Deduction and Benefit records are keyed by a unique code.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.earnings = RecordStore(session, Earning)
        self.deductions = RecordStore(session, Deduction)
        self.benefits = RecordStore(session, Benefit)
        self.tax_tables = RecordStore(session, TaxTable, label="TaxTable")
        self.tax_filings = RecordStore(session, TaxFiling, label="TaxFiling")
        self.worker_comps = RecordStore(session, WorkerComp, label="WorkerComp")
        self.employees = RecordStore(session, Employee)

    # ------------------------------------------------------------------
    # Shared plumbing
    # ------------------------------------------------------------------

    async def _create(
        self,
        store: RecordStore[ModelT],
        data: BaseModel,
        unique_code: bool = False,
    ) -> ModelT:
        values = _round_money(store.model, data.model_dump())
        if unique_code:
            existing = await store.query().where("code", "=", values["code"]).first()
            if existing is not None:
                raise UniquenessViolationError(store.label, "code", values["code"])
        return await store.insert(values)

    async def _update(self, store: RecordStore[ModelT], record_id: UUID, data: BaseModel) -> ModelT:
        changes = _round_money(store.model, data.model_dump(exclude_unset=True))
        return await store.update(record_id, changes)

    async def _get(self, store: RecordStore[ModelT], record_id: UUID) -> ModelT:
        record = await store.get(record_id)
        if record is None:
            raise NotFoundError(store.label, record_id)
        return record

    async def _list(
        self,
        store: RecordStore[ModelT],
        order_by: Iterable[str],
        filters: Mapping[str, Any] | None = None,
    ) -> list[ModelT]:
        query = store.query()
        for field, value in (filters or {}).items():
            if value is not None:
                query = query.where(field, "=", value)
        for field in order_by:
            query = query.order_by(field)
        return await query.execute()

    # ------------------------------------------------------------------
    # Earnings
    # ------------------------------------------------------------------

    async def create_earning(self, data: EarningCreate) -> Earning:
        return await self._create(self.earnings, data, unique_code=True)

    async def update_earning(self, earning_id: UUID, data: EarningUpdate) -> Earning:
        return await self._update(self.earnings, earning_id, data)

    async def get_earning(self, earning_id: UUID) -> Earning:
        return await self._get(self.earnings, earning_id)

    async def list_earnings(self) -> list[Earning]:
        return await self._list(self.earnings, ["code"])

    async def delete_earning(self, earning_id: UUID) -> None:
        await self.earnings.remove(earning_id)

    # ------------------------------------------------------------------
    # Deductions
    # ------------------------------------------------------------------

    async def create_deduction(self, data: DeductionCreate) -> Deduction:
        return await self._create(self.deductions, data, unique_code=True)

    async def update_deduction(self, deduction_id: UUID, data: DeductionUpdate) -> Deduction:
        return await self._update(self.deductions, deduction_id, data)

    async def get_deduction(self, deduction_id: UUID) -> Deduction:
        return await self._get(self.deductions, deduction_id)

    async def list_deductions(self) -> list[Deduction]:
        return await self._list(self.deductions, ["code"])

    async def delete_deduction(self, deduction_id: UUID) -> None:
        await self.deductions.remove(deduction_id)

    # ------------------------------------------------------------------
    # Benefits
    # ------------------------------------------------------------------

    async def create_benefit(self, data: BenefitCreate) -> Benefit:
        return await self._create(self.benefits, data, unique_code=True)

    async def update_benefit(self, benefit_id: UUID, data: BenefitUpdate) -> Benefit:
        return await self._update(self.benefits, benefit_id, data)

    async def get_benefit(self, benefit_id: UUID) -> Benefit:
        return await self._get(self.benefits, benefit_id)

    async def list_benefits(self) -> list[Benefit]:
        return await self._list(self.benefits, ["code"])

    async def delete_benefit(self, benefit_id: UUID) -> None:
        await self.benefits.remove(benefit_id)

    # ------------------------------------------------------------------
    # Tax tables
    # ------------------------------------------------------------------

    async def create_tax_table(self, data: TaxTableCreate) -> TaxTable:
        return await self._create(self.tax_tables, data)

    async def update_tax_table(self, tax_table_id: UUID, data: TaxTableUpdate) -> TaxTable:
        return await self._update(self.tax_tables, tax_table_id, data)

    async def get_tax_table(self, tax_table_id: UUID) -> TaxTable:
        return await self._get(self.tax_tables, tax_table_id)

    async def list_tax_tables(
        self,
        jurisdiction: str | None = None,
        state: str | None = None,
        year: int | None = None,
        tax_type: str | None = None,
    ) -> list[TaxTable]:
        return await self._list(
            self.tax_tables,
            ["year", "jurisdiction", "tax_type"],
            {"jurisdiction": jurisdiction, "state": state, "year": year, "tax_type": tax_type},
        )

    async def delete_tax_table(self, tax_table_id: UUID) -> None:
        await self.tax_tables.remove(tax_table_id)

    # ------------------------------------------------------------------
    # Tax filings
    # ------------------------------------------------------------------

    async def create_tax_filing(self, data: TaxFilingCreate) -> TaxFiling:
        return await self._create(self.tax_filings, data)

    async def update_tax_filing(self, tax_filing_id: UUID, data: TaxFilingUpdate) -> TaxFiling:
        return await self._update(self.tax_filings, tax_filing_id, data)

    async def get_tax_filing(self, tax_filing_id: UUID) -> TaxFiling:
        return await self._get(self.tax_filings, tax_filing_id)

    async def list_tax_filings(
        self,
        filing_type: str | None = None,
        year: int | None = None,
        quarter: int | None = None,
        status: str | None = None,
    ) -> list[TaxFiling]:
        return await self._list(
            self.tax_filings,
            ["year", "quarter", "filing_type"],
            {"filing_type": filing_type, "year": year, "quarter": quarter, "status": status},
        )

    async def delete_tax_filing(self, tax_filing_id: UUID) -> None:
        await self.tax_filings.remove(tax_filing_id)

    # ------------------------------------------------------------------
    # Workers' comp
    # ------------------------------------------------------------------

    async def create_worker_comp(self, data: WorkerCompCreate) -> WorkerComp:
        return await self._create(self.worker_comps, data)

    async def update_worker_comp(self, worker_comp_id: UUID, data: WorkerCompUpdate) -> WorkerComp:
        return await self._update(self.worker_comps, worker_comp_id, data)

    async def get_worker_comp(self, worker_comp_id: UUID) -> WorkerComp:
        return await self._get(self.worker_comps, worker_comp_id)

    async def list_worker_comps(self, state_code: str | None = None) -> list[WorkerComp]:
        return await self._list(self.worker_comps, ["class_code"], {"state_code": state_code})

    async def delete_worker_comp(self, worker_comp_id: UUID) -> None:
        await self.worker_comps.remove(worker_comp_id)

    async def compute_wc_premium(self, employee_id: UUID, gross: Decimal) -> Decimal:
        """Workers' comp premium for a gross amount at the employee's class rate.

        Zero when the employee, their class code or the class record is missing.
        """
        employee = await self.employees.get(employee_id)
        if employee is None or not employee.wc_class_code:
            return ZERO

        comp = await (
            self.worker_comps.query().where("class_code", "=", employee.wc_class_code).first()
        )
        if comp is None:
            return ZERO

        return round_cents(to_decimal(gross) * to_decimal(comp.rate) / Decimal("100"))


def _round_money(model: type[Base], values: dict[str, Any]) -> dict[str, Any]:
    for field in MONEY_FIELDS.get(model, ()):
        if field in values:
            values[field] = round_optional(values[field])
    return values
