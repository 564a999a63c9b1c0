"""Configuration record API endpoints.

Earnings, deductions, benefits, tax tables, tax filings and workers' comp
classes share the same create/get/update/delete shape; only listing
filters differ per record type.
"""

from decimal import Decimal
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Path, Query, Response, status
from pydantic import BaseModel

from payroll_core.api.dependencies import Configuration
from payroll_core.schemas import (
    BenefitCreate,
    BenefitResponse,
    BenefitUpdate,
    DeductionCreate,
    DeductionResponse,
    DeductionUpdate,
    EarningCreate,
    EarningResponse,
    EarningUpdate,
    ErrorResponse,
    TaxFilingCreate,
    TaxFilingResponse,
    TaxFilingUpdate,
    TaxTableCreate,
    TaxTableResponse,
    TaxTableUpdate,
    WcPremiumResponse,
    WorkerCompCreate,
    WorkerCompResponse,
    WorkerCompUpdate,
)

router = APIRouter(prefix="/config", tags=["configuration"])

NOT_FOUND = {404: {"model": ErrorResponse}}


def _register(
    path: str,
    entity: str,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    response_schema: type[BaseModel],
) -> None:
    """Add create/get/update/delete endpoints backed by ConfigurationService.<verb>_<entity>."""

    @router.post(
        path,
        response_model=response_schema,
        status_code=status.HTTP_201_CREATED,
        responses={409: {"model": ErrorResponse}},
        name=f"create_{entity}",
    )
    async def create(service: Configuration, payload: create_schema) -> Any:
        record = await getattr(service, f"create_{entity}")(payload)
        return response_schema.model_validate(record)

    @router.get(
        path + "/{record_id}",
        response_model=response_schema,
        responses=NOT_FOUND,
        name=f"get_{entity}",
    )
    async def get(service: Configuration, record_id: Annotated[UUID, Path()]) -> Any:
        record = await getattr(service, f"get_{entity}")(record_id)
        return response_schema.model_validate(record)

    @router.patch(
        path + "/{record_id}",
        response_model=response_schema,
        responses=NOT_FOUND,
        name=f"update_{entity}",
    )
    async def update(
        service: Configuration,
        record_id: Annotated[UUID, Path()],
        payload: update_schema,
    ) -> Any:
        record = await getattr(service, f"update_{entity}")(record_id, payload)
        return response_schema.model_validate(record)

    @router.delete(
        path + "/{record_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        responses=NOT_FOUND,
        name=f"delete_{entity}",
    )
    async def delete(service: Configuration, record_id: Annotated[UUID, Path()]) -> Response:
        await getattr(service, f"delete_{entity}")(record_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Listing
# ============================================================================


@router.get("/earnings", response_model=list[EarningResponse])
async def list_earnings(service: Configuration) -> list[EarningResponse]:
    return [EarningResponse.model_validate(r) for r in await service.list_earnings()]


@router.get("/deductions", response_model=list[DeductionResponse])
async def list_deductions(service: Configuration) -> list[DeductionResponse]:
    return [DeductionResponse.model_validate(r) for r in await service.list_deductions()]


@router.get("/benefits", response_model=list[BenefitResponse])
async def list_benefits(service: Configuration) -> list[BenefitResponse]:
    return [BenefitResponse.model_validate(r) for r in await service.list_benefits()]


@router.get("/tax-tables", response_model=list[TaxTableResponse])
async def list_tax_tables(
    service: Configuration,
    jurisdiction: str | None = None,
    state: str | None = None,
    year: int | None = None,
    tax_type: str | None = None,
) -> list[TaxTableResponse]:
    records = await service.list_tax_tables(
        jurisdiction=jurisdiction, state=state, year=year, tax_type=tax_type
    )
    return [TaxTableResponse.model_validate(r) for r in records]


@router.get("/tax-filings", response_model=list[TaxFilingResponse])
async def list_tax_filings(
    service: Configuration,
    filing_type: str | None = None,
    year: int | None = None,
    quarter: int | None = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
) -> list[TaxFilingResponse]:
    records = await service.list_tax_filings(
        filing_type=filing_type, year=year, quarter=quarter, status=status_filter
    )
    return [TaxFilingResponse.model_validate(r) for r in records]


@router.get("/worker-comps", response_model=list[WorkerCompResponse])
async def list_worker_comps(
    service: Configuration,
    state_code: str | None = None,
) -> list[WorkerCompResponse]:
    records = await service.list_worker_comps(state_code=state_code)
    return [WorkerCompResponse.model_validate(r) for r in records]


@router.get("/worker-comps/premium", response_model=WcPremiumResponse)
async def compute_wc_premium(
    service: Configuration,
    employee_id: UUID,
    gross: Annotated[Decimal, Query(ge=0)],
) -> WcPremiumResponse:
    """Workers' comp premium for a gross amount at the employee's class rate."""
    premium = await service.compute_wc_premium(employee_id, gross)
    return WcPremiumResponse(employee_id=employee_id, gross=gross, premium=premium)


# Registered after the fixed paths above so "/worker-comps/premium" is not
# captured by "/worker-comps/{record_id}".
_register("/earnings", "earning", EarningCreate, EarningUpdate, EarningResponse)
_register("/deductions", "deduction", DeductionCreate, DeductionUpdate, DeductionResponse)
_register("/benefits", "benefit", BenefitCreate, BenefitUpdate, BenefitResponse)
_register("/tax-tables", "tax_table", TaxTableCreate, TaxTableUpdate, TaxTableResponse)
_register("/tax-filings", "tax_filing", TaxFilingCreate, TaxFilingUpdate, TaxFilingResponse)
_register("/worker-comps", "worker_comp", WorkerCompCreate, WorkerCompUpdate, WorkerCompResponse)
