"""Pay run API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, status

from payroll_core.api.dependencies import PayRuns, Reporting
from payroll_core.schemas import (
    ErrorResponse,
    PayCheckCreate,
    PayCheckResponse,
    PayrollRegisterRowResponse,
    PayRunCreate,
    PayRunResponse,
)

router = APIRouter(prefix="/pay-runs", tags=["pay-runs"])


# ============================================================================
# Pay Run CRUD
# ============================================================================


@router.post(
    "",
    response_model=PayRunResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_pay_run(service: PayRuns, payload: PayRunCreate) -> PayRunResponse:
    """Create a new pay run in draft status."""
    pay_run = await service.create_pay_run(payload)
    return PayRunResponse.model_validate(pay_run)


@router.get("", response_model=list[PayRunResponse])
async def list_pay_runs(
    service: PayRuns,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    entity_id: str | None = None,
) -> list[PayRunResponse]:
    """List pay runs, newest pay date first."""
    pay_runs = await service.list_pay_runs(status=status_filter, entity_id=entity_id)
    return [PayRunResponse.model_validate(pr) for pr in pay_runs]


@router.get(
    "/{pay_run_id}",
    response_model=PayRunResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_pay_run(
    service: PayRuns,
    pay_run_id: Annotated[UUID, Path()],
) -> PayRunResponse:
    pay_run = await service.get_pay_run(pay_run_id)
    return PayRunResponse.model_validate(pay_run)


# ============================================================================
# Pay Checks
# ============================================================================


@router.post(
    "/{pay_run_id}/pay-checks",
    response_model=PayCheckResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def add_pay_check(
    service: PayRuns,
    pay_run_id: Annotated[UUID, Path()],
    payload: PayCheckCreate,
) -> PayCheckResponse:
    """Calculate an employee's check and add it to the run totals."""
    pay_check = await service.add_pay_check(pay_run_id, payload.employee_id)
    return PayCheckResponse.model_validate(pay_check)


@router.get("/{pay_run_id}/pay-checks", response_model=list[PayCheckResponse])
async def list_pay_checks(
    service: PayRuns,
    pay_run_id: Annotated[UUID, Path()],
) -> list[PayCheckResponse]:
    checks = await service.list_pay_checks_by_run(pay_run_id)
    return [PayCheckResponse.model_validate(c) for c in checks]


@router.get(
    "/{pay_run_id}/register",
    response_model=list[PayrollRegisterRowResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_payroll_register(
    service: Reporting,
    pay_run_id: Annotated[UUID, Path()],
) -> list[PayrollRegisterRowResponse]:
    """Checks in the run with employee names, sorted by name."""
    rows = await service.payroll_register(pay_run_id)
    return [PayrollRegisterRowResponse.model_validate(r) for r in rows]


# ============================================================================
# State Transitions
# ============================================================================


@router.post(
    "/{pay_run_id}/process",
    response_model=PayRunResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def process_pay_run(
    service: PayRuns,
    pay_run_id: Annotated[UUID, Path()],
) -> PayRunResponse:
    """Transition draft → processing."""
    pay_run = await service.process_pay_run(pay_run_id)
    return PayRunResponse.model_validate(pay_run)


@router.post(
    "/{pay_run_id}/complete",
    response_model=PayRunResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def complete_pay_run(
    service: PayRuns,
    pay_run_id: Annotated[UUID, Path()],
) -> PayRunResponse:
    """Transition processing → completed."""
    pay_run = await service.complete_pay_run(pay_run_id)
    return PayRunResponse.model_validate(pay_run)


@router.post(
    "/{pay_run_id}/void",
    response_model=PayRunResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def void_pay_run(
    service: PayRuns,
    pay_run_id: Annotated[UUID, Path()],
) -> PayRunResponse:
    """Void the run. Totals and checks are kept."""
    pay_run = await service.void_pay_run(pay_run_id)
    return PayRunResponse.model_validate(pay_run)
