"""Employee API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, Response, status

from payroll_core.api.dependencies import PayRuns, Reporting, Workforce
from payroll_core.schemas import (
    EmployeeCreate,
    EmployeeEarningsHistoryResponse,
    EmployeeResponse,
    EmployeeUpdate,
    ErrorResponse,
    PayCheckResponse,
    TimeEntryResponse,
)

router = APIRouter(prefix="/employees", tags=["employees"])


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_employee(service: Workforce, payload: EmployeeCreate) -> EmployeeResponse:
    """Register a new employee."""
    employee = await service.create_employee(payload)
    return EmployeeResponse.model_validate(employee)


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    service: Workforce,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    department: str | None = None,
    entity_id: str | None = None,
    pay_type: str | None = None,
) -> list[EmployeeResponse]:
    """List employees ordered by last name."""
    employees = await service.list_employees(
        status=status_filter,
        department=department,
        entity_id=entity_id,
        pay_type=pay_type,
    )
    return [EmployeeResponse.model_validate(e) for e in employees]


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_employee(
    service: Workforce,
    employee_id: Annotated[UUID, Path()],
) -> EmployeeResponse:
    employee = await service.get_employee(employee_id)
    return EmployeeResponse.model_validate(employee)


@router.patch(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_employee(
    service: Workforce,
    employee_id: Annotated[UUID, Path()],
    payload: EmployeeUpdate,
) -> EmployeeResponse:
    employee = await service.update_employee(employee_id, payload)
    return EmployeeResponse.model_validate(employee)


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_employee(
    service: Workforce,
    employee_id: Annotated[UUID, Path()],
) -> Response:
    """Delete an employee. Employees with pay checks cannot be deleted."""
    await service.delete_employee(employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{employee_id}/time-entries", response_model=list[TimeEntryResponse])
async def list_employee_time_entries(
    service: Workforce,
    employee_id: Annotated[UUID, Path()],
) -> list[TimeEntryResponse]:
    entries = await service.list_time_entries_by_employee(employee_id)
    return [TimeEntryResponse.model_validate(e) for e in entries]


@router.get("/{employee_id}/pay-checks", response_model=list[PayCheckResponse])
async def list_employee_pay_checks(
    service: PayRuns,
    employee_id: Annotated[UUID, Path()],
) -> list[PayCheckResponse]:
    checks = await service.list_pay_checks_by_employee(employee_id)
    return [PayCheckResponse.model_validate(c) for c in checks]


@router.get(
    "/{employee_id}/earnings-history",
    response_model=EmployeeEarningsHistoryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_earnings_history(
    service: Reporting,
    employee_id: Annotated[UUID, Path()],
) -> EmployeeEarningsHistoryResponse:
    """All of an employee's pay checks with lifetime totals."""
    history = await service.employee_earnings_history(employee_id)
    return EmployeeEarningsHistoryResponse.model_validate(history)
