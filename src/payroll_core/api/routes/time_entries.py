"""Time entry API endpoints."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Path, status

from payroll_core.api.dependencies import Workforce
from payroll_core.schemas import (
    ErrorResponse,
    TimeEntryApproval,
    TimeEntryCreate,
    TimeEntryResponse,
    TimeEntryUpdate,
)

router = APIRouter(prefix="/time-entries", tags=["time-entries"])


@router.post(
    "",
    response_model=TimeEntryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def create_time_entry(service: Workforce, payload: TimeEntryCreate) -> TimeEntryResponse:
    """Record hours. New entries are unapproved."""
    entry = await service.create_time_entry(payload)
    return TimeEntryResponse.model_validate(entry)


@router.get("", response_model=list[TimeEntryResponse])
async def list_time_entries(
    service: Workforce,
    job_id: str | None = None,
    start: date | None = None,
    end: date | None = None,
    employee_id: UUID | None = None,
) -> list[TimeEntryResponse]:
    """List entries for a job, or within a date range."""
    if job_id is not None:
        entries = await service.list_time_entries_by_job(job_id)
    elif start is not None and end is not None:
        entries = await service.list_time_entries_by_date_range(start, end, employee_id)
    elif employee_id is not None:
        entries = await service.list_time_entries_by_employee(employee_id)
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide job_id, employee_id, or both start and end",
        )
    return [TimeEntryResponse.model_validate(e) for e in entries]


@router.get(
    "/{time_entry_id}",
    response_model=TimeEntryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_time_entry(
    service: Workforce,
    time_entry_id: Annotated[UUID, Path()],
) -> TimeEntryResponse:
    entry = await service.get_time_entry(time_entry_id)
    return TimeEntryResponse.model_validate(entry)


@router.patch(
    "/{time_entry_id}",
    response_model=TimeEntryResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_time_entry(
    service: Workforce,
    time_entry_id: Annotated[UUID, Path()],
    payload: TimeEntryUpdate,
) -> TimeEntryResponse:
    entry = await service.update_time_entry(time_entry_id, payload)
    return TimeEntryResponse.model_validate(entry)


@router.post(
    "/{time_entry_id}/approve",
    response_model=TimeEntryResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def approve_time_entry(
    service: Workforce,
    time_entry_id: Annotated[UUID, Path()],
    payload: TimeEntryApproval,
) -> TimeEntryResponse:
    """Approve an entry. A second approval is rejected."""
    entry = await service.approve_time_entry(time_entry_id, payload.approved_by)
    return TimeEntryResponse.model_validate(entry)
