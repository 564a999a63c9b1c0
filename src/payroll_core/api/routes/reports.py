"""Reporting API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query

from payroll_core.api.dependencies import Reporting
from payroll_core.schemas import ErrorResponse, QuarterlyTaxSummaryResponse

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get(
    "/quarterly-tax",
    response_model=QuarterlyTaxSummaryResponse,
    responses={422: {"model": ErrorResponse}},
)
async def quarterly_tax_summary(
    service: Reporting,
    year: Annotated[int, Query(ge=1900)],
    quarter: int,
) -> QuarterlyTaxSummaryResponse:
    """Tax totals for completed runs paid within a calendar quarter."""
    summary = await service.quarterly_tax_summary(year, quarter)
    return QuarterlyTaxSummaryResponse.model_validate(summary)
