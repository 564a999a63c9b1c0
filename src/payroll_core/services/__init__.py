"""Payroll services."""

from payroll_core.services.configuration_service import ConfigurationService
from payroll_core.services.pay_run_service import PayRunService
from payroll_core.services.reporting_service import (
    EmployeeEarningsHistory,
    PayrollRegisterRow,
    QuarterlyTaxSummary,
    ReportingService,
)
from payroll_core.services.state_machine import (
    InvalidTransitionError,
    PayRunStateMachine,
    PayRunStatus,
)
from payroll_core.services.workforce_service import WorkforceService

__all__ = [
    "PayRunStateMachine",
    "PayRunStatus",
    "InvalidTransitionError",
    "PayRunService",
    "WorkforceService",
    "ConfigurationService",
    "ReportingService",
    "PayrollRegisterRow",
    "QuarterlyTaxSummary",
    "EmployeeEarningsHistory",
]
