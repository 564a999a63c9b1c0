"""API routes."""

from payroll_core.api.routes.configuration import router as configuration_router
from payroll_core.api.routes.employees import router as employees_router
from payroll_core.api.routes.health import router as health_router
from payroll_core.api.routes.pay_runs import router as pay_runs_router
from payroll_core.api.routes.reports import router as reports_router
from payroll_core.api.routes.time_entries import router as time_entries_router

__all__ = [
    "configuration_router",
    "employees_router",
    "health_router",
    "pay_runs_router",
    "reports_router",
    "time_entries_router",
]
