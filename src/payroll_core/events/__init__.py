"""Payroll domain events."""

from payroll_core.events.emitter import EventBatch, EventEmitter, log_event
from payroll_core.events.types import (
    EMPLOYEE_CREATED,
    EMPLOYEE_DELETED,
    EMPLOYEE_UPDATED,
    EVENT_NAMES,
    PAY_CHECK_CREATED,
    PAY_RUN_COMPLETED,
    PAY_RUN_CREATED,
    TIME_ENTRY_APPROVED,
    TIME_ENTRY_CREATED,
    PayrollEvent,
)

__all__ = [
    "EventBatch",
    "EventEmitter",
    "PayrollEvent",
    "log_event",
    "EVENT_NAMES",
    "EMPLOYEE_CREATED",
    "EMPLOYEE_UPDATED",
    "EMPLOYEE_DELETED",
    "TIME_ENTRY_CREATED",
    "TIME_ENTRY_APPROVED",
    "PAY_RUN_CREATED",
    "PAY_RUN_COMPLETED",
    "PAY_CHECK_CREATED",
]
