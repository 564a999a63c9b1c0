"""Payroll domain event types.

Events are immutable records of something that already happened. The
engine only emits them; consumers subscribe through the emitter.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

EMPLOYEE_CREATED = "payroll.employee.created"
EMPLOYEE_UPDATED = "payroll.employee.updated"
EMPLOYEE_DELETED = "payroll.employee.deleted"
TIME_ENTRY_CREATED = "payroll.timeEntry.created"
TIME_ENTRY_APPROVED = "payroll.timeEntry.approved"
PAY_RUN_CREATED = "payroll.payRun.created"
PAY_RUN_COMPLETED = "payroll.payRun.completed"
PAY_CHECK_CREATED = "payroll.payCheck.created"

EVENT_NAMES = frozenset(
    {
        EMPLOYEE_CREATED,
        EMPLOYEE_UPDATED,
        EMPLOYEE_DELETED,
        TIME_ENTRY_CREATED,
        TIME_ENTRY_APPROVED,
        PAY_RUN_CREATED,
        PAY_RUN_COMPLETED,
        PAY_CHECK_CREATED,
    }
)


@dataclass(frozen=True)
class PayrollEvent:
    """A named domain event with its payload."""

    name: str
    payload: dict[str, Any]
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        """Serialize event to dictionary."""
        return {
            "event_id": str(self.event_id),
            "name": self.name,
            "occurred_at": self.occurred_at.isoformat(),
            "payload": _serialize(self.payload),
        }

    def to_json(self) -> str:
        """Serialize event to JSON string."""
        return json.dumps(self.to_dict(), default=str)


def _serialize(obj: Any) -> Any:
    """Recursively serialize objects for JSON compatibility."""
    if hasattr(obj, "to_dict") and callable(obj.to_dict):
        return _serialize(obj.to_dict())
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_serialize(v) for v in obj]
    elif isinstance(obj, UUID):
        return str(obj)
    elif isinstance(obj, (datetime, date)):
        return obj.isoformat()
    elif isinstance(obj, Decimal):
        return str(obj)
    elif isinstance(obj, Enum):
        return obj.value
    return obj
