"""Payroll error taxonomy.

Every error is a caller-correctable precondition failure. Nothing here is
retried or recovered internally.
"""

from __future__ import annotations

from typing import Any


class PayrollError(Exception):
    """Base class for payroll domain errors."""


class NotFoundError(PayrollError):
    """Raised when a referenced record does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class UniquenessViolationError(PayrollError):
    """Raised when a record would duplicate a unique field."""

    def __init__(self, entity: str, field: str, value: Any):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"{entity} with {field} '{value}' already exists")


class ReferentialIntegrityError(PayrollError):
    """Raised when a record cannot be removed because others reference it."""

    def __init__(self, entity: str, entity_id: Any, message: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"Cannot delete {entity} {entity_id}: {message}")
