"""Pay run state machine with transition validation."""

from __future__ import annotations

from enum import Enum

from payroll_core.errors import PayrollError


class PayRunStatus(str, Enum):
    """Pay run status values."""

    DRAFT = "draft"
    PROCESSING = "processing"
    COMPLETED = "completed"
    VOIDED = "voided"


class InvalidTransitionError(PayrollError):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_status: str, to_status: str, reason: str | None = None):
        self.from_status = _value(from_status)
        self.to_status = _value(to_status)
        self.reason = reason
        msg = f"Invalid transition from '{self.from_status}' to '{self.to_status}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


def _value(status: str) -> str:
    return status.value if isinstance(status, Enum) else str(status)


class PayRunStateMachine:
    """State machine for pay run status transitions.

    Allowed transitions:
    - draft → processing
    - processing → completed
    - draft | processing | completed → voided

    Voided is terminal. Nothing leads back from completed to an editable
    status, and voiding leaves totals and pay checks untouched.
    """

    # Define valid transitions: {from_status: [allowed_to_statuses]}
    VALID_TRANSITIONS: dict[str, list[str]] = {
        PayRunStatus.DRAFT: [PayRunStatus.PROCESSING, PayRunStatus.VOIDED],
        PayRunStatus.PROCESSING: [PayRunStatus.COMPLETED, PayRunStatus.VOIDED],
        PayRunStatus.COMPLETED: [PayRunStatus.VOIDED],
        PayRunStatus.VOIDED: [],  # Terminal state
    }

    # Statuses where pay checks can be added
    ACCEPTS_PAY_CHECKS = {
        PayRunStatus.DRAFT,
        PayRunStatus.PROCESSING,
    }

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        """Check if a transition is valid."""
        allowed = cls.VALID_TRANSITIONS.get(from_status, [])
        return to_status in allowed

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """Validate a transition, raising InvalidTransitionError if invalid."""
        if cls.can_transition(from_status, to_status):
            return

        if from_status == PayRunStatus.VOIDED and to_status == PayRunStatus.VOIDED:
            reason = "pay run is already voided"
        elif to_status == PayRunStatus.PROCESSING:
            reason = "pay run can only be processed from draft status"
        elif to_status == PayRunStatus.COMPLETED:
            reason = "pay run can only be completed from processing status"
        else:
            reason = None
        raise InvalidTransitionError(from_status, to_status, reason)

    @classmethod
    def can_accept_pay_checks(cls, status: str) -> bool:
        """Check if pay checks may be added in this status."""
        return status in cls.ACCEPTS_PAY_CHECKS

    @classmethod
    def is_terminal(cls, status: str) -> bool:
        return not cls.VALID_TRANSITIONS.get(status, [])

    @classmethod
    def get_next_statuses(cls, current_status: str) -> list[str]:
        """Get list of valid next statuses from current status."""
        return cls.VALID_TRANSITIONS.get(current_status, [])
