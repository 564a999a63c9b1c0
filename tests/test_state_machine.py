"""Tests for pay run state machine."""

import pytest

from payroll_core.services.state_machine import (
    InvalidTransitionError,
    PayRunStateMachine,
    PayRunStatus,
)


class TestPayRunStateMachine:
    """Test state machine transitions."""

    def test_valid_transitions(self):
        """Test that valid transitions are allowed."""
        assert PayRunStateMachine.can_transition("draft", "processing") is True
        assert PayRunStateMachine.can_transition("processing", "completed") is True

        # voided is reachable from every non-voided status
        assert PayRunStateMachine.can_transition("draft", "voided") is True
        assert PayRunStateMachine.can_transition("processing", "voided") is True
        assert PayRunStateMachine.can_transition("completed", "voided") is True

    def test_invalid_transitions(self):
        """Test that invalid transitions are blocked."""
        # Can't skip processing
        assert PayRunStateMachine.can_transition("draft", "completed") is False

        # Nothing leads back to an editable status
        assert PayRunStateMachine.can_transition("completed", "processing") is False
        assert PayRunStateMachine.can_transition("completed", "draft") is False
        assert PayRunStateMachine.can_transition("processing", "draft") is False

        # Voided is terminal
        assert PayRunStateMachine.can_transition("voided", "voided") is False
        assert PayRunStateMachine.can_transition("voided", "draft") is False

    def test_accepts_enum_members(self):
        assert PayRunStateMachine.can_transition(
            PayRunStatus.DRAFT, PayRunStatus.PROCESSING
        ) is True

    def test_validate_transition_raises(self):
        """Test that validate_transition raises for invalid transitions."""
        with pytest.raises(InvalidTransitionError) as exc_info:
            PayRunStateMachine.validate_transition("draft", "completed")

        assert exc_info.value.from_status == "draft"
        assert exc_info.value.to_status == "completed"
        assert "processing" in str(exc_info.value)

    def test_double_void_is_rejected(self):
        with pytest.raises(InvalidTransitionError, match="already voided"):
            PayRunStateMachine.validate_transition(PayRunStatus.VOIDED, PayRunStatus.VOIDED)

    def test_validate_transition_passes_for_valid(self):
        PayRunStateMachine.validate_transition("processing", "completed")

    def test_can_accept_pay_checks(self):
        """Draft and processing runs accept checks."""
        assert PayRunStateMachine.can_accept_pay_checks("draft") is True
        assert PayRunStateMachine.can_accept_pay_checks("processing") is True
        assert PayRunStateMachine.can_accept_pay_checks("completed") is False
        assert PayRunStateMachine.can_accept_pay_checks("voided") is False

    def test_is_terminal(self):
        assert PayRunStateMachine.is_terminal("voided") is True
        assert PayRunStateMachine.is_terminal("completed") is False

    def test_get_next_statuses(self):
        assert set(PayRunStateMachine.get_next_statuses("draft")) == {"processing", "voided"}
        assert PayRunStateMachine.get_next_statuses("completed") == [PayRunStatus.VOIDED]
        assert PayRunStateMachine.get_next_statuses("voided") == []
