"""Tests for payroll record state machine."""

import pytest

from monthly_payroll.services.state_machine import (
    InvalidTransitionError,
    PayrollStateMachine,
    PayrollStatus,
)


class TestPayrollStateMachine:
    """Test state machine transitions."""

    def test_valid_transitions(self):
        """Test that valid transitions are allowed."""
        # pending → paid
        assert PayrollStateMachine.can_transition("pending", "paid") is True

    def test_invalid_transitions(self):
        """Test that invalid transitions are blocked."""
        # Paid is terminal
        assert PayrollStateMachine.can_transition("paid", "pending") is False
        assert PayrollStateMachine.can_transition("paid", "paid") is False

        # Unknown statuses have no transitions
        assert PayrollStateMachine.can_transition("draft", "paid") is False

    def test_enum_members_accepted(self):
        """Enum members behave like their string values."""
        assert PayrollStateMachine.can_transition(PayrollStatus.PENDING, PayrollStatus.PAID)
        assert PayrollStateMachine.get_next_statuses(PayrollStatus.PENDING) == ["paid"]

    def test_validate_transition_raises(self):
        """Test that validate_transition raises for invalid transitions."""
        with pytest.raises(InvalidTransitionError) as exc_info:
            PayrollStateMachine.validate_transition("paid", "pending")

        assert exc_info.value.from_status == "paid"
        assert exc_info.value.to_status == "pending"
        assert "already paid" in str(exc_info.value)

    def test_can_recalculate(self):
        """Only pending records are recomputed by default."""
        assert PayrollStateMachine.can_recalculate("pending") is True
        assert PayrollStateMachine.can_recalculate("paid") is False

    def test_get_next_statuses(self):
        """Test getting allowed next statuses."""
        assert PayrollStateMachine.get_next_statuses("pending") == ["paid"]
        assert PayrollStateMachine.get_next_statuses("paid") == []
