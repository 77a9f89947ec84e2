"""Payroll record state machine with transition validation."""

from __future__ import annotations

from enum import Enum

from monthly_payroll.exceptions import PayrollError


class PayrollStatus(str, Enum):
    """Payroll record status values."""

    PENDING = "pending"
    PAID = "paid"


def _status_value(status: str) -> str:
    return status.value if isinstance(status, PayrollStatus) else status


class InvalidTransitionError(PayrollError):
    """Raised when an invalid state transition is attempted."""

    code = "INVALID_TRANSITION"

    def __init__(self, from_status: str, to_status: str, reason: str | None = None):
        self.from_status = from_status
        self.to_status = to_status
        self.reason = reason
        msg = f"Invalid transition from '{from_status}' to '{to_status}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class PayrollStateMachine:
    """State machine for payroll record status transitions.

    Allowed transitions:
    - pending → paid

    Generation creates records as pending; paid is terminal.
    """

    VALID_TRANSITIONS: dict[str, list[str]] = {
        PayrollStatus.PENDING.value: [PayrollStatus.PAID.value],
        PayrollStatus.PAID.value: [],  # Terminal state
    }

    # Statuses whose amounts generation may recompute without a policy override
    RECALCULATION_ALLOWED = {PayrollStatus.PENDING.value}

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        """Check if a transition is valid."""
        allowed = cls.VALID_TRANSITIONS.get(_status_value(from_status), [])
        return _status_value(to_status) in allowed

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """Validate a transition, raising InvalidTransitionError if invalid."""
        from_status = _status_value(from_status)
        to_status = _status_value(to_status)
        if not cls.can_transition(from_status, to_status):
            reason = None
            if from_status == PayrollStatus.PAID.value:
                reason = "payroll record is already paid"
            raise InvalidTransitionError(from_status, to_status, reason)

    @classmethod
    def can_recalculate(cls, status: str) -> bool:
        """Check if generation may overwrite amounts in this status."""
        return _status_value(status) in cls.RECALCULATION_ALLOWED

    @classmethod
    def get_next_statuses(cls, current_status: str) -> list[str]:
        """Get list of valid next statuses from current status."""
        return cls.VALID_TRANSITIONS.get(_status_value(current_status), [])
