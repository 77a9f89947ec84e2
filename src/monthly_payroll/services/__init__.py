"""Payroll services."""

from monthly_payroll.services.state_machine import (
    InvalidTransitionError,
    PayrollStateMachine,
    PayrollStatus,
)
from monthly_payroll.services.locking_service import LockingService
from monthly_payroll.services.payroll_generator import (
    GenerationResult,
    PaidRecordPolicy,
    PayrollGenerator,
    generate_payroll,
)
from monthly_payroll.services.payroll_service import PayrollLedgerRow, PayrollService
from monthly_payroll.services.report_service import ReportService

__all__ = [
    "PayrollStateMachine",
    "PayrollStatus",
    "InvalidTransitionError",
    "LockingService",
    "GenerationResult",
    "PaidRecordPolicy",
    "PayrollGenerator",
    "generate_payroll",
    "PayrollLedgerRow",
    "PayrollService",
    "ReportService",
]
