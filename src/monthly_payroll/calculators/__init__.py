"""Payroll calculation."""

from monthly_payroll.calculators.salary_calculator import (
    DAILY_RATE_DIVISOR,
    SalaryCalculator,
    daily_rate,
    tally_attendance,
)
from monthly_payroll.calculators.types import (
    AttendanceStatus,
    AttendanceTally,
    EmployeeSnapshot,
    PayrollComputation,
)

__all__ = [
    "DAILY_RATE_DIVISOR",
    "SalaryCalculator",
    "daily_rate",
    "tally_attendance",
    "AttendanceStatus",
    "AttendanceTally",
    "EmployeeSnapshot",
    "PayrollComputation",
]
