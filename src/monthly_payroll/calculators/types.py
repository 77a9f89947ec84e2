"""Type definitions for the payroll calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from monthly_payroll.exceptions import ValidationError


class AttendanceStatus(str, Enum):
    """Daily attendance status values."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half_day"


@dataclass(frozen=True)
class EmployeeSnapshot:
    """The employee fields payroll generation reads."""

    employee_id: int
    base_salary: Decimal


@dataclass
class AttendanceTally:
    """Per-status day counts for one employee in one period."""

    present: int = 0
    absent: int = 0
    late: int = 0
    half_day: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent + self.late + self.half_day

    def add(self, status: str) -> None:
        """Count one attendance row."""
        try:
            status = AttendanceStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown attendance status {status!r}") from None
        if status is AttendanceStatus.PRESENT:
            self.present += 1
        elif status is AttendanceStatus.ABSENT:
            self.absent += 1
        elif status is AttendanceStatus.LATE:
            self.late += 1
        else:
            self.half_day += 1


@dataclass
class PayrollComputation:
    """Computed amounts for one employee before persistence."""

    employee_id: int
    month: int
    year: int
    basic_salary: Decimal
    daily_rate: Decimal
    allowances: Decimal
    deductions: Decimal
    net_salary: Decimal
    tally: AttendanceTally = field(default_factory=AttendanceTally)

    def amounts(self) -> dict[str, Decimal]:
        """Monetary fields written to the payroll ledger."""
        return {
            "basic_salary": self.basic_salary,
            "allowances": self.allowances,
            "deductions": self.deductions,
            "net_salary": self.net_salary,
        }
