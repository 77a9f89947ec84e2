"""ORM models."""

from monthly_payroll.models.base import Base, TimestampMixin
from monthly_payroll.models.employee import AttendanceRecord, Employee
from monthly_payroll.models.payroll import PayrollRecord

__all__ = [
    "Base",
    "TimestampMixin",
    "Employee",
    "AttendanceRecord",
    "PayrollRecord",
]
