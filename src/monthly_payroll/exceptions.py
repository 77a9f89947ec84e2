"""Exceptions raised by the payroll generator and its services."""

from __future__ import annotations


class PayrollError(Exception):
    """Base class for payroll errors surfaced to callers."""

    code = "PAYROLL_ERROR"


class ValidationError(PayrollError):
    """Raised when a period or request value is out of range."""

    code = "VALIDATION_ERROR"


class StorageError(PayrollError):
    """Raised when reading or writing employee, attendance or payroll rows fails."""

    code = "STORAGE_ERROR"


class ConflictError(PayrollError):
    """Raised when generation would overwrite a paid payroll record."""

    code = "CONFLICT"

    def __init__(self, month: int, year: int, employee_ids: list[int]):
        self.month = month
        self.year = year
        self.employee_ids = employee_ids
        super().__init__(
            f"Payroll for {year}-{month:02d} is already paid for "
            f"{len(employee_ids)} employee(s): {', '.join(str(e) for e in employee_ids)}"
        )


class RecordNotFoundError(PayrollError):
    """Raised when a payroll record id does not exist."""

    code = "NOT_FOUND"
