"""Pydantic schemas for API request/response models."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, StrictInt


# ============================================================================
# Payroll generation schemas
# ============================================================================


class GeneratePayrollRequest(BaseModel):
    """Schema for triggering payroll generation.

    Month and year must be JSON integers; booleans, strings and floats are
    refused rather than coerced. Range checks happen in the generator so that
    out-of-range periods surface as VALIDATION_ERROR like every other caller
    sees them.
    """

    month: StrictInt
    year: StrictInt
    paid_policy: str | None = None


class GeneratePayrollResponse(BaseModel):
    """Schema for a completed generation run."""

    message: str = "Payroll generated successfully"
    month: int
    year: int
    processed: int
    created: int
    updated: int
    skipped_paid: list[int]


# ============================================================================
# Payroll ledger schemas
# ============================================================================


class PayrollRecordResponse(BaseModel):
    """Schema for a payroll ledger record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    month: int
    year: int
    basic_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    net_salary: Decimal
    status: str
    paid_at: datetime | None = None
    employee_name: str | None = None
    department: str | None = None
    position: str | None = None


class PayrollListResponse(BaseModel):
    """Schema for listing payroll records of a period."""

    items: list[PayrollRecordResponse]
    total: int


# ============================================================================
# Report schemas
# ============================================================================


class AttendanceSummaryItem(BaseModel):
    """Schema for one employee's attendance counts."""

    employee_id: int
    name: str
    department: str
    present_days: int
    absent_days: int
    late_days: int
    half_days: int


class AttendanceReportResponse(BaseModel):
    """Schema for the attendance report."""

    start_date: date
    end_date: date
    items: list[AttendanceSummaryItem]


class PayrollReportResponse(BaseModel):
    """Schema for the payroll report."""

    month: int
    year: int
    items: list[PayrollRecordResponse]
    total_basic_salary: Decimal
    total_allowances: Decimal
    total_deductions: Decimal
    total_net_salary: Decimal


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str
    code: str | None = None
