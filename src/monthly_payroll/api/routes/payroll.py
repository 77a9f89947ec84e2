"""Payroll API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path, status

from monthly_payroll.api.dependencies import DbSession, Period, ScopedEmployeeId
from monthly_payroll.api.schemas import (
    ErrorResponse,
    GeneratePayrollRequest,
    GeneratePayrollResponse,
    PayrollListResponse,
    PayrollRecordResponse,
)
from monthly_payroll.exceptions import RecordNotFoundError
from monthly_payroll.services.payroll_generator import PayrollGenerator
from monthly_payroll.services.payroll_service import PayrollLedgerRow, PayrollService

router = APIRouter(prefix="/payroll", tags=["payroll"])


def ledger_row_response(row: PayrollLedgerRow) -> PayrollRecordResponse:
    """Build a response item from a ledger row."""
    item = PayrollRecordResponse.model_validate(row.record)
    item.employee_name = row.employee_name
    item.department = row.department
    item.position = row.position
    return item


# ============================================================================
# Generation
# ============================================================================


@router.post(
    "/generate",
    response_model=GeneratePayrollResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def generate_payroll(
    db: DbSession,
    payload: GeneratePayrollRequest,
) -> GeneratePayrollResponse:
    """Generate payroll records for every eligible employee for a period."""
    generator = PayrollGenerator(db)
    result = await generator.generate(
        payload.month,
        payload.year,
        paid_policy=payload.paid_policy,
    )
    return GeneratePayrollResponse(
        month=result.month,
        year=result.year,
        processed=result.processed,
        created=result.created,
        updated=result.updated,
        skipped_paid=result.skipped_paid,
    )


# ============================================================================
# Ledger
# ============================================================================


@router.get(
    "",
    response_model=PayrollListResponse,
    responses={400: {"model": ErrorResponse}},
)
async def list_payroll(
    db: DbSession,
    period: Period,
    employee_id: ScopedEmployeeId,
) -> PayrollListResponse:
    """List payroll records for a period."""
    month, year = period
    rows = await PayrollService(db).list_records(month, year, employee_id=employee_id)
    return PayrollListResponse(
        items=[ledger_row_response(row) for row in rows],
        total=len(rows),
    )


@router.get(
    "/{record_id}",
    response_model=PayrollRecordResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_payroll_record(
    db: DbSession,
    record_id: Annotated[int, Path()],
    employee_id: ScopedEmployeeId,
) -> PayrollRecordResponse:
    """Get a single payroll record."""
    service = PayrollService(db)
    record = await service.get_record(record_id)
    if employee_id is not None and record.employee_id != employee_id:
        raise RecordNotFoundError(f"Payroll record {record_id} not found")
    return PayrollRecordResponse.model_validate(record)


@router.post(
    "/{record_id}/pay",
    response_model=PayrollRecordResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def mark_payroll_paid(
    db: DbSession,
    record_id: Annotated[int, Path()],
) -> PayrollRecordResponse:
    """Mark a pending payroll record as paid."""
    record = await PayrollService(db).mark_paid(record_id)
    await db.commit()
    return PayrollRecordResponse.model_validate(record)
