"""Report endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Query

from monthly_payroll.api.dependencies import DbSession, Period
from monthly_payroll.api.routes.payroll import ledger_row_response
from monthly_payroll.api.schemas import (
    AttendanceReportResponse,
    AttendanceSummaryItem,
    ErrorResponse,
    PayrollReportResponse,
)
from monthly_payroll.services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get(
    "/attendance",
    response_model=AttendanceReportResponse,
    responses={400: {"model": ErrorResponse}},
)
async def attendance_report(
    db: DbSession,
    start_date: Annotated[date, Query()],
    end_date: Annotated[date, Query()],
) -> AttendanceReportResponse:
    """Per-employee attendance counts between two dates."""
    rows = await ReportService(db).attendance_summary(start_date, end_date)
    return AttendanceReportResponse(
        start_date=start_date,
        end_date=end_date,
        items=[
            AttendanceSummaryItem(
                employee_id=row.employee_id,
                name=row.name,
                department=row.department,
                present_days=row.tally.present,
                absent_days=row.tally.absent,
                late_days=row.tally.late,
                half_days=row.tally.half_day,
            )
            for row in rows
        ],
    )


@router.get(
    "/payroll",
    response_model=PayrollReportResponse,
    responses={400: {"model": ErrorResponse}},
)
async def payroll_report(
    db: DbSession,
    period: Period,
) -> PayrollReportResponse:
    """Payroll rows and totals for a period."""
    month, year = period
    report = await ReportService(db).payroll_summary(month, year)
    return PayrollReportResponse(
        month=report.month,
        year=report.year,
        items=[ledger_row_response(row) for row in report.rows],
        total_basic_salary=report.total_basic_salary,
        total_allowances=report.total_allowances,
        total_deductions=report.total_deductions,
        total_net_salary=report.total_net_salary,
    )
