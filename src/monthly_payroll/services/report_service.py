"""Attendance and payroll period summaries."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from monthly_payroll.calculators.salary_calculator import tally_attendance
from monthly_payroll.calculators.types import AttendanceTally
from monthly_payroll.exceptions import StorageError, ValidationError
from monthly_payroll.models import AttendanceRecord, Employee
from monthly_payroll.services.payroll_service import PayrollLedgerRow, PayrollService


@dataclass(frozen=True)
class AttendanceSummaryRow:
    """Attendance day counts for one employee over a date range."""

    employee_id: int
    name: str
    department: str
    tally: AttendanceTally


@dataclass
class PayrollReport:
    """Payroll rows for a period with column totals."""

    month: int
    year: int
    rows: list[PayrollLedgerRow] = field(default_factory=list)
    total_basic_salary: Decimal = Decimal("0")
    total_allowances: Decimal = Decimal("0")
    total_deductions: Decimal = Decimal("0")
    total_net_salary: Decimal = Decimal("0")


class ReportService:
    """Builds read-only summaries for the admin reports view."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def attendance_summary(
        self, start_date: date, end_date: date
    ) -> list[AttendanceSummaryRow]:
        """Count attendance statuses per employee between two dates, inclusive.

        Every employee with role 'employee' is listed, including those
        with no attendance rows in the range.
        """
        if start_date > end_date:
            raise ValidationError(
                f"start_date {start_date} must not be after end_date {end_date}"
            )

        try:
            employees = (
                await self.session.execute(
                    select(Employee.id, Employee.name, Employee.department)
                    .where(Employee.role == "employee")
                    .order_by(Employee.name, Employee.id)
                )
            ).all()
            attendance = await self.session.execute(
                select(AttendanceRecord.employee_id, AttendanceRecord.status).where(
                    AttendanceRecord.work_date >= start_date,
                    AttendanceRecord.work_date <= end_date,
                )
            )
        except SQLAlchemyError as exc:
            raise StorageError("Could not build attendance report") from exc

        statuses: dict[int, list[str]] = defaultdict(list)
        for row in attendance:
            statuses[row.employee_id].append(row.status)

        return [
            AttendanceSummaryRow(
                employee_id=emp.id,
                name=emp.name,
                department=emp.department,
                tally=tally_attendance(statuses.get(emp.id, ())),
            )
            for emp in employees
        ]

    async def payroll_summary(self, month: int, year: int) -> PayrollReport:
        """Payroll ledger rows for a period plus totals."""
        rows = await PayrollService(self.session).list_records(month, year)
        report = PayrollReport(month=month, year=year, rows=rows)
        for row in rows:
            report.total_basic_salary += row.record.basic_salary
            report.total_allowances += row.record.allowances
            report.total_deductions += row.record.deductions
            report.total_net_salary += row.record.net_salary
        return report
