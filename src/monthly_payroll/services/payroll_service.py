"""Read-side payroll ledger queries and payment status transitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from monthly_payroll.exceptions import RecordNotFoundError, StorageError
from monthly_payroll.models import Employee, PayrollRecord
from monthly_payroll.services.payroll_generator import validate_period
from monthly_payroll.services.state_machine import PayrollStateMachine, PayrollStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollLedgerRow:
    """A payroll record with the employee fields shown next to it."""

    record: PayrollRecord
    employee_name: str
    department: str
    position: str


class PayrollService:
    """Service for reading the payroll ledger and marking records paid."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_records(
        self,
        month: int,
        year: int,
        employee_id: int | None = None,
    ) -> list[PayrollLedgerRow]:
        """List payroll records for a period, ordered by employee name.

        When ``employee_id`` is given only that employee's record is returned.
        """
        month, year = validate_period(month, year)
        query = (
            select(PayrollRecord, Employee.name, Employee.department, Employee.position)
            .join(Employee, PayrollRecord.employee_id == Employee.id)
            .where(PayrollRecord.month == month, PayrollRecord.year == year)
            .order_by(Employee.name, PayrollRecord.employee_id)
        )
        if employee_id is not None:
            query = query.where(PayrollRecord.employee_id == employee_id)

        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not read payroll for {year}-{month:02d}") from exc

        return [
            PayrollLedgerRow(
                record=record,
                employee_name=name,
                department=department,
                position=position,
            )
            for record, name, department, position in result.all()
        ]

    async def get_record(self, record_id: int) -> PayrollRecord:
        """Get a payroll record by id."""
        try:
            record = await self.session.get(PayrollRecord, record_id)
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not read payroll record {record_id}") from exc
        if record is None:
            raise RecordNotFoundError(f"Payroll record {record_id} not found")
        return record

    async def mark_paid(
        self,
        record_id: int,
        paid_at: datetime | None = None,
    ) -> PayrollRecord:
        """Transition a record from pending to paid.

        Raises InvalidTransitionError if the record is already paid.
        """
        record = await self.get_record(record_id)
        PayrollStateMachine.validate_transition(record.status, PayrollStatus.PAID)

        record.status = PayrollStatus.PAID.value
        record.paid_at = paid_at or datetime.now(timezone.utc)
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not update payroll record {record_id}") from exc

        logger.info(
            "Payroll record %s for employee %s (%04d-%02d) marked paid",
            record.id,
            record.employee_id,
            record.year,
            record.month,
        )
        return record
