"""Monthly payroll generation from attendance."""

from __future__ import annotations

import calendar
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from monthly_payroll.calculators.salary_calculator import SalaryCalculator
from monthly_payroll.calculators.types import EmployeeSnapshot, PayrollComputation
from monthly_payroll.config import get_settings
from monthly_payroll.database import get_session, is_postgres
from monthly_payroll.exceptions import ConflictError, StorageError, ValidationError
from monthly_payroll.models import AttendanceRecord, Employee, PayrollRecord
from monthly_payroll.services.locking_service import LockingService
from monthly_payroll.services.state_machine import PayrollStateMachine, PayrollStatus

logger = logging.getLogger(__name__)

MIN_YEAR = 1970
MAX_YEAR = 2100


class PaidRecordPolicy(str, Enum):
    """What generation does when a period already has a paid record."""

    SKIP = "skip"
    REJECT = "reject"
    OVERWRITE = "overwrite"


@dataclass
class GenerationResult:
    """Outcome of one generation run."""

    month: int
    year: int
    processed: int = 0
    created: int = 0
    updated: int = 0
    skipped_paid: list[int] = field(default_factory=list)
    records: list[PayrollComputation] = field(default_factory=list)


def _require_int(name: str, value: Any) -> int:
    # bool is an int subclass; True is not a month
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    return value


def validate_period(month: Any, year: Any) -> tuple[int, int]:
    """Validate a (month, year) period.

    Raises:
        ValidationError: If either value is not an int or is out of range
    """
    month = _require_int("month", month)
    year = _require_int("year", year)
    if not 1 <= month <= 12:
        raise ValidationError(f"month must be between 1 and 12, got {month}")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}")
    return month, year


def period_bounds(month: int, year: int) -> tuple[date, date]:
    """First and last calendar day of a period."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


class PayrollGenerator:
    """Generates the payroll ledger for one period.

    Pipeline:
    1) Validate the period
    2) Serialize on the period (process lock + database advisory lock)
    3) Load active employees with role 'employee'
    4) Load their attendance rows for the period, grouped by employee
    5) Price each employee with the salary calculator
    6) Insert, overwrite or skip ledger rows per the paid-record policy
    7) Commit as one unit; any storage failure rolls back the whole batch
    """

    def __init__(
        self,
        session: AsyncSession,
        calculator: SalaryCalculator | None = None,
    ):
        self.session = session
        self.calculator = calculator or SalaryCalculator()
        self.locking_service = LockingService(session)

    async def generate(
        self,
        month: int,
        year: int,
        *,
        paid_policy: PaidRecordPolicy | str | None = None,
        commit: bool = True,
    ) -> GenerationResult:
        """Generate payroll records for every eligible employee.

        Args:
            month: Period month, 1-12
            year: Period year
            paid_policy: Override for the configured paid-record policy
            commit: Commit the session when done; otherwise only flush

        Raises:
            ValidationError: Period is invalid; nothing is read or written
            ConflictError: Policy is 'reject' and a paid record exists
            StorageError: Any read or write failed; the batch is rolled back
        """
        month, year = validate_period(month, year)
        policy = self._resolve_policy(paid_policy)

        async with self.locking_service.hold_period(month, year):
            try:
                await self._begin_snapshot()
                result = await self._generate(month, year, policy)
                if commit:
                    await self.session.commit()
                else:
                    await self.session.flush()
            except SQLAlchemyError as exc:
                await self.session.rollback()
                logger.error("Payroll generation for %04d-%02d failed: %s", year, month, exc)
                raise StorageError(
                    f"Payroll generation for {year}-{month:02d} could not be completed"
                ) from exc
            except Exception:
                await self.session.rollback()
                raise

        logger.info(
            "Generated payroll for %04d-%02d: processed=%d created=%d updated=%d skipped_paid=%d",
            year,
            month,
            result.processed,
            result.created,
            result.updated,
            len(result.skipped_paid),
        )
        return result

    def _resolve_policy(self, paid_policy: PaidRecordPolicy | str | None) -> PaidRecordPolicy:
        raw = paid_policy if paid_policy is not None else get_settings().paid_record_policy
        try:
            return PaidRecordPolicy(raw)
        except ValueError:
            raise ValidationError(
                f"paid_policy must be one of {', '.join(p.value for p in PaidRecordPolicy)}, "
                f"got {raw!r}"
            ) from None

    async def _begin_snapshot(self) -> None:
        """Read employees and attendance from one snapshot on PostgreSQL."""
        if is_postgres(self.session) and not self.session.in_transaction():
            await self.session.connection(
                execution_options={"isolation_level": "REPEATABLE READ"}
            )

    async def _generate(
        self, month: int, year: int, policy: PaidRecordPolicy
    ) -> GenerationResult:
        result = GenerationResult(month=month, year=year)

        employees = await self._load_eligible_employees()
        employee_ids = [e.employee_id for e in employees]
        result.processed = len(employees)
        if not employees:
            logger.info("No eligible employees for %04d-%02d", year, month)
            return result

        statuses = await self._load_attendance(employee_ids, month, year)
        existing = await self._load_existing(employee_ids, month, year)

        computations = [
            self.calculator.calculate(employee, month, year, statuses.get(employee.employee_id, ()))
            for employee in employees
        ]
        result.records = computations

        paid_ids = [
            c.employee_id
            for c in computations
            if c.employee_id in existing
            and not PayrollStateMachine.can_recalculate(existing[c.employee_id].status)
        ]
        if paid_ids and policy is PaidRecordPolicy.REJECT:
            raise ConflictError(month, year, paid_ids)
        paid = set(paid_ids)

        for computation in computations:
            record = existing.get(computation.employee_id)

            if record is None:
                self.session.add(
                    PayrollRecord(
                        employee_id=computation.employee_id,
                        month=month,
                        year=year,
                        status=PayrollStatus.PENDING.value,
                        **computation.amounts(),
                    )
                )
                result.created += 1
            elif computation.employee_id in paid and policy is PaidRecordPolicy.SKIP:
                result.skipped_paid.append(computation.employee_id)
                continue
            else:
                if computation.employee_id in paid:
                    logger.warning(
                        "Overwriting amounts of paid payroll record %s (employee %s, %04d-%02d)",
                        record.id,
                        computation.employee_id,
                        year,
                        month,
                    )
                for column, value in computation.amounts().items():
                    setattr(record, column, value)
                result.updated += 1

            logger.debug(
                "Employee %s %04d-%02d: present=%d absent=%d late=%d half_day=%d net=%s",
                computation.employee_id,
                year,
                month,
                computation.tally.present,
                computation.tally.absent,
                computation.tally.late,
                computation.tally.half_day,
                computation.net_salary,
            )

        if result.skipped_paid:
            logger.warning(
                "Skipped %d paid payroll record(s) for %04d-%02d: %s",
                len(result.skipped_paid),
                year,
                month,
                result.skipped_paid,
            )

        await self.session.flush()
        return result

    async def _load_eligible_employees(self) -> list[EmployeeSnapshot]:
        rows = await self.session.execute(
            select(Employee.id, Employee.base_salary)
            .where(
                Employee.role == "employee",
                Employee.employment_status == "active",
            )
            .order_by(Employee.id)
        )
        return [EmployeeSnapshot(employee_id=row.id, base_salary=row.base_salary) for row in rows]

    async def _load_attendance(
        self, employee_ids: list[int], month: int, year: int
    ) -> dict[int, list[str]]:
        first_day, last_day = period_bounds(month, year)
        rows = await self.session.execute(
            select(AttendanceRecord.employee_id, AttendanceRecord.status).where(
                AttendanceRecord.employee_id.in_(employee_ids),
                AttendanceRecord.work_date >= first_day,
                AttendanceRecord.work_date <= last_day,
            )
        )
        grouped: dict[int, list[str]] = defaultdict(list)
        for row in rows:
            grouped[row.employee_id].append(row.status)
        return grouped

    async def _load_existing(
        self, employee_ids: list[int], month: int, year: int
    ) -> dict[int, PayrollRecord]:
        rows = await self.session.execute(
            select(PayrollRecord).where(
                PayrollRecord.employee_id.in_(employee_ids),
                PayrollRecord.month == month,
                PayrollRecord.year == year,
            )
        )
        return {record.employee_id: record for record in rows.scalars()}


async def generate_payroll(
    month: int,
    year: int,
    *,
    paid_policy: PaidRecordPolicy | str | None = None,
) -> GenerationResult:
    """Run generation in its own session against the configured database."""
    async with get_session() as session:
        return await PayrollGenerator(session).generate(
            month, year, paid_policy=paid_policy
        )
