"""Attendance-based monthly salary calculation.

Pricing rules:
- daily rate is base salary / 30 regardless of the month's calendar length
- every ``present`` day adds one daily rate as an allowance
- every ``absent`` day subtracts one daily rate as a deduction
- ``late`` and ``half_day`` days are counted but carry no weight
- basic salary is always the unmodified base salary
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from monthly_payroll.calculators.types import (
    AttendanceTally,
    EmployeeSnapshot,
    PayrollComputation,
)
from monthly_payroll.exceptions import ValidationError

DAILY_RATE_DIVISOR = Decimal("30")
CENT = Decimal("0.01")


def quantize_money(amount: Decimal) -> Decimal:
    """Round to cents, half up."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def daily_rate(base_salary: Decimal) -> Decimal:
    """Unrounded price of one attendance day."""
    return Decimal(base_salary) / DAILY_RATE_DIVISOR


def day_amount(base_salary: Decimal, days: int) -> Decimal:
    """Price ``days`` attendance days, rounded once to cents."""
    if days == 0:
        return Decimal("0.00")
    return quantize_money(Decimal(base_salary) * days / DAILY_RATE_DIVISOR)


def tally_attendance(statuses: Iterable[str]) -> AttendanceTally:
    """Count attendance statuses."""
    tally = AttendanceTally()
    for status in statuses:
        tally.add(status)
    return tally


class SalaryCalculator:
    """Computes one employee's payroll amounts for a period."""

    def calculate(
        self,
        employee: EmployeeSnapshot,
        month: int,
        year: int,
        statuses: Iterable[str] = (),
    ) -> PayrollComputation:
        """Calculate payroll amounts from the employee's attendance statuses.

        An employee with no attendance rows gets zero allowances and
        deductions, so net salary equals basic salary.
        """
        if employee.base_salary < 0:
            raise ValidationError(
                f"Employee {employee.employee_id} has negative base salary {employee.base_salary}"
            )

        tally = tally_attendance(statuses)
        basic_salary = quantize_money(Decimal(employee.base_salary))
        allowances = day_amount(employee.base_salary, tally.present)
        deductions = day_amount(employee.base_salary, tally.absent)

        return PayrollComputation(
            employee_id=employee.employee_id,
            month=month,
            year=year,
            basic_salary=basic_salary,
            daily_rate=daily_rate(employee.base_salary),
            allowances=allowances,
            deductions=deductions,
            net_salary=basic_salary + allowances - deductions,
            tally=tally,
        )
