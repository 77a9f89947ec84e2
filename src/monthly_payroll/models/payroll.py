"""Payroll ledger model (output of payroll generation)."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from monthly_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from monthly_payroll.models.employee import Employee


class PayrollRecord(Base, TimestampMixin):
    """Monthly payroll result for one employee.

    At most one row exists per (employee_id, month, year).
    """

    __tablename__ = "payroll"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employee.id", ondelete="CASCADE"),
        nullable=False,
    )
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    basic_salary: Mapped[Decimal] = mapped_column(nullable=False)
    allowances: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    deductions: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    net_salary: Mapped[Decimal] = mapped_column(nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("employee_id", "month", "year", name="payroll_employee_period_unique"),
        CheckConstraint("month BETWEEN 1 AND 12", name="payroll_month_check"),
        CheckConstraint("status IN ('pending', 'paid')", name="payroll_status_check"),
    )

    employee: Mapped[Employee] = relationship(back_populates="payroll_records", lazy="raise")

    @property
    def is_paid(self) -> bool:
        return self.status == "paid"
