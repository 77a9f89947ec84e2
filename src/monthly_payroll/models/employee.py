"""Employee and attendance models (read-only inputs to payroll generation)."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    Integer,
    String,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from monthly_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from monthly_payroll.models.payroll import PayrollRecord


class Employee(Base, TimestampMixin):
    """Employee record."""

    __tablename__ = "employee"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    department: Mapped[str] = mapped_column(String, nullable=False, default="")
    position: Mapped[str] = mapped_column(String, nullable=False, default="")
    base_salary: Mapped[Decimal] = mapped_column(nullable=False)
    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    role: Mapped[str] = mapped_column(String, nullable=False, default="employee")
    employment_status: Mapped[str] = mapped_column(
        "status", String, nullable=False, default="active"
    )

    __table_args__ = (
        CheckConstraint("base_salary >= 0", name="employee_base_salary_check"),
        CheckConstraint("role IN ('admin', 'employee')", name="employee_role_check"),
        CheckConstraint(
            "status IN ('active', 'inactive')",
            name="employee_status_check",
        ),
    )

    # Relationships
    attendance: Mapped[list[AttendanceRecord]] = relationship(
        back_populates="employee", lazy="raise"
    )
    payroll_records: Mapped[list[PayrollRecord]] = relationship(
        back_populates="employee", lazy="raise"
    )

    @property
    def is_payroll_eligible(self) -> bool:
        """Only active non-admin employees are paid through generation."""
        return self.role == "employee" and self.employment_status == "active"


class AttendanceRecord(Base, TimestampMixin):
    """One attendance row per employee per calendar day."""

    __tablename__ = "attendance"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employee.id", ondelete="CASCADE"),
        nullable=False,
    )
    work_date: Mapped[date] = mapped_column("date", Date, nullable=False)
    check_in: Mapped[time | None] = mapped_column(Time, nullable=True)
    check_out: Mapped[time | None] = mapped_column(Time, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="absent")

    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="attendance_employee_date_unique"),
        CheckConstraint(
            "status IN ('present', 'absent', 'late', 'half_day')",
            name="attendance_status_check",
        ),
    )

    employee: Mapped[Employee] = relationship(back_populates="attendance", lazy="raise")
