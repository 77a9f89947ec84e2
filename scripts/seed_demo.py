"""Load demo employees and attendance into the database.

Usage:
    python scripts/seed_demo.py [--month 3] [--year 2024] [--database-url URL]

Creates the tables if needed, adds a handful of employees (one admin, one
inactive) and a month of weekday attendance for each active employee.
Existing employees (matched by email) are left as they are.
"""

from __future__ import annotations

import argparse
import asyncio
import calendar
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from monthly_payroll.config import get_settings
from monthly_payroll.models import AttendanceRecord, Base, Employee

DEMO_EMPLOYEES = [
    ("Admin User", "admin@payroll.example", "IT", "System Administrator", "100000.00", "admin", "active"),
    ("John Doe", "john.doe@payroll.example", "Engineering", "Software Developer", "75000.00", "employee", "active"),
    ("Jane Smith", "jane.smith@payroll.example", "Marketing", "Marketing Manager", "65000.00", "employee", "active"),
    ("Mike Johnson", "mike.johnson@payroll.example", "HR", "HR Specialist", "55000.00", "employee", "active"),
    ("Sarah Wilson", "sarah.wilson@payroll.example", "Finance", "Accountant", "60000.00", "employee", "inactive"),
]

# Repeating weekday pattern; every tenth working day is absent, every seventh late
STATUS_CYCLE = ["present"] * 6 + ["late"] + ["present"] * 2 + ["absent"]


async def seed(database_url: str, month: int, year: int) -> None:
    """Insert demo rows."""
    engine = create_async_engine(database_url, echo=False)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with AsyncSession(engine, expire_on_commit=False) as session:
            created = 0
            for name, email, department, position, salary, role, status in DEMO_EMPLOYEES:
                existing = await session.scalar(select(Employee).where(Employee.email == email))
                if existing is not None:
                    continue
                employee = Employee(
                    name=name,
                    email=email,
                    department=department,
                    position=position,
                    base_salary=Decimal(salary),
                    hire_date=date(year, 1, 1),
                    role=role,
                    employment_status=status,
                )
                session.add(employee)
                await session.flush()
                created += 1

                if role != "employee" or status != "active":
                    continue
                workdays = [
                    date(year, month, day)
                    for day in range(1, calendar.monthrange(year, month)[1] + 1)
                    if date(year, month, day).weekday() < 5
                ]
                session.add_all(
                    AttendanceRecord(
                        employee_id=employee.id,
                        work_date=day,
                        status=STATUS_CYCLE[i % len(STATUS_CYCLE)],
                    )
                    for i, day in enumerate(workdays)
                )

            await session.commit()
            print(f"Seeded {created} employee(s) with attendance for {year}-{month:02d}")

    finally:
        await engine.dispose()


def main() -> None:
    """Main entry point."""
    today = date.today()
    parser = argparse.ArgumentParser(description="Load demo data into the database")
    parser.add_argument("--month", type=int, default=today.month, help="Attendance month")
    parser.add_argument("--year", type=int, default=today.year, help="Attendance year")
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="Database URL (default: from settings)",
    )

    args = parser.parse_args()

    asyncio.run(seed(args.database_url or get_settings().database_url, args.month, args.year))


if __name__ == "__main__":
    main()
