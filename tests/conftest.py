"""Pytest fixtures for payroll generator tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from monthly_payroll.config import get_settings
from monthly_payroll.models import AttendanceRecord, Base, Employee

# In-memory SQLite shared by every session of one test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """Create a fresh test database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_employee(session: AsyncSession) -> Callable[..., Any]:
    """Factory for committed employees."""
    counter = {"n": 0}

    async def _make(
        base_salary: str | Decimal = "60000.00",
        role: str = "employee",
        employment_status: str = "active",
        name: str | None = None,
        department: str = "Engineering",
    ) -> Employee:
        counter["n"] += 1
        employee = Employee(
            name=name or f"Employee {counter['n']:02d}",
            email=f"employee{counter['n']}@example.com",
            department=department,
            position="Staff",
            base_salary=Decimal(base_salary),
            hire_date=date(2023, 1, 1),
            role=role,
            employment_status=employment_status,
        )
        session.add(employee)
        await session.commit()
        return employee

    return _make


@pytest.fixture
def add_attendance(session: AsyncSession) -> Callable[..., Any]:
    """Factory for committed attendance rows on consecutive days."""

    async def _add(
        employee_id: int,
        status: str,
        days: int,
        start: date = date(2024, 3, 1),
    ) -> list[AttendanceRecord]:
        rows = [
            AttendanceRecord(
                employee_id=employee_id,
                work_date=start + timedelta(days=offset),
                status=status,
            )
            for offset in range(days)
        ]
        session.add_all(rows)
        await session.commit()
        return rows

    return _add


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Start every test from default settings."""
    monkeypatch.delenv("PAID_RECORD_POLICY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
