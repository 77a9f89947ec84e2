"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from monthly_payroll.database import init_db

# Digits only; "3.0", "true" and "1e1" are refused instead of coerced
PERIOD_PART_PATTERN = r"^-?[0-9]+$"


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    _, session_factory = init_db()
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


async def get_period(
    month: Annotated[str, Query(pattern=PERIOD_PART_PATTERN, max_length=6)],
    year: Annotated[str, Query(pattern=PERIOD_PART_PATTERN, max_length=6)],
) -> tuple[int, int]:
    """Period from ``month``/``year`` query parameters.

    Range checks are left to the services so they report VALIDATION_ERROR.
    """
    return int(month), int(year)


async def get_scoped_employee_id(
    x_employee_id: Annotated[str | None, Header()] = None,
) -> int | None:
    """Employee scope set by the authorization layer for non-admin callers."""
    if x_employee_id is None:
        return None
    try:
        return int(x_employee_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid X-Employee-ID format",
        )


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
Period = Annotated[tuple[int, int], Depends(get_period)]
ScopedEmployeeId = Annotated[int | None, Depends(get_scoped_employee_id)]
