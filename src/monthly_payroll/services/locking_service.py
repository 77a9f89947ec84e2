"""Per-period serialization of payroll generation."""

from __future__ import annotations

import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from monthly_payroll.database import hold_advisory_lock

# One lock table per event loop; asyncio locks cannot be shared across loops.
_period_locks: weakref.WeakKeyDictionary[
    asyncio.AbstractEventLoop, dict[str, asyncio.Lock]
] = weakref.WeakKeyDictionary()


def period_key(month: int, year: int) -> str:
    """Lock key for a payroll period, e.g. ``payroll:2024-03``."""
    return f"payroll:{year:04d}-{month:02d}"


def _lock_for(key: str) -> asyncio.Lock:
    loop = asyncio.get_running_loop()
    locks = _period_locks.setdefault(loop, {})
    lock = locks.get(key)
    if lock is None:
        lock = locks[key] = asyncio.Lock()
    return lock


class LockingService:
    """Serializes generation runs that target the same period.

    Two layers are used, both held for the whole run including commit:
    1. A process-local asyncio lock keyed on the period
    2. A database advisory lock on the same key, so runs in other processes
       against the same PostgreSQL database also queue. It is taken before
       the run's transaction begins.

    Runs for different periods never contend.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def hold_period(self, month: int, year: int) -> AsyncGenerator[str, None]:
        """Hold the process-local and database locks for a period."""
        key = period_key(month, year)
        async with _lock_for(key):
            async with hold_advisory_lock(self.session, key):
                yield key
