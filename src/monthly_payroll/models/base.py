"""Declarative base and shared column conventions."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import DateTime, Numeric, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Salaries and ledger amounts are stored to the cent
MONEY = Numeric(12, 2)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    type_annotation_map = {
        datetime: DateTime(timezone=True),
        Decimal: MONEY,
    }

    def to_dict(self) -> dict[str, Any]:
        """Mapped attributes keyed by attribute name.

        Attribute names can differ from column names
        (``AttendanceRecord.work_date`` is stored in ``date``).
        """
        return {attr.key: getattr(self, attr.key) for attr in self.__mapper__.column_attrs}


class TimestampMixin:
    """Row creation and last-update times, set by the database."""

    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
