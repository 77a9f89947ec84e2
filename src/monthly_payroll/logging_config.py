"""Logging setup shared by the API and the CLI."""

from __future__ import annotations

import logging

from monthly_payroll.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a single stream handler on the package logger.

    Safe to call more than once; later calls only adjust the level.
    """
    level_name = (level or get_settings().log_level).upper()
    package_logger = logging.getLogger("monthly_payroll")
    package_logger.setLevel(level_name)

    if not any(getattr(h, "_monthly_payroll", False) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._monthly_payroll = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)
