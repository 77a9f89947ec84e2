"""Serve the payroll API with uvicorn: ``python -m monthly_payroll``."""

import uvicorn

from monthly_payroll.config import get_settings


def main() -> None:
    """Run the API with host, port, reload and log level from settings."""
    settings = get_settings()
    uvicorn.run(
        "monthly_payroll.api.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
