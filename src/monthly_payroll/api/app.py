"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from monthly_payroll.api.routes import health_router, payroll_router, reports_router
from monthly_payroll.database import create_schema, dispose_db
from monthly_payroll.exceptions import (
    ConflictError,
    PayrollError,
    RecordNotFoundError,
    StorageError,
    ValidationError,
)
from monthly_payroll.logging_config import configure_logging
from monthly_payroll.services.state_machine import InvalidTransitionError

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[PayrollError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    RecordNotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    configure_logging()
    await create_schema()
    yield
    # Shutdown
    await dispose_db()


def create_app(use_lifespan: bool = True) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Monthly Payroll API",
        description="Attendance-based monthly payroll generation",
        version="0.1.0",
        lifespan=lifespan if use_lifespan else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(PayrollError)
    async def payroll_exception_handler(
        request: Request, exc: PayrollError
    ) -> JSONResponse:
        """Map payroll errors to HTTP responses."""
        status_code = next(
            (code for exc_type, code in ERROR_STATUS_CODES.items() if isinstance(exc, exc_type)),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        detail = str(exc)
        if isinstance(exc, StorageError):
            detail = "Payroll storage is unavailable, retry the request"
        return JSONResponse(
            status_code=status_code,
            content={"detail": detail, "code": exc.code},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(payroll_router, prefix="/api/v1")
    app.include_router(reports_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
