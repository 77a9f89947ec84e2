"""API endpoint tests.

Tests the FastAPI endpoints against the in-memory test database.
"""

from collections.abc import AsyncGenerator
from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from monthly_payroll.api.app import create_app
from monthly_payroll.api.dependencies import get_db_session
from monthly_payroll.models import PayrollRecord


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client bound to the test database."""
    app = create_app(use_lifespan=False)

    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def staff(make_employee, add_attendance) -> dict[str, int]:
    """One worked-example employee, one idle employee and one admin."""
    busy = await make_employee(name="Busy", base_salary="75000")
    idle = await make_employee(name="Idle", base_salary="60000")
    admin = await make_employee(name="Admin", role="admin", base_salary="100000")
    await add_attendance(busy.id, "present", 20, start=date(2024, 3, 1))
    await add_attendance(busy.id, "absent", 2, start=date(2024, 3, 25))
    return {"busy": busy.id, "idle": idle.id, "admin": admin.id}


class TestHealthEndpoints:
    """Test health check endpoints."""

    async def test_health_check(self, client: AsyncClient):
        """Health endpoint should return 200."""
        response = await client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"

    async def test_readiness_check(self, client: AsyncClient):
        """Readiness endpoint should return 200."""
        response = await client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"
        assert response.json()["missing_tables"] == []

    async def test_readiness_without_schema(self):
        """Readiness is 503 until the ledger tables are created."""
        engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        app = create_app(use_lifespan=False)

        async def empty_session():
            async with factory() as session:
                yield session

        app.dependency_overrides[get_db_session] = empty_session
        try:
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as client:
                response = await client.get("/ready")
        finally:
            await engine.dispose()

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"
        assert response.json()["missing_tables"] == ["attendance", "employee", "payroll"]

    async def test_liveness_check(self, client: AsyncClient):
        """Liveness endpoint should return 200."""
        response = await client.get("/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"


class TestGenerateEndpoint:
    """Test POST /api/v1/payroll/generate."""

    async def test_generate(self, client: AsyncClient, staff):
        """Generation reports the processed count."""
        response = await client.post(
            "/api/v1/payroll/generate", json={"month": 3, "year": 2024}
        )

        assert response.status_code == 200, response.text
        data = response.json()
        assert data["processed"] == 2
        assert data["created"] == 2
        assert data["updated"] == 0
        assert data["skipped_paid"] == []

    async def test_generate_invalid_month(self, client: AsyncClient, session, staff):
        """Month 13 is a validation error and writes nothing."""
        response = await client.post(
            "/api/v1/payroll/generate", json={"month": 13, "year": 2024}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        count = await session.scalar(select(func.count()).select_from(PayrollRecord))
        assert count == 0

    async def test_generate_non_numeric(self, client: AsyncClient):
        """Non-numeric months are refused by request validation."""
        response = await client.post(
            "/api/v1/payroll/generate", json={"month": "march", "year": 2024}
        )
        assert response.status_code == 422

    @pytest.mark.parametrize(
        "body",
        [
            {"month": True, "year": 2024},
            {"month": "3", "year": 2024},
            {"month": 3.0, "year": 2024},
            {"month": 3, "year": "2024"},
        ],
    )
    async def test_generate_refuses_coercible_periods(
        self, client: AsyncClient, session, staff, body
    ):
        """Booleans, numeric strings and floats are refused and write nothing."""
        response = await client.post("/api/v1/payroll/generate", json=body)

        assert response.status_code == 422
        count = await session.scalar(select(func.count()).select_from(PayrollRecord))
        assert count == 0

    async def test_generate_reject_paid(self, client: AsyncClient, staff):
        """Regenerating over a paid record with reject returns 409."""
        await client.post("/api/v1/payroll/generate", json={"month": 3, "year": 2024})
        listing = await client.get("/api/v1/payroll", params={"month": 3, "year": 2024})
        record_id = listing.json()["items"][0]["id"]
        await client.post(f"/api/v1/payroll/{record_id}/pay")

        response = await client.post(
            "/api/v1/payroll/generate",
            json={"month": 3, "year": 2024, "paid_policy": "reject"},
        )

        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"


class TestLedgerEndpoints:
    """Test ledger reads and payment."""

    async def test_list_period(self, client: AsyncClient, staff):
        """Admins see every record of the period, sorted by name."""
        await client.post("/api/v1/payroll/generate", json={"month": 3, "year": 2024})

        response = await client.get("/api/v1/payroll", params={"month": 3, "year": 2024})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        busy, idle = data["items"]
        assert busy["employee_name"] == "Busy"
        assert float(busy["net_salary"]) == 120000
        assert float(idle["net_salary"]) == 60000
        assert busy["status"] == "pending"

    async def test_list_scoped_to_employee(self, client: AsyncClient, staff):
        """X-Employee-ID limits the listing to the caller's record."""
        await client.post("/api/v1/payroll/generate", json={"month": 3, "year": 2024})

        response = await client.get(
            "/api/v1/payroll",
            params={"month": 3, "year": 2024},
            headers={"X-Employee-ID": str(staff["idle"])},
        )

        items = response.json()["items"]
        assert [item["employee_id"] for item in items] == [staff["idle"]]

    async def test_invalid_employee_header(self, client: AsyncClient):
        """A malformed X-Employee-ID is a bad request."""
        response = await client.get(
            "/api/v1/payroll",
            params={"month": 3, "year": 2024},
            headers={"X-Employee-ID": "abc"},
        )
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "path", ["/api/v1/payroll", "/api/v1/reports/payroll"]
    )
    @pytest.mark.parametrize(
        "params",
        [
            {"month": "true", "year": "2024"},
            {"month": "3.0", "year": "2024"},
            {"month": "3", "year": "2024.0"},
            {"month": "march", "year": "2024"},
        ],
    )
    async def test_period_query_refuses_non_integers(
        self, client: AsyncClient, path, params
    ):
        """Period query parameters must be plain integers."""
        response = await client.get(path, params=params)
        assert response.status_code == 422

    async def test_period_query_out_of_range(self, client: AsyncClient):
        """Integer periods out of range are validation errors."""
        response = await client.get(
            "/api/v1/payroll", params={"month": "13", "year": "2024"}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_get_other_employees_record_is_hidden(self, client: AsyncClient, staff):
        """Scoped callers cannot read another employee's record."""
        await client.post("/api/v1/payroll/generate", json={"month": 3, "year": 2024})
        listing = await client.get("/api/v1/payroll", params={"month": 3, "year": 2024})
        busy_record = listing.json()["items"][0]["id"]

        response = await client.get(
            f"/api/v1/payroll/{busy_record}",
            headers={"X-Employee-ID": str(staff["idle"])},
        )

        assert response.status_code == 404

    async def test_pay_and_skip_on_regenerate(self, client: AsyncClient, staff):
        """Paid records are skipped by default on regeneration."""
        await client.post("/api/v1/payroll/generate", json={"month": 3, "year": 2024})
        listing = await client.get("/api/v1/payroll", params={"month": 3, "year": 2024})
        record_id = listing.json()["items"][0]["id"]

        paid = await client.post(f"/api/v1/payroll/{record_id}/pay")
        assert paid.status_code == 200
        assert paid.json()["status"] == "paid"

        again = await client.post(f"/api/v1/payroll/{record_id}/pay")
        assert again.status_code == 409

        regenerated = await client.post(
            "/api/v1/payroll/generate", json={"month": 3, "year": 2024}
        )
        assert regenerated.json()["skipped_paid"] == [staff["busy"]]
        assert regenerated.json()["updated"] == 1

    async def test_pay_missing_record(self, client: AsyncClient):
        """Paying an unknown record returns 404."""
        response = await client.post("/api/v1/payroll/12345/pay")
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"


class TestReportEndpoints:
    """Test report endpoints."""

    async def test_attendance_report(self, client: AsyncClient, staff):
        """Attendance counts are returned per employee."""
        response = await client.get(
            "/api/v1/reports/attendance",
            params={"start_date": "2024-03-01", "end_date": "2024-03-31"},
        )

        assert response.status_code == 200
        items = {item["employee_id"]: item for item in response.json()["items"]}
        assert staff["admin"] not in items
        assert items[staff["busy"]]["present_days"] == 20
        assert items[staff["busy"]]["absent_days"] == 2
        assert items[staff["idle"]]["present_days"] == 0

    async def test_payroll_report(self, client: AsyncClient, staff):
        """Payroll report carries totals."""
        await client.post("/api/v1/payroll/generate", json={"month": 3, "year": 2024})

        response = await client.get(
            "/api/v1/reports/payroll", params={"month": 3, "year": 2024}
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data["items"]) == 2
        assert float(data["total_net_salary"]) == 180000
