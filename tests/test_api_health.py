"""Tests for health check endpoints."""

from unittest.mock import AsyncMock

from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from shortfall.db.database import engine_options, get_session
from shortfall.main import app


async def get_ready(override_get_session) -> tuple[int, dict]:
    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/ready")

    app.dependency_overrides.clear()
    return response.status_code, response.json()


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Liveness probe returns healthy without a database check."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "Shortfall"
        assert data.get("database") is None


class TestReadyEndpoint:
    async def test_ready_returns_ready(self, client: AsyncClient) -> None:
        """Readiness probe returns ready when the state table is readable."""
        response = await client.get("/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["database"] == "connected"

    async def test_ready_returns_503_on_db_failure(self) -> None:
        """Readiness probe returns 503 when the database is unreachable."""

        async def override_get_session_broken():
            mock_session = AsyncMock()
            mock_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
            yield mock_session

        status_code, data = await get_ready(override_get_session_broken)

        assert status_code == 503
        assert data["status"] == "not ready"
        assert data["database"] == "unavailable"

    async def test_ready_returns_503_without_tables(self) -> None:
        """A database where init_db() never ran is not ready."""
        engine = create_async_engine("sqlite+aiosqlite:///:memory:")
        async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

        async def override_get_session_empty():
            async with async_session() as session:
                yield session

        try:
            status_code, data = await get_ready(override_get_session_empty)
        finally:
            await engine.dispose()

        assert status_code == 503
        assert data["status"] == "not ready"


class TestEngineOptions:
    def test_sqlite_skips_pre_ping(self) -> None:
        options = engine_options("sqlite+aiosqlite:///./shortfall.db")

        assert "pool_pre_ping" not in options
        assert options["echo"] is False

    def test_postgres_pre_pings(self) -> None:
        options = engine_options("postgresql+asyncpg://user:pw@db:5432/shortfall")

        assert options["pool_pre_ping"] is True
