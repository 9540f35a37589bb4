"""Unit tests for the application factory and lifespan."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from txn_explorer.core.config import DataSourceConfig, Settings
from txn_explorer.core.errors import NetworkError
from txn_explorer.main import API_V1_PREFIX, create_app, init_services, lifespan
from txn_explorer.persistence.kv_store import InMemoryKeyValueStore


class TestCreateApp:
    """Test create_app."""

    def test_routes_registered(self):
        """Test every router is mounted under the API prefix."""
        app = create_app()
        paths = {getattr(route, "path", "") for route in app.routes}
        for path in (
            "/health",
            "/auth/login",
            "/transactions",
            "/transactions/stats",
            "/table",
            "/table/sort",
            "/rules",
            "/rules/{rule_id}",
            "/rules/{rule_id}/duplicate",
        ):
            assert f"{API_V1_PREFIX}{path}" in paths

    def test_title(self):
        """Test the API title."""
        assert create_app().title == "Transaction Explorer API"


class TestInitServices:
    """Test init_services."""

    def test_services_on_state(self):
        """Test services are attached to app state."""
        app = create_app()
        store = InMemoryKeyValueStore()
        init_services(app, Settings(), store=store)
        assert app.state.kv_store is store
        assert app.state.table_service.store.is_loaded is False
        assert app.state.rules_service.repo.store is store
        assert app.state.auth_service.store is store


@pytest.mark.asyncio
class TestLifespan:
    """Test lifespan context manager."""

    async def test_startup_loads_data(self, sample_csv_file, monkeypatch):
        """Test startup loads the configured CSV."""
        monkeypatch.delenv("DATA_SOURCE_LOAD_ON_STARTUP", raising=False)
        settings = Settings(data_source=DataSourceConfig(location=str(sample_csv_file)))
        app = create_app()
        with patch("txn_explorer.main.get_settings", return_value=settings):
            async with lifespan(app):
                assert len(app.state.table_service.store) == 6

    async def test_startup_survives_load_failure(self, tmp_path, monkeypatch):
        """Test a failed initial load is recorded and startup continues."""
        monkeypatch.delenv("DATA_SOURCE_LOAD_ON_STARTUP", raising=False)
        settings = Settings(
            data_source=DataSourceConfig(
                location=str(tmp_path / "missing.csv"),
                max_attempts=1,
                base_delay_seconds=0,
            )
        )
        app = create_app()
        with patch("txn_explorer.main.get_settings", return_value=settings):
            async with lifespan(app):
                assert app.state.table_service.store.is_loaded is False
                assert app.state.table_service.load_error is not None

    async def test_startup_without_load(self):
        """Test loading can be deferred."""
        settings = Settings(data_source=DataSourceConfig(load_on_startup=False))
        app = create_app()
        with patch("txn_explorer.main.get_settings", return_value=settings):
            with patch(
                "txn_explorer.services.table_service.TableService.reload",
                new_callable=AsyncMock,
            ) as reload:
                async with lifespan(app):
                    reload.assert_not_called()


@pytest.mark.asyncio
class TestExceptionHandlers:
    """Test error responses."""

    async def test_domain_error_response(self):
        """Test domain errors map to their status with detail and errors."""
        app = create_app()
        init_services(app, Settings(), store=InMemoryKeyValueStore())

        @app.get("/boom")
        async def boom():
            raise NetworkError("HTTP 404: Not Found", details={"status_code": 404})

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/boom")
        assert response.status_code == 502
        assert response.json() == {
            "detail": "HTTP 404: Not Found",
            "errors": {"status_code": 404},
        }

    async def test_unexpected_error_response(self):
        """Test unexpected exceptions become a generic 500."""
        app = create_app()

        @app.get("/crash")
        async def crash():
            raise RuntimeError("unexpected")

        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/crash")
        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
