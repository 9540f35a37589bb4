"""Pytest configuration for API integration tests.

The app is built with an in-memory key-value store and the sample dataset
already loaded, so no lifespan or data source is needed.
"""

import pytest

from txn_explorer.core.config import get_settings
from txn_explorer.main import create_app, init_services
from txn_explorer.persistence.kv_store import InMemoryKeyValueStore
from txn_explorer.services.auth_service import AUTH_KEY, AUTH_VALUE


@pytest.fixture
def client_app(sample_records):
    """App with a signed-in analyst and the sample dataset loaded."""
    app = create_app()
    init_services(app, get_settings(), store=InMemoryKeyValueStore({AUTH_KEY: AUTH_VALUE}))
    app.state.table_service.store.load(sample_records)
    return app


@pytest.fixture
def client_app_no_auth(sample_records):
    """App without the sign-in flag (for testing auth failures)."""
    app = create_app()
    init_services(app, get_settings(), store=InMemoryKeyValueStore())
    app.state.table_service.store.load(sample_records)
    return app
