"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

# Add project root to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Set test environment variables before importing the app
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATA_SOURCE_LOAD_ON_STARTUP", "false")
os.environ.setdefault("OTEL_LOG_RECORD_FORMAT", "console")

from txn_explorer.core.config import (  # noqa: E402
    AuthConfig,
    DataSourceConfig,
    TableConfig,
)
from txn_explorer.domain.records import RecordStore  # noqa: E402
from txn_explorer.persistence.kv_store import InMemoryKeyValueStore  # noqa: E402
from txn_explorer.persistence.rules_repository import RulesRepository  # noqa: E402
from txn_explorer.services.rules_service import RulesService  # noqa: E402
from txn_explorer.services.table_service import TableService  # noqa: E402

# =============================================================================
# Sample transaction export
# =============================================================================

SAMPLE_CSV = (
    "transaction_id,user_id,user_name,merchant_name,charged_amount,state,fraud\n"
    "1001,7,Alice Smith,Coffee Corner,12.50,approved,0\n"
    "1002,8,Bob Jones,Electronics Hub,899.99,declined,1\n"
    "1003,7,Alice Smith,Grocery Mart,45.00,approved,0\n"
    "1004,9,Carol White,Electronics Hub,1500,declined,1\n"
    "1005,10,Dan Brown,Coffee Corner,4.75,pending,0\n"
    "1006,8,Bob Jones,Travel Desk,300,declined,0\n"
)


@pytest.fixture
def sample_records() -> list[dict[str, str]]:
    """Records matching SAMPLE_CSV, in file order."""
    return [
        {
            "transaction_id": "1001",
            "user_id": "7",
            "user_name": "Alice Smith",
            "merchant_name": "Coffee Corner",
            "charged_amount": "12.50",
            "state": "approved",
            "fraud": "0",
        },
        {
            "transaction_id": "1002",
            "user_id": "8",
            "user_name": "Bob Jones",
            "merchant_name": "Electronics Hub",
            "charged_amount": "899.99",
            "state": "declined",
            "fraud": "1",
        },
        {
            "transaction_id": "1003",
            "user_id": "7",
            "user_name": "Alice Smith",
            "merchant_name": "Grocery Mart",
            "charged_amount": "45.00",
            "state": "approved",
            "fraud": "0",
        },
        {
            "transaction_id": "1004",
            "user_id": "9",
            "user_name": "Carol White",
            "merchant_name": "Electronics Hub",
            "charged_amount": "1500",
            "state": "declined",
            "fraud": "1",
        },
        {
            "transaction_id": "1005",
            "user_id": "10",
            "user_name": "Dan Brown",
            "merchant_name": "Coffee Corner",
            "charged_amount": "4.75",
            "state": "pending",
            "fraud": "0",
        },
        {
            "transaction_id": "1006",
            "user_id": "8",
            "user_name": "Bob Jones",
            "merchant_name": "Travel Desk",
            "charged_amount": "300",
            "state": "declined",
            "fraud": "0",
        },
    ]


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def sample_csv_file(tmp_path: Path) -> Path:
    """SAMPLE_CSV written to a temporary file."""
    path = tmp_path / "transactions.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def record_store(sample_records) -> RecordStore:
    store = RecordStore()
    store.load(sample_records)
    return store


@pytest.fixture
def table_config() -> TableConfig:
    return TableConfig(page_size=2)


@pytest.fixture
def table_service(record_store, table_config) -> TableService:
    return TableService(record_store, table_config)


@pytest.fixture
def data_source_config(sample_csv_file) -> DataSourceConfig:
    """Local data source with retries that do not sleep."""
    return DataSourceConfig(
        location=str(sample_csv_file),
        max_attempts=3,
        base_delay_seconds=0,
        max_delay_seconds=0,
    )


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def rules_service(kv_store) -> RulesService:
    return RulesService(RulesRepository(kv_store))


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(username="analyst", password="s3cret")


@pytest.fixture
def valid_rule_payload() -> dict:
    """A complete rule draft in the camelCase wire format."""
    return {
        "name": "Large electronics purchases",
        "category": "Transaction Amount",
        "description": "Flags unusually large purchases at electronics merchants",
        "filters": [
            {"column": "charged_amount", "operator": "greater_than", "value": "500"},
            {"column": "merchant_name", "operator": "contains", "value": "Electronics"},
        ],
        "filterConnectors": ["AND"],
        "threshold": {"operator": "greater_than", "value": "3"},
        "settings": {"reAlertDays": 7, "frequency": "daily", "action": "email_notification"},
        "active": True,
    }
