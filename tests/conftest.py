"""
Pytest configuration and shared fixtures for Stock API tests.

Provides database fixtures, an HTTP test client and test data.
"""

from typing import Generator, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from stockapi import config
from stockapi.db_client import StockDB
from stockapi.fastapi_server import create_app
from stockapi.models import StockCreate
from stockapi.schema import create_schema


@pytest.fixture
def test_engine():
    """
    Create an in-memory SQLite engine shared across threads.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def db_client(test_engine) -> StockDB:
    """
    Provide a database client with the stocks table created.
    """
    create_schema(test_engine)
    return StockDB(engine=test_engine)


@pytest.fixture
def broken_db_client(test_engine) -> StockDB:
    """
    Provide a database client whose stocks table does not exist, so every
    query fails at the database layer.
    """
    return StockDB(engine=test_engine)


@pytest.fixture
def client(db_client: StockDB) -> TestClient:
    """
    Provide an HTTP client for the app bound to the test database.
    """
    return TestClient(create_app(db_client))


@pytest.fixture
def broken_client(broken_db_client: StockDB) -> TestClient:
    """
    Provide an HTTP client for an app whose database queries all fail.
    """
    return TestClient(create_app(broken_db_client))


@pytest.fixture
def sample_stocks() -> List[StockCreate]:
    """
    Sample stocks for seeding.
    """
    return [
        StockCreate(name="Acme", price=10.5, company="Acme Inc"),
        StockCreate(name="Globex", price=42.25, company="Globex Corporation"),
        StockCreate(name="Initech", price=3.75, company="Initech LLC"),
    ]


@pytest.fixture
def seed_test_data(db_client: StockDB, sample_stocks: List[StockCreate]) -> List[int]:
    """
    Seed the test database and return the generated ids.
    """
    return [db_client.create(stock) for stock in sample_stocks]


@pytest.fixture
def clean_settings(monkeypatch) -> Generator[None, None, None]:
    """
    Reset the settings singleton and isolate it from the environment and .env.
    """
    for key in ["POSTGRES_URL", "API_HOST", "API_PORT", "LOG_LEVEL", "LOG_FILE"]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setitem(config.Settings.model_config, "env_file", None)
    config._settings = None
    
    yield
    
    config._settings = None
