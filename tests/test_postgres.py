"""
Integration tests against a real PostgreSQL server.

Run with STOCKAPI_PG_TESTS=1 and a working Docker daemon.
"""

import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from testcontainers.postgres import PostgresContainer

from stockapi.db_client import StockDB
from stockapi.fastapi_server import create_app
from stockapi.models import StockCreate, StockUpdate
from stockapi.schema import create_schema

pytestmark = pytest.mark.skipif(
    os.environ.get("STOCKAPI_PG_TESTS") != "1",
    reason="set STOCKAPI_PG_TESTS=1 to run PostgreSQL integration tests"
)


@pytest.fixture(scope="module")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """
    Provide a PostgreSQL test container for the module.
    """
    with PostgresContainer("postgres:15-alpine") as postgres:
        yield postgres


@pytest.fixture
def pg_db(postgres_container):
    """
    Provide a database client with a fresh stocks table.
    """
    engine = create_engine(postgres_container.get_connection_url())
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE IF EXISTS stocks"))
    create_schema(engine)
    
    yield StockDB(engine=engine)
    
    engine.dispose()


@pytest.fixture
def pg_client(pg_db):
    return TestClient(create_app(pg_db))


class TestPostgresScenarios:
    """Test the API scenarios against PostgreSQL."""
    
    def test_create_read_update_delete(self, pg_client):
        """Test a full stock lifecycle."""
        response = pg_client.post("/api/newstock", json={"name": "Acme", "price": 10.5, "company": "Acme Inc"})
        assert response.json() == {"id": 1, "message": "stock created successfully"}
        
        response = pg_client.put("/api/stock/1", json={"name": "", "price": 0, "company": "NewCo"})
        assert response.status_code == 200
        
        stock = pg_client.get("/api/stock/1").json()
        assert stock == {"stockid": 1, "name": "Acme", "price": 10.5, "company": "NewCo"}
        
        assert pg_client.delete("/api/deletestock/1").status_code == 200
        assert pg_client.get("/api/stock/1").status_code == 404
        assert pg_client.get("/api/stock").json() == []
    
    def test_update_missing_row(self, pg_client):
        """Test zero affected rows maps to 404."""
        response = pg_client.put("/api/stock/999", json={"name": "Ghost"})
        
        assert response.status_code == 404
    
    def test_all_empty_update_matches_row(self, pg_db):
        """Test PostgreSQL counts matched rows even when nothing changes."""
        stock_id = pg_db.create(StockCreate(name="Acme", price=10.5, company="Acme Inc"))
        
        assert pg_db.update(stock_id, StockUpdate()) == 1
