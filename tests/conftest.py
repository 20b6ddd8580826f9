"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from powerdesk.core.database import Base, get_db
from powerdesk.main import app


@pytest.fixture
def test_db():
    """Create an in-memory test database."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(test_db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def property_id(client: TestClient) -> int:
    """Create a property and return its id."""
    response = client.post("/api/properties", json={"name": "Tower A", "code": "TWA"})
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def meter_id(client: TestClient, property_id: int) -> int:
    """Create a main grid meter and return its id."""
    response = client.post(
        f"/api/properties/{property_id}/electricity-meters",
        json={"name": "Grid Main", "meter_number": "GM-001", "meter_type": "main"},
    )
    assert response.status_code == 201
    return response.json()["id"]
