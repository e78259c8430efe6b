"""
Shared test fixtures: throwaway SQLite database, test client, catalog seeds.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point the app at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from scsd.database import Base, get_db
from scsd.main import app


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sample_client(client):
    response = client.post("/api/clients/", json={
        "first_name": "Dana",
        "last_name": "Whitfield",
        "email": "dana@example.com",
        "client_type": "Contractor",
    })
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def labourer(client):
    response = client.post("/api/labour/", json={
        "name": "Crew hand",
        "role": "General Labour",
        "cost_rate": 45,
        "charge_out_rate": 60,
        "night_rate": 90,
    })
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def roller(client):
    response = client.post("/api/equipment/", json={
        "name": "Multi-tyre roller",
        "category": "Rollers",
        "charge_out_rate": 80,
        "night_rate": 110,
        "owned_or_hired": "Owned",
    })
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def bitumen(client):
    response = client.post("/api/materials/", json={
        "name": "C170 bitumen",
        "purchase_price": 1.1,
        "material_type": "Bitumen",
        "measurement_unit": "L",
        "formula": 1,
    })
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def asphalt(client):
    response = client.post("/api/materials/", json={
        "name": "AC10 asphalt",
        "purchase_price": 140,
        "material_type": "Asphalt",
        "measurement_unit": "t",
        "formula": 2.4,
    })
    assert response.status_code == 200
    return response.json()
