"""
Shared test fixtures — SQLite test database, test client, sample payloads.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point the app at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from invoicer.database import Base, get_db
from invoicer.main import app


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
def invoice_payload():
    """A two-line invoice form: a costed cabinet with materials and a plain door."""
    return {
        "client": {
            "name": "Nour Hassan",
            "company": "Hassan Interiors",
            "address": "12 Tahrir St, Cairo",
            "phone": "+20 100 000 0000",
            "email": "nour@hassan.example",
            "site_address": "New Cairo villa 14",
        },
        "meta": {
            "invoice_no": "INV-1001",
            "invoice_date": "2026-10-01",
            "due_date": "2026-10-15",
            "project_name": "Villa 14 kitchen",
            "order_class": "Residential",
        },
        "items": [
            {
                "category": "Cabinet",
                "code": "CB-01",
                "description": "Tall cabinet",
                "dimensions": "220×80×40 cm",
                "qty": 2,
                "unit_price": 10000,
                "materials": [
                    {"name": "Cabinet body core (MDF 16mm)", "unit": "sheet",
                     "quantity": 0.5, "cost": 525},
                    {"name": "Door hinges", "unit": "pcs", "quantity": 10, "cost": 890},
                ],
            },
            {
                "category": "Door",
                "code": "DR-01",
                "description": "Main door",
                "dimensions": "220×90×4 cm",
                "qty": 1,
                "unit_price": 5000,
            },
        ],
        "vat_rate": 14,
        "discount": 1000,
        "notes": "50% deposit on order.",
    }
