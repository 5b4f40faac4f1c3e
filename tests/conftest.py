"""Pytest fixtures for testing"""

import pytest
from typing import Generator, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from capacity_gateway.api.main import create_app
from capacity_gateway.infrastructure.database.models import Base
from capacity_gateway.infrastructure.database.session import get_db
from capacity_gateway.domain.models import Bank, Project


# Test database
TEST_DATABASE_URL = "sqlite:///./test_capacity.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def sample_banks() -> List[Bank]:
    """Small book: a local French bank, a global bank and a US bank with nuclear exclusion"""
    return [
        Bank(
            id="bnp",
            name="Banque Locale",
            total_capacity=500,
            used_capacity=100,
            countries=["FR", "DE"],
            credit_rating="A+",
            max_tenor=10,
            average_price=60,
        ),
        Bank(
            id="global",
            name="Global Trade Bank",
            total_capacity=1000,
            used_capacity=200,
            countries=["GLOBAL"],
            credit_rating="AA",
            max_tenor=15,
            average_price=80,
        ),
        Bank(
            id="usbank",
            name="US Regional",
            total_capacity=300,
            used_capacity=0,
            countries=["US"],
            credit_rating="BBB",
            average_price=40,
            sensitive_subjects=["Nuclear"],
        ),
    ]


@pytest.fixture
def sample_projects() -> List[Project]:
    return [
        Project(id="p-fr", name="Paris Metro Extension", country="FR", capacity_needed=150, tenor_required=8),
        Project(id="p-us", name="Texas Grid", country="US", capacity_needed=100, project_type=["Nuclear"]),
        Project(
            id="p-done",
            name="Issued Port",
            country="FR",
            capacity_needed=50,
            status="Issued",
            allocated_bank_id="bnp",
        ),
    ]
