"""Pytest fixtures for testing"""

import pytest
from datetime import datetime
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from broke_gateway.api.main import create_app
from broke_gateway.api.dependencies import get_now
from broke_gateway.infrastructure.database.models import Base
from broke_gateway.infrastructure.database.session import get_db
from broke_gateway.domain.models import Expense, Occurrence


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Pinned clock for API tests: a Sunday, midday
FIXED_NOW = datetime(2024, 6, 30, 12, 0)


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
    """Create FastAPI test client with test database and a fixed clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    return TestClient(app)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_occurrence():
    """Factory for one-off occurrences"""

    def _make(when: datetime, amount: float, category: str = "Food", title: str = "Item") -> Occurrence:
        return Occurrence(date=when, amount=amount, category=category, title=title, is_recurring=False)

    return _make


@pytest.fixture
def sample_expenses() -> list[Expense]:
    """Monthly rent plus a few one-off purchases"""
    return [
        Expense(
            title="Rent",
            amount=Decimal("1000.00"),
            date=datetime(2024, 4, 15, 9, 0),
            category="Housing",
            is_recurring=True,
        ),
        Expense(
            title="Groceries",
            amount=Decimal("50.00"),
            date=datetime(2024, 6, 20, 18, 30),
            category="Food",
        ),
        Expense(
            title="Coffee",
            amount=Decimal("4.50"),
            date=datetime(2024, 6, 29, 8, 0),
            category="Food",
        ),
    ]
