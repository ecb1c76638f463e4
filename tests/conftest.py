"""Pytest fixtures for testing"""

import uuid
import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from lypay_survey.api.main import create_app
from lypay_survey.infrastructure.database.models import Base
from lypay_survey.infrastructure.database.session import get_db
from lypay_survey.domain.models import SubscriptionType, SurveyEntry, TransactionStatus, TransactionType


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed reference time so window boundaries are exact
NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


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
def now() -> datetime:
    return NOW


@pytest.fixture
def make_entry() -> Callable[..., SurveyEntry]:
    """Factory for survey entries, created `hours_ago` before NOW"""

    def _make_entry(
        bank: str = "A",
        status: TransactionStatus = TransactionStatus.COMPLETED,
        transaction_type: TransactionType = TransactionType.TRANSFER,
        hours_ago: float = 1,
        amount: str = "100",
        created_at: datetime | None = None,
        rejection_reason: str | None = None,
    ) -> SurveyEntry:
        return SurveyEntry(
            id=uuid.uuid4().hex,
            subscription_type=SubscriptionType.INDIVIDUAL,
            transaction_type=transaction_type,
            amount=Decimal(amount),
            bank_name=bank,
            status=status,
            rejection_reason=rejection_reason,
            created_at=created_at if created_at is not None else NOW - timedelta(hours=hours_ago),
        )

    return _make_entry
