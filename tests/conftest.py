"""
Pytest fixtures for testing
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from family_finance.infrastructure.db.session import Base
from family_finance.infrastructure.storage import FinanceStorage
import family_finance.infrastructure.db.models  # noqa: F401  (registers tables on Base)


@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared across threads (TestClient runs sync routes in a pool)"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def sample_account_id():
    """Sample account ID for tests"""
    return 1


@pytest.fixture
def storage(db_session, sample_account_id) -> FinanceStorage:
    """Storage scoped to the sample account"""
    return FinanceStorage(db_session, sample_account_id)
