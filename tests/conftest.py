"""
Pytest fixtures for testing
"""
import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.infrastructure.db.session import Base
from app.infrastructure.db.models import User


@pytest.fixture
def db_engine():
    """Create in-memory SQLite engine for tests (one shared connection)."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=OFF")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine)


@pytest.fixture
def db_session(session_factory) -> Session:
    """Create database session for tests"""
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def settings():
    """Settings with the default reward tables and AI enabled."""
    return Settings(GEMINI_API_KEY="test-key", DATABASE_URL="sqlite://")


@pytest.fixture
def make_user(db_session):
    """Factory: insert a user row and return it."""
    def _make(user_id="google-1", **fields):
        fields.setdefault("display_name", f"user {user_id}")
        user = User(id=user_id, **fields)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make


@pytest.fixture
def sample_user(make_user):
    """Fresh member: level 1, 0 EXP, 0 points, score 0"""
    return make_user("google-1", display_name="김철수")
