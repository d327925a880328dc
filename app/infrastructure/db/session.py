"""
Database session management (SQLAlchemy)
"""
from collections.abc import Iterator

import psycopg
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from app.config import get_settings

# Timeout on establishing a datastore connection, seconds
CONNECT_TIMEOUT = 10


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for all ORM models
    """
    pass


_engine = None
_SessionLocal = None


def get_engine():
    """Get or create the pooled SQLAlchemy engine"""
    global _engine
    if _engine is None:
        url = get_settings().get_sqlalchemy_url()
        connect_args = {"connect_timeout": CONNECT_TIMEOUT} if url.startswith("postgresql") else {}
        _engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args)
    return _engine


def get_session_factory():
    """Get or create session factory"""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine(), autoflush=False, autocommit=False)
    return _SessionLocal


def get_db() -> Iterator[Session]:
    """
    FastAPI dependency: 요청마다 세션을 열고 응답 후 닫는다

    Usage:
        @router.get("/api/v1/questions")
        def list_questions(db: Session = Depends(get_db)):
            ...
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> None:
    """
    Readiness probe: raw psycopg round-trip to PostgreSQL

    Raises:
        psycopg.OperationalError: DB에 연결할 수 없는 경우
    """
    settings = get_settings()
    dsn = settings.DATABASE_URL.replace("postgresql+psycopg://", "postgresql://", 1)
    with psycopg.connect(dsn, connect_timeout=3) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1;")
            cur.fetchone()
