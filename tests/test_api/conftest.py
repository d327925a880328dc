"""
API test fixtures: TestClient wired to the in-memory database
"""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock

from app.api.deps import get_db, get_current_user_id
from app.api.dedup import DuplicateSubmissionGuard, get_submission_guard
from app.api.v1.ai import get_ai_client
from app.infrastructure.ai.gemini import GeminiClient
from app.main import app


@pytest.fixture
def login():
    """Mutable session stand-in: login["user_id"] = "..." to act as that user."""
    return {"user_id": None}


@pytest.fixture
def ai_client():
    client = Mock(spec=GeminiClient)
    client.enabled = True
    client.answer.return_value = "AI 답변"
    return client


@pytest.fixture
def client(session_factory, login, ai_client):
    """FastAPI 테스트 클라이언트 (DB, 중복 방지, AI 클라이언트 override)"""
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    guard = DuplicateSubmissionGuard(window_seconds=5.0)

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_submission_guard] = lambda: guard
    app.dependency_overrides[get_ai_client] = lambda: ai_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def as_user(client, login, make_user):
    """Authenticated client for a fresh member (id "me")."""
    make_user("me", display_name="나")
    login["user_id"] = "me"
    app.dependency_overrides[get_current_user_id] = lambda: login["user_id"]
    return client
