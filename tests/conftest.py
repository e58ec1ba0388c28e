import os

# Must be set before the application settings are imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["AI_PROVIDER"] = "gemini"
os.environ["ENVIRONMENT"] = "test"

from typing import Callable, List, Optional, Union

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from autotest.core.database import get_database
from autotest.core.dependencies import get_ai_service
from autotest.core.exceptions import AIServiceError
from autotest.models.database import Base
from autotest.repositories.interfaces.ai_service import IAIService

# Test database
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_REPLY = "def test_generated():\n    assert True\n"

Reply = Union[str, Exception]


class FakeAIService(IAIService):
    """Scripted provider: replies are consumed in order, then ``default`` is returned."""

    model_name = "fake-model"

    def __init__(self, replies: Optional[List[Reply]] = None, configured: bool = True, default: Reply = DEFAULT_REPLY):
        self.replies = list(replies or [])
        self.configured = configured
        self.default = default
        self.calls: List[dict] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def generate_text(self, prompt, system=None, temperature=0.2, max_tokens=1000):
        self.calls.append({"prompt": prompt, "system": system, "max_tokens": max_tokens})
        reply = self.replies.pop(0) if self.replies else self.default
        if isinstance(reply, Exception):
            raise reply
        return reply


class FailingAIService(FakeAIService):
    def __init__(self, error: Optional[Exception] = None):
        super().__init__(default=error or AIServiceError("provider down"))


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_ai() -> FakeAIService:
    return FakeAIService()


@pytest.fixture
def test_client(db_session, fake_ai):
    """Synchronous test client backed by an in-memory database and a scripted model"""
    app.dependency_overrides[get_database] = override_get_db
    app.dependency_overrides[get_ai_service] = lambda: fake_ai
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def register(test_client) -> Callable[..., dict]:
    """Register a user and return ``{"id", "token", "headers"}``"""

    def _register(email: str = "owner@example.com", name: str = "Owner", password: str = "secret123") -> dict:
        response = test_client.post(
            "/api/auth/register", json={"email": email, "name": name, "password": password}
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return {
            "id": data["user"]["id"],
            "token": data["token"],
            "headers": {"Authorization": f"Bearer {data['token']}"},
        }

    return _register


@pytest.fixture
def auth(register) -> dict:
    return register()
