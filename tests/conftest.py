"""
Test configuration and fixtures for the Dolet health assistant.

- In-memory SQLite engine created per test
- TestClient with database and Vertex dependency overrides
- Real VertexService wired to a scripted upstream (httpx.MockTransport)
  and an in-memory credential provider
"""

import os

# Settings are read at import time; configure before importing the app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["VERTEX_PROJECT_ID"] = "test-project"
os.environ["VERTEX_LOCATION"] = "us-central1"
os.environ["VERIFY_CREDENTIALS_ON_STARTUP"] = "false"
os.environ["EXPOSE_UPSTREAM_ERRORS"] = "false"

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import dolet.models  # noqa: F401
from dolet.database import Base, get_db
from dolet.main import app
from dolet.services.dependencies import get_vertex_service
from dolet.services.vertex_service import VertexService
from tests.fixtures.mocks import FakeCredentialProvider, MockVertexUpstream


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def test_engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(test_engine) -> Generator[Session, None, None]:
    """Database session bound to the per-test engine."""
    TestingSessionLocal = sessionmaker(bind=test_engine, autoflush=False)
    session = TestingSessionLocal()

    yield session

    session.close()


# =============================================================================
# Vertex Fixtures
# =============================================================================


@pytest.fixture
def upstream() -> MockVertexUpstream:
    """Scripted generateContent endpoint; records every outbound request."""
    return MockVertexUpstream()


@pytest.fixture
def fake_credentials() -> FakeCredentialProvider:
    return FakeCredentialProvider()


@pytest.fixture
def vertex_service(upstream, fake_credentials) -> VertexService:
    """Real invoker talking to the scripted upstream."""
    return VertexService(
        credentials=fake_credentials,
        project_id="test-project",
        location="us-central1",
        timeout=5,
        connect_timeout=1,
        transport=upstream.transport,
    )


@pytest.fixture
def broken_credentials(monkeypatch):
    """Make the process-wide credential provider fail to load."""
    from dolet.services.credentials import CredentialProvider
    from dolet.services.dependencies import get_credential_provider
    from dolet.services.exceptions import AuthError

    def fail_to_load():
        raise AuthError("Authentication failed: key file missing")

    monkeypatch.setattr(CredentialProvider, "from_settings", fail_to_load)
    get_credential_provider.cache_clear()

    yield

    get_credential_provider.cache_clear()


@pytest.fixture
def candidate_models(monkeypatch):
    """Pin both candidate lists to short, predictable values."""
    from dolet.config import settings

    monkeypatch.setattr(settings, "recommendation_models", ["model-a", "model-b"])
    monkeypatch.setattr(settings, "chat_models", ["chat-a", "chat-b"])
    return settings


# =============================================================================
# TestClient Fixtures
# =============================================================================


@pytest.fixture
def client(db: Session, vertex_service: VertexService) -> Generator[TestClient, None, None]:
    """
    TestClient with database and Vertex dependency overrides.

    The database session is injected into get_db; the scripted Vertex
    service replaces the credential-backed one.
    """

    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close - managed by db fixture

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_vertex_service] = lambda: vertex_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def unconfigured_client(client: TestClient, broken_credentials) -> TestClient:
    """TestClient using the real Vertex dependency with unusable credentials."""
    app.dependency_overrides.pop(get_vertex_service, None)
    return client


# =============================================================================
# pytest markers
# =============================================================================


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
