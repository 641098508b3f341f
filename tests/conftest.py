"""
Pytest configuration and fixtures

Tests run against a throwaway SQLite file. Tables are dropped and recreated
around every test, and the in-memory session registry is cleared.
"""
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="paintrack-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["NOTIFICATIONS_ENABLED"] = "true"

import pytest
from fastapi.testclient import TestClient

from app.core.config import Base, SessionLocal, engine
from app.services.notifications import notifier
from app.services.session_state import session_registry
from main import app


@pytest.fixture(autouse=True)
def _fresh_state():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session_registry.clear()
    yield
    session_registry.clear()


@pytest.fixture
def delivered(monkeypatch):
    """Record notifications handed to the notifier instead of logging them."""
    sent = []
    monkeypatch.setattr(notifier, "deliver", lambda title, body: sent.append((title, body)))
    return sent


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def signup(client):
    """Create an account and return the token response body."""
    def _signup(email="patient@example.com", password="secret123", name="Test Patient"):
        response = client.post(
            "/auth/signup",
            json={"email": email, "password": password, "display_name": name},
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _signup


@pytest.fixture
def auth_headers(signup):
    """Sign up a test user and return bearer headers."""
    token = signup()["access_token"]
    return {"Authorization": f"Bearer {token}"}
