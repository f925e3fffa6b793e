"""Pytest configuration and fixtures."""

import os
import secrets
import time
from unittest.mock import MagicMock

import pytest

# Generate a unique test secret for this test run to prevent token forgery
_TEST_JWT_SECRET = f"test-only-{secrets.token_urlsafe(32)}"

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ.setdefault("SUPABASE_PUBLISHABLE_KEY", "test-publishable-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", _TEST_JWT_SECRET)

from app.config import get_settings  # noqa: E402
from app.database import get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.rate_limit import limiter  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402

# Clearly invalid test ID that cannot collide with production IDs
TEST_USER_ID = "00000000-0000-0000-0000-00000000test"


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with empty rate-limit counters."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture(autouse=True)
def mock_db():
    """Replace the Supabase client dependency so no test touches the network."""
    db = MagicMock()
    app.dependency_overrides[get_db] = lambda: db
    yield db
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def client():
    """Create a test client."""
    return TestClient(app)


@pytest.fixture
def make_token():
    """Build Supabase-shaped access tokens signed with the test secret."""

    def _make(user_id: str = TEST_USER_ID, **claims) -> str:
        settings = get_settings()
        payload = {
            "sub": user_id,
            "aud": settings.supabase_jwt_audience,
            "role": "authenticated",
            "exp": int(time.time()) + 3600,
            **claims,
        }
        return jwt.encode(payload, settings.supabase_jwt_secret, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token):
    """Create auth headers with a test token."""
    return {"Authorization": f"Bearer {make_token()}"}
