"""
Pytest fixtures for the Workly client tests.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from workly.storage import MemoryKeyValueStore, SQLiteKeyValueStore
from workly.types import AuthUser, UserRole


@pytest.fixture(autouse=True)
def workly_home(tmp_path, monkeypatch):
    """Keep local state out of the real home directory."""
    home = tmp_path / "workly-home"
    monkeypatch.setenv("WORKLY_HOME", str(home))
    return home


@pytest.fixture
def sqlite_store(tmp_path):
    return SQLiteKeyValueStore(tmp_path / "prefs.db")


@pytest.fixture
def memory_store():
    return MemoryKeyValueStore()


@pytest.fixture
def sample_user():
    return AuthUser(
        id="user-1",
        email="ana@example.com",
        name="Ana Novak",
        role=UserRole.PROVIDER,
        language="en",
        phone="+38640111222",
        avatar_url="https://jcclzdqjpttktshqrcvr.supabase.co/storage/v1/object/public/avatars/user-1/avatar.png",
        specialties=["plumbing", "electrical"],
        completed_requests=12,
    )


@pytest.fixture
def profile_row(sample_user):
    return {**sample_user.to_dict(), "bio": None, "created_at": "2026-01-01T00:00:00Z"}


@pytest.fixture
def mock_supabase_client(profile_row):
    """Supabase client double with a signed-in user and one profile row."""
    client = MagicMock()
    auth_user = SimpleNamespace(id=profile_row["id"], email=profile_row["email"])
    client.auth.sign_in_with_password.return_value = SimpleNamespace(user=auth_user, session=None)
    client.auth.get_user.return_value = SimpleNamespace(user=auth_user)

    query = client.table.return_value.select.return_value.eq.return_value.limit.return_value
    query.execute.return_value = SimpleNamespace(data=[profile_row])

    bucket = client.storage.from_.return_value
    bucket.get_public_url.return_value = "https://example.supabase.co/storage/v1/object/public/avatars/user-1/avatar.png"
    return client
