"""Common test fixtures for the Noteful API."""

import os

# Settings are read at import time; provide the required values before any
# noteful module is imported.
os.environ.setdefault("APP_SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("APP_SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("APP_JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ["APP_ENABLE_RATE_LIMITING"] = "false"

from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from fakes import (  # noqa: E402
    FakeFolderRepository,
    FakeNoteRepository,
    FakeTagRepository,
    FakeUserRepository,
)
from noteful.config import settings  # noqa: E402
from noteful.container import build_services  # noqa: E402
from noteful.core.models.user import User  # noqa: E402
from noteful.main import create_app  # noqa: E402


@pytest.fixture(params=["asyncio"])
def anyio_backend(request):
    """Restrict anyio tests to asyncio only (trio is not installed)."""
    return request.param


@pytest.fixture
def user_repo():
    return FakeUserRepository()


@pytest.fixture
def folder_repo():
    return FakeFolderRepository()


@pytest.fixture
def tag_repo():
    return FakeTagRepository()


@pytest.fixture
def note_repo():
    return FakeNoteRepository()


@pytest.fixture
def services(user_repo, folder_repo, tag_repo, note_repo):
    """Services wired over the in-memory repositories."""
    return build_services(
        settings=settings,
        users=user_repo,
        folders=folder_repo,
        tags=tag_repo,
        notes=note_repo,
    )


@pytest.fixture
def alice_id():
    return uuid4()


@pytest.fixture
def bob_id():
    return uuid4()


@pytest.fixture
def client(services):
    app = create_app(services)
    with TestClient(app) as test_client:
        yield test_client


def _bearer(services, user_repo, user_id, username):
    user = User(id=user_id, username=username, password_hash="unused")
    user_repo.rows[user.id] = user
    return {"Authorization": f"Bearer {services.auth.issue_token(user)}"}


@pytest.fixture
def alice_headers(services, user_repo, alice_id):
    return _bearer(services, user_repo, alice_id, "alice-user")


@pytest.fixture
def bob_headers(services, user_repo, bob_id):
    return _bearer(services, user_repo, bob_id, "bob-user")
