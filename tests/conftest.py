"""
Shared fixtures.

MongoDB is replaced by mongomock, external metadata APIs by an httpx.MockTransport
and the LLM by a Mock, so the whole ingestion pipeline runs in-process.
"""

import base64
import httpx
import mongomock
import pytest
from datetime import datetime, timezone
from unittest.mock import Mock
from fastapi.testclient import TestClient

from secondbrain.core.db import get_db
from secondbrain.core.security import create_access_token, get_password_hash
from secondbrain.main import app
from secondbrain.services.content_service import ContentService
from secondbrain.services.link_service import LinkService
from secondbrain.services.summary_service import build_default_provider, get_summary_provider

GITHUB_README = "# y\n\nA tiny library that does x for y."
GENERATED_SUMMARY = "Generated summary of the repository."


def metadata_api(request: httpx.Request) -> httpx.Response:
    """Stand-in for the YouTube, Twitter and GitHub metadata APIs."""
    host, path = request.url.host, request.url.path
    if host == "api.github.com":
        if path.endswith("/readme"):
            encoded = base64.b64encode(GITHUB_README.encode()).decode()
            return httpx.Response(200, json={"content": encoded, "encoding": "base64"})
        if path.startswith("/repos/missing/"):
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(200, json={"description": "Repository description"})
    if host == "www.googleapis.com":
        return httpx.Response(200, json={"items": [{"snippet": {"title": "Video title", "description": "Video description"}}]})
    if host == "api.twitter.com":
        return httpx.Response(200, json={"data": {"text": "Tweet text"}})
    return httpx.Response(500)


@pytest.fixture
def db():
    client = mongomock.MongoClient()
    yield client.second_brain_test
    client.close()


@pytest.fixture
def generate():
    return Mock(return_value=GENERATED_SUMMARY)


@pytest.fixture
def http_client():
    client = httpx.Client(transport=httpx.MockTransport(metadata_api))
    yield client
    client.close()


@pytest.fixture
def provider(generate, http_client):
    return build_default_provider(generate=generate, http_client=http_client)


@pytest.fixture
def content_service(db, provider):
    return ContentService(db, provider)


@pytest.fixture
def link_service(db, content_service):
    return LinkService(db, content_service)


def make_user(db, username: str, email: str = None, verified: bool = True):
    now = datetime.now(timezone.utc)
    result = db.users.insert_one({
        "username": username,
        "email": email or f"{username}@example.com",
        "hashed_password": get_password_hash("secret123"),
        "is_email_verified": verified,
        "created_at": now,
        "updated_at": now,
    })
    return result.inserted_id


@pytest.fixture
def owner_id(db):
    return make_user(db, "alice")


@pytest.fixture
def other_owner_id(db):
    return make_user(db, "bob")


@pytest.fixture
def client(db, provider):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_summary_provider] = lambda: provider
    test_client = TestClient(app, raise_server_exceptions=False)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(owner_id):
    token = create_access_token({"id": str(owner_id)})
    return {"Authorization": f"Bearer {token}"}
