"""Fixtures for HTTP layer tests."""

import jwt
import pytest
from fastapi.testclient import TestClient

from api.dependencies.rate_limits import get_limiter
from infrastructure.configuration import Settings
from infrastructure.identity import PrincipalResolver
from infrastructure.services.providers import (
    get_dispatcher,
    get_message_store,
    get_principal_resolver,
    get_settings,
    get_status_service,
)
from server.server import create_app

JWT_SECRET = "api-test-secret-with-enough-length-for-hs256"


@pytest.fixture
def test_settings():
    return Settings(PREFIX="test-")


@pytest.fixture
def app(test_settings, dispatcher, message_store, status_service):
    get_limiter().reset()
    app = create_app(test_settings)
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    app.dependency_overrides[get_message_store] = lambda: message_store
    app.dependency_overrides[get_status_service] = lambda: status_service
    app.dependency_overrides[get_principal_resolver] = lambda: PrincipalResolver(
        secret=JWT_SECRET
    )
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    """Factory for Authorization headers identifying a user.

    Example:
        client.get(url, headers=auth_headers("alice"))
    """

    def _factory(user_id: str) -> dict:
        token = jwt.encode({"userId": user_id}, JWT_SECRET, algorithm="HS256")
        return {"Authorization": f"Bearer {token}"}

    return _factory
