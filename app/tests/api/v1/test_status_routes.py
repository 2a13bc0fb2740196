"""Tests for the presence status endpoints and system routes."""

from unittest.mock import AsyncMock

import pytest


@pytest.mark.unit
class TestStatusRoutes:
    def test_update_then_read_status(self, client, auth_headers, broker):
        response = client.patch(
            "/api/v1/users/status", json={"status": "dnd"}, headers=auth_headers("alice")
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "status": "dnd"}
        assert broker.published[0].channel == "presence:status"

        status = client.get("/api/v1/users/alice/status", headers=auth_headers("bob"))
        assert status.json() == {"userId": "alice", "status": "dnd"}

    def test_invalid_status_rejected(self, client, auth_headers):
        response = client.patch(
            "/api/v1/users/status", json={"status": "busy"}, headers=auth_headers("alice")
        )
        assert response.status_code == 400

    def test_unknown_user_is_offline(self, client, auth_headers):
        response = client.get("/api/v1/users/ghost/status", headers=auth_headers("alice"))
        assert response.json()["status"] == "offline"

    def test_two_factor_reports_callers_flag(self, client, auth_headers, status_service):
        status_service.two_factor_enabled = AsyncMock(return_value=True)

        response = client.get("/api/v1/users/me/two-factor", headers=auth_headers("alice"))

        assert response.status_code == 200
        assert response.json() == {"enabled": True}
        status_service.two_factor_enabled.assert_awaited_once_with("alice")

    def test_two_factor_defaults_to_disabled(self, client, auth_headers):
        response = client.get("/api/v1/users/me/two-factor", headers=auth_headers("ghost"))
        assert response.json() == {"enabled": False}

    def test_two_factor_requires_authentication(self, client):
        response = client.get("/api/v1/users/me/two-factor")
        assert response.status_code == 401


@pytest.mark.unit
class TestSystemRoutes:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_version(self, client, test_settings):
        response = client.get("/version")
        assert response.json() == {"version": test_settings.GIT_SHA}
