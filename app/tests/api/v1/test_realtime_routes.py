"""Tests for the real-time event and channel authorization endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.operations import OperationResult
from infrastructure.services.providers import get_dispatcher
from modules.notifications import NotificationDispatcher

EVENTS_URL = "/api/v1/realtime/events"
AUTH_URL = "/api/v1/realtime/auth"


@pytest.mark.unit
class TestPublishEvent:
    def test_outsider_is_forbidden(self, client, auth_headers, broker):
        response = client.post(
            EVENTS_URL,
            json={"channel": "dm:alice:bob", "event": "new_message", "data": {"content": "hi"}},
            headers=auth_headers("eve"),
        )

        assert response.status_code == 403
        assert response.json()["error"] == "unauthorized"
        assert broker.published == []

    def test_pass_through_event(self, client, auth_headers):
        response = client.post(
            EVENTS_URL,
            json={"channel": "user:alice", "event": "typing", "data": {"on": True}},
            headers=auth_headers("alice"),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["payload"] == {"on": True, "senderId": "alice"}
        assert body["delivered"] is True

    def test_delivery_failure_is_partial_success(
        self, app, client, auth_headers, authorizer, message_store, status_service
    ):
        broker = MagicMock()
        broker.publish = AsyncMock(return_value=OperationResult.transient_error("down"))
        dispatcher = NotificationDispatcher(
            authorizer=authorizer,
            message_store=message_store,
            broker=broker,
            status_service=status_service,
        )
        app.dependency_overrides[get_dispatcher] = lambda: dispatcher

        response = client.post(
            EVENTS_URL,
            json={"channel": "dm:alice:bob", "event": "new_message", "data": {"content": "hi"}},
            headers=auth_headers("alice"),
        )

        assert response.status_code == 202
        body = response.json()
        assert body["delivered"] is False
        assert body["persisted"]["content"] == "hi"
        assert body["persisted"]["senderId"] == "alice"


@pytest.mark.unit
class TestChannelAuth:
    def test_presence_returns_user_info(self, client, auth_headers):
        response = client.post(
            AUTH_URL, json={"channelName": "presence:lobby"}, headers=auth_headers("alice")
        )

        assert response.status_code == 200
        assert response.json() == {
            "channel": "presence:lobby",
            "allowed": True,
            "userInfo": {"user_id": "alice"},
        }

    def test_own_user_channel_allowed(self, client, auth_headers):
        response = client.post(
            AUTH_URL, json={"channelName": "user:alice"}, headers=auth_headers("alice")
        )
        assert response.json() == {"channel": "user:alice", "allowed": True}

    def test_other_user_channel_forbidden(self, client, auth_headers):
        response = client.post(
            AUTH_URL, json={"channelName": "user:bob"}, headers=auth_headers("alice")
        )
        assert response.status_code == 403
