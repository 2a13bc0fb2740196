"""Unit tests for modules.notifications.dispatcher.

Tests cover:
- Authorization before any side effect
- State changes for new_message, messages_read and status_update
- senderId stamping and pass-through events
- Delivery failures after successful persistence
- End-to-end direct message scenarios
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.exceptions import (
    DeliveryFailure,
    PersistenceFailure,
    UnauthorizedError,
    ValidationError,
)
from infrastructure.operations import OperationResult
from modules.notifications import NotificationDispatcher
from modules.presence import UserStatus


@pytest.fixture
def failing_broker():
    broker = MagicMock()
    broker.publish = AsyncMock(
        return_value=OperationResult.transient_error("broker down", "CONNECTION_ERROR")
    )
    return broker


@pytest.fixture
def dispatcher_with(authorizer, message_store, broker, status_service):
    """Factory for a dispatcher with selected collaborators replaced."""

    def _factory(**overrides) -> NotificationDispatcher:
        params = dict(
            authorizer=authorizer,
            message_store=message_store,
            broker=broker,
            status_service=status_service,
        )
        params.update(overrides)
        return NotificationDispatcher(**params)

    return _factory


@pytest.mark.unit
class TestAuthorization:
    @pytest.mark.asyncio
    async def test_denied_principal_has_no_side_effects(self, dispatcher_with):
        message_store = MagicMock()
        message_store.send = AsyncMock()
        broker = MagicMock()
        broker.publish = AsyncMock()
        dispatcher = dispatcher_with(message_store=message_store, broker=broker)

        with pytest.raises(UnauthorizedError) as exc_info:
            await dispatcher.publish("eve", "dm:alice:bob", "new_message", {"content": "hi"})

        assert exc_info.value.channel == "dm:alice:bob"
        message_store.send.assert_not_awaited()
        broker.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unrecognized_channel_denied(self, dispatcher, broker):
        with pytest.raises(UnauthorizedError):
            await dispatcher.publish("alice", "general", "ping", {})
        assert broker.published == []

    @pytest.mark.asyncio
    async def test_empty_event_name_rejected(self, dispatcher):
        with pytest.raises(ValidationError):
            await dispatcher.publish("alice", "user:alice", "", {})

    @pytest.mark.asyncio
    async def test_non_dict_payload_rejected(self, dispatcher):
        with pytest.raises(ValidationError):
            await dispatcher.publish("alice", "user:alice", "ping", ["x"])  # type: ignore[arg-type]

    def test_authorize_subscription(self, dispatcher):
        decision = dispatcher.authorize_subscription("alice", "presence:lobby")
        assert decision.member_info == {"user_id": "alice"}
        with pytest.raises(UnauthorizedError):
            dispatcher.authorize_subscription("alice", "user:bob")


@pytest.mark.unit
class TestStateChanges:
    @pytest.mark.asyncio
    async def test_new_message_persists_and_publishes_stored_message(
        self, dispatcher, broker, message_store
    ):
        receipt = await dispatcher.publish(
            "bob", "dm:alice:bob", "new_message", {"content": "hey alice"}
        )

        conversation = await message_store.conversation("alice", "bob")
        assert len(conversation) == 1
        assert conversation[0].recipient_id == "alice"

        published = broker.published[0]
        assert published.channel == "dm:alice:bob"
        assert published.event == "new_message"
        assert published.payload["senderId"] == "bob"
        assert published.payload["recipientId"] == "alice"
        assert published.payload["id"] == conversation[0].id
        assert receipt.persisted["id"] == conversation[0].id
        assert receipt.delivered is True

    @pytest.mark.asyncio
    async def test_new_message_without_content_is_rejected(self, dispatcher, broker):
        with pytest.raises(ValidationError):
            await dispatcher.publish("alice", "dm:alice:bob", "new_message", {})
        assert broker.published == []

    @pytest.mark.asyncio
    async def test_messages_read_publishes_count(self, dispatcher, broker, message_store):
        await message_store.send("alice", "bob", "one")

        receipt = await dispatcher.publish("bob", "dm:alice:bob", "messages_read", {})

        assert receipt.persisted == {"readerId": "bob", "count": 1}
        assert broker.published[0].payload == {
            "readerId": "bob",
            "count": 1,
            "senderId": "bob",
        }

    @pytest.mark.asyncio
    async def test_status_update_on_presence_channel(self, dispatcher, broker, status_service):
        receipt = await dispatcher.publish(
            "alice", "presence:status", "status_update", {"status": "dnd"}
        )

        assert await status_service.get_status("alice") == UserStatus.DND
        assert receipt.payload == {"status": "dnd", "senderId": "alice"}

    @pytest.mark.asyncio
    async def test_invalid_status_rejected_before_publish(self, dispatcher, broker):
        with pytest.raises(ValidationError):
            await dispatcher.publish(
                "alice", "presence:status", "status_update", {"status": "busy"}
            )
        assert broker.published == []

    @pytest.mark.asyncio
    async def test_other_events_pass_through_with_sender_stamp(self, dispatcher, broker):
        receipt = await dispatcher.publish(
            "alice", "user:alice", "typing", {"senderId": "mallory", "x": 1}
        )

        assert receipt.persisted is None
        assert broker.published[0].payload == {"senderId": "alice", "x": 1}

    @pytest.mark.asyncio
    async def test_persistence_failure_skips_publish(self, dispatcher_with, broker):
        message_store = MagicMock()
        message_store.send = AsyncMock(
            side_effect=PersistenceFailure("down", operation="send", attempts=5)
        )
        dispatcher = dispatcher_with(message_store=message_store)

        with pytest.raises(PersistenceFailure):
            await dispatcher.publish("alice", "dm:alice:bob", "new_message", {"content": "x"})

        assert broker.published == []


@pytest.mark.unit
class TestDeliveryFailure:
    @pytest.mark.asyncio
    async def test_failed_publish_keeps_persisted_message(
        self, dispatcher_with, failing_broker, message_store
    ):
        dispatcher = dispatcher_with(broker=failing_broker)

        with pytest.raises(DeliveryFailure) as exc_info:
            await dispatcher.send_direct_message("alice", "bob", "hello")

        conversation = await message_store.conversation("alice", "bob")
        assert len(conversation) == 1
        assert exc_info.value.persisted["id"] == conversation[0].id
        assert exc_info.value.channel == "dm:alice:bob"
        failing_broker.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_broker_exception_becomes_delivery_failure(self, dispatcher_with):
        broker = MagicMock()
        broker.publish = AsyncMock(side_effect=RuntimeError("socket closed"))
        dispatcher = dispatcher_with(broker=broker)

        with pytest.raises(DeliveryFailure) as exc_info:
            await dispatcher.publish("alice", "user:alice", "ping", {})

        assert exc_info.value.persisted is None


@pytest.mark.unit
class TestConvenienceOperations:
    @pytest.mark.asyncio
    async def test_send_direct_message_uses_canonical_channel(self, dispatcher, broker):
        receipt = await dispatcher.send_direct_message("bob", "alice", "hi")

        assert receipt.channel == "dm:alice:bob"
        assert broker.published[0].event == "new_message"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("recipient", ["alice", "", "a:b"])
    async def test_send_direct_message_rejects_bad_recipient(self, dispatcher, recipient):
        with pytest.raises(ValidationError):
            await dispatcher.send_direct_message("alice", recipient, "hi")

    @pytest.mark.asyncio
    async def test_mark_conversation_read(self, dispatcher, message_store, broker):
        await message_store.send("alice", "bob", "one")

        receipt = await dispatcher.mark_conversation_read("bob", "alice")

        assert receipt.persisted["count"] == 1
        assert broker.published[0].channel == "dm:alice:bob"
        assert broker.published[0].event == "messages_read"


@pytest.mark.unit
class TestScenarios:
    @pytest.mark.asyncio
    async def test_alice_sends_bob_reads(self, dispatcher, message_store):
        receipt = await dispatcher.send_direct_message("alice", "bob", "hello")
        assert receipt.persisted["read"] is False

        conversation = await message_store.conversation("alice", "bob")
        assert len(conversation) == 1

        assert await message_store.mark_read("bob", "alice") == 1
        assert await message_store.mark_read("bob", "alice") == 0

    @pytest.mark.asyncio
    async def test_eve_cannot_publish_into_alice_and_bob(
        self, dispatcher, broker, document_store
    ):
        with pytest.raises(UnauthorizedError):
            await dispatcher.publish("eve", "dm:alice:bob", "new_message", {"content": "hi"})

        assert broker.published == []
        assert await document_store.count("directMessages") == 0
