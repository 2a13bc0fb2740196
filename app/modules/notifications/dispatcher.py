"""Notification dispatcher.

For each caller-submitted event:

1. Authorize the principal on the channel; a denial stops everything.
2. Apply the durable state change the event implies, if any.
3. Publish the payload, stamped with ``senderId``, to the broker.

A publish failure is reported as ``DeliveryFailure`` and never undoes
step 2: state is reliably saved, live delivery is best effort and is not
retried.
"""

from typing import Any, Dict, Optional, Tuple

import structlog

from infrastructure.exceptions import DeliveryFailure, UnauthorizedError, ValidationError
from infrastructure.realtime import (
    AuthorizationDecision,
    Broker,
    ChannelAction,
    ChannelAuthorizer,
    ChannelDescriptor,
    DirectConversation,
    Presence,
    dm_channel_name,
)
from modules.messaging import MessageStore
from modules.notifications.models import EventNames, PublishReceipt
from modules.presence import StatusService

logger = structlog.get_logger()


class NotificationDispatcher:
    def __init__(
        self,
        authorizer: ChannelAuthorizer,
        message_store: MessageStore,
        broker: Broker,
        status_service: StatusService,
    ):
        self.authorizer = authorizer
        self.message_store = message_store
        self.broker = broker
        self.status_service = status_service
        self.log = logger.bind(component="notification_dispatcher")

    async def publish(
        self,
        principal_id: str,
        channel_name: str,
        event_name: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> PublishReceipt:
        """Authorize, persist and publish one event.

        Raises:
            ValidationError: Empty event name or malformed payload.
            UnauthorizedError: The principal may not publish on the channel.
            PersistenceFailure: The implied state change could not be saved.
            DeliveryFailure: Saved, but the broker rejected the event.
        """
        if not event_name:
            raise ValidationError("Event name is required")
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise ValidationError("Event payload must be an object")

        decision = self.authorizer.authorize(
            principal_id, channel_name, ChannelAction.PUBLISH
        )
        if not decision.allowed:
            raise UnauthorizedError(
                f"Not allowed to publish on {channel_name}", channel=channel_name
            )

        persisted, outgoing = await self._apply_state_change(
            principal_id, decision.channel, event_name, payload
        )
        outgoing["senderId"] = principal_id

        try:
            result = await self.broker.publish(channel_name, event_name, outgoing)
        except Exception as e:
            self.log.error(
                "event_delivery_failed",
                channel=channel_name,
                event_name=event_name,
                error=str(e),
            )
            raise DeliveryFailure(
                f"Event saved but not delivered: {e}",
                channel=channel_name,
                event=event_name,
                persisted=persisted,
            ) from e

        if not result.is_success:
            self.log.error(
                "event_delivery_failed",
                channel=channel_name,
                event_name=event_name,
                status=result.status.value,
                error=result.message,
            )
            raise DeliveryFailure(
                "Event saved but not delivered",
                channel=channel_name,
                event=event_name,
                persisted=persisted,
            )

        self.log.info(
            "event_published",
            channel=channel_name,
            event_name=event_name,
            principal_id=principal_id,
        )
        return PublishReceipt(
            channel=channel_name,
            event=event_name,
            payload=outgoing,
            persisted=persisted,
        )

    async def send_direct_message(
        self, sender_id: str, recipient_id: str, content: str
    ) -> PublishReceipt:
        """Publish ``new_message`` on the canonical channel for the pair."""
        try:
            channel_name = dm_channel_name(sender_id, recipient_id)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        return await self.publish(
            sender_id, channel_name, EventNames.NEW_MESSAGE, {"content": content}
        )

    async def mark_conversation_read(
        self, reader_id: str, other_party_id: str
    ) -> PublishReceipt:
        """Publish ``messages_read`` on the canonical channel for the pair."""
        try:
            channel_name = dm_channel_name(reader_id, other_party_id)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        return await self.publish(reader_id, channel_name, EventNames.MESSAGES_READ, {})

    def authorize_subscription(
        self, principal_id: str, channel_name: str
    ) -> AuthorizationDecision:
        """Check a broker subscription request.

        Raises:
            UnauthorizedError: The principal may not subscribe to the channel.
        """
        decision = self.authorizer.authorize(
            principal_id, channel_name, ChannelAction.SUBSCRIBE
        )
        if not decision.allowed:
            raise UnauthorizedError(
                f"Not allowed to subscribe to {channel_name}", channel=channel_name
            )
        return decision

    async def _apply_state_change(
        self,
        principal_id: str,
        channel: ChannelDescriptor,
        event_name: str,
        payload: Dict[str, Any],
    ) -> Tuple[Optional[Dict[str, Any]], Dict[str, Any]]:
        """Returns (persisted state, payload to publish)."""
        match (channel, event_name):
            case (DirectConversation(), EventNames.NEW_MESSAGE):
                message = await self.message_store.send(
                    principal_id,
                    channel.other_participant(principal_id),
                    payload.get("content"),
                )
                stored = message.to_payload()
                return stored, dict(stored)
            case (DirectConversation(), EventNames.MESSAGES_READ):
                count = await self.message_store.mark_read(
                    principal_id, channel.other_participant(principal_id)
                )
                receipt = {"readerId": principal_id, "count": count}
                return receipt, dict(receipt)
            case (Presence(), EventNames.STATUS_UPDATE):
                status = await self.status_service.update_status(
                    principal_id, payload.get("status")
                )
                saved = {"userId": principal_id, "status": status.value}
                return saved, {**payload, "status": status.value}
            case _:
                return None, dict(payload)
