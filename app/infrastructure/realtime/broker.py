"""Publish/subscribe broker clients.

Brokers are fire-and-forget: ``publish`` reports whether the broker
accepted the event, never whether subscribers received it. Failures are
returned as ``OperationResult`` values instead of raised.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

import structlog
from redis.asyncio import Redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from infrastructure.operations import OperationResult

logger = structlog.get_logger()


class Broker(Protocol):
    async def publish(
        self, channel: str, event: str, payload: Dict[str, Any]
    ) -> OperationResult:
        ...


@dataclass(frozen=True)
class PublishedEvent:
    channel: str
    event: str
    payload: Dict[str, Any]


def encode_envelope(channel: str, event: str, payload: Dict[str, Any]) -> str:
    """Serialize an event as the JSON envelope subscribers receive."""
    return json.dumps({"channel": channel, "event": event, "data": payload}, default=str)


class InMemoryBroker:
    """Records published events in process; used in development and tests."""

    def __init__(self):
        self.published: List[PublishedEvent] = []

    async def publish(
        self, channel: str, event: str, payload: Dict[str, Any]
    ) -> OperationResult:
        record = PublishedEvent(channel=channel, event=event, payload=dict(payload))
        self.published.append(record)
        logger.debug("event_recorded", channel=channel, event_name=event)
        return OperationResult.success(data={"receivers": 0})

    def events_for(self, channel: str) -> List[PublishedEvent]:
        return [record for record in self.published if record.channel == channel]


class RedisBroker:
    """Publishes JSON envelopes through Redis PUBLISH.

    Args:
        client: ``redis.asyncio.Redis`` instance.
        channel_prefix: Prefix prepended to every channel name.
    """

    def __init__(self, client: Redis, channel_prefix: str = ""):
        self.client = client
        self.channel_prefix = channel_prefix
        self.log = logger.bind(component="redis_broker")

    @classmethod
    def from_url(
        cls,
        url: str,
        channel_prefix: str = "",
        socket_timeout_seconds: Optional[float] = 5.0,
    ) -> "RedisBroker":
        client = Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout_seconds,
            socket_connect_timeout=socket_timeout_seconds,
        )
        return cls(client, channel_prefix=channel_prefix)

    async def publish(
        self, channel: str, event: str, payload: Dict[str, Any]
    ) -> OperationResult:
        target = f"{self.channel_prefix}{channel}"
        try:
            receivers = await self.client.publish(
                target, encode_envelope(channel, event, payload)
            )
        except (ConnectionError, TimeoutError) as e:
            self.log.error(
                "redis_publish_connection_error",
                channel=target,
                event_name=event,
                error=str(e),
            )
            return OperationResult.transient_error(
                message=f"Connection error publishing to {target}: {e}",
                error_code="CONNECTION_ERROR",
            )
        except RedisError as e:
            self.log.error(
                "redis_publish_error", channel=target, event_name=event, error=str(e)
            )
            return OperationResult.permanent_error(
                message=f"Error publishing to {target}: {e}",
                error_code="REDIS_ERROR",
            )

        self.log.debug(
            "redis_event_published",
            channel=target,
            event_name=event,
            receivers=receivers,
        )
        return OperationResult.success(data={"receivers": receivers})

    async def close(self) -> None:
        await self.client.aclose()
