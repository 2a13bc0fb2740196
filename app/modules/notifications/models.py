"""Notification dispatch models."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class EventNames:
    """Events that imply a durable state change."""

    NEW_MESSAGE = "new_message"
    MESSAGES_READ = "messages_read"
    STATUS_UPDATE = "status_update"


class PublishReceipt(BaseModel):
    """Acknowledgment returned once an event has been published.

    Attributes:
        channel: Channel the event was published on
        event: Event name
        payload: Payload as published, stamped with ``senderId``
        persisted: State change saved before publishing, if any
        delivered: Whether the broker accepted the event
    """

    channel: str
    event: str
    payload: Dict[str, Any] = Field(default_factory=dict)
    persisted: Optional[Dict[str, Any]] = None
    delivered: bool = True


class PublishEventRequest(BaseModel):
    channel: str = Field(..., min_length=1)
    event: str = Field(..., min_length=1)
    data: Dict[str, Any] = Field(default_factory=dict)


class ChannelAuthRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    channel_name: str = Field(..., alias="channelName", min_length=1)
    socket_id: Optional[str] = Field(default=None, alias="socketId")
