"""Real-time event dispatch: authorize, persist, then publish."""

from modules.notifications.dispatcher import NotificationDispatcher
from modules.notifications.models import (
    ChannelAuthRequest,
    EventNames,
    PublishEventRequest,
    PublishReceipt,
)

__all__ = [
    "ChannelAuthRequest",
    "EventNames",
    "NotificationDispatcher",
    "PublishEventRequest",
    "PublishReceipt",
]
