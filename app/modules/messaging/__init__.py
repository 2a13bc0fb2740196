"""Direct messages: persistence, read receipts and conversation replay."""

from modules.messaging.models import DirectMessage
from modules.messaging.store import MessageStore

__all__ = ["DirectMessage", "MessageStore"]
