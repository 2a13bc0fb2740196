"""Direct message models.

Documents are stored with camelCase keys (``senderId``, ``createdAt``...);
Python code uses the snake_case attribute names.
"""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class DirectMessage(BaseModel):
    """A message from one principal to another.

    ``read`` only ever moves from False to True.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    sender_id: str = Field(..., alias="senderId", min_length=1)
    recipient_id: str = Field(..., alias="recipientId", min_length=1)
    content: str
    created_at: datetime = Field(..., alias="createdAt")
    read: bool = False
    edited: bool = False

    def to_document(self) -> Dict[str, Any]:
        """Document shape written to the store."""
        return self.model_dump(by_alias=True)

    def to_payload(self) -> Dict[str, Any]:
        """JSON-safe shape published to subscribers and returned over HTTP."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "DirectMessage":
        return cls.model_validate(document)


class MarkReadRequest(BaseModel):
    other_user_id: str = Field(..., alias="otherUserId", min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class SendDirectMessageRequest(BaseModel):
    recipient_id: str = Field(..., alias="recipientId", min_length=1)
    content: str = Field(..., min_length=1)

    model_config = ConfigDict(populate_by_name=True)
