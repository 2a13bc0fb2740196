"""Presence models."""

from enum import Enum

from pydantic import BaseModel


class UserStatus(str, Enum):
    ONLINE = "online"
    IDLE = "idle"
    DND = "dnd"
    OFFLINE = "offline"
    FOCUS = "focus"
    INVISIBLE = "invisible"


class StatusUpdateRequest(BaseModel):
    status: str
