"""User presence status and account security flags."""

from modules.presence.models import StatusUpdateRequest, UserStatus
from modules.presence.service import StatusService

__all__ = ["StatusService", "StatusUpdateRequest", "UserStatus"]
