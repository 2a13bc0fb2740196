"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.cache import CacheSettings
from infrastructure.configuration.infrastructure.realtime import RealtimeSettings
from infrastructure.configuration.infrastructure.retry import RetrySettings
from infrastructure.configuration.infrastructure.server import ServerSettings

__all__ = [
    "CacheSettings",
    "RealtimeSettings",
    "RetrySettings",
    "ServerSettings",
]
