"""Infrastructure configuration module - public API.

Centralized configuration for the real-time notification core using
Pydantic BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (aggregates every section)
    CacheSettings: TTL cache sizing and expiry settings
    RetrySettings: Retry policy settings per operation class
    RedisSettings: Broker connection settings
    RealtimeSettings: Channel authorization settings
    ServerSettings: HTTP server and token settings

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    max_items = settings.cache.CACHE_MAX_ITEMS
    write_policy = settings.retry.write_policy()

    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.infrastructure import (
    CacheSettings,
    RealtimeSettings,
    RetrySettings,
    ServerSettings,
)
from infrastructure.configuration.integrations import RedisSettings

__all__ = [
    "Settings",
    "CacheSettings",
    "RealtimeSettings",
    "RetrySettings",
    "RedisSettings",
    "ServerSettings",
]
