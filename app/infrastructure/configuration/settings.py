"""Real-time core configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.integrations import RedisSettings
from infrastructure.configuration.infrastructure import (
    CacheSettings,
    RealtimeSettings,
    RetrySettings,
    ServerSettings,
)


class Settings(BaseSettings):
    """Application settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object:

    - **Integrations**: external collaborators (publish/subscribe broker)
    - **Infrastructure**: cache, retry policies, channel authorization, server

    Environment Variables:
        PREFIX: Environment prefix; empty means production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.redis.REDIS_URL:
            # Publish through Redis...

        ttl = settings.cache.CONVERSATION_CACHE_TTL_SECONDS
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Integration settings
    redis: RedisSettings

    # Infrastructure settings
    cache: CacheSettings
    retry: RetrySettings
    realtime: RealtimeSettings
    server: ServerSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "redis": RedisSettings,
            "cache": CacheSettings,
            "retry": RetrySettings,
            "realtime": RealtimeSettings,
            "server": ServerSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
