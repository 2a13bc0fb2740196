"""Redis publish/subscribe broker settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class RedisSettings(IntegrationSettings):
    """Redis broker configuration.

    Environment Variables:
        REDIS_URL: Connection URL (e.g. redis://localhost:6379/0). When empty
            the in-memory broker is used.
        REDIS_CHANNEL_PREFIX: Prefix prepended to every published channel name
        REDIS_SOCKET_TIMEOUT_SECONDS: Socket and connect timeout (default: 5s)

    Example:
        ```python
        from infrastructure.services import get_settings

        redis_settings = get_settings().redis
        if redis_settings.REDIS_URL:
            broker = RedisBroker.from_url(redis_settings.REDIS_URL)
        ```
    """

    REDIS_URL: str = Field(default="", alias="REDIS_URL")
    REDIS_CHANNEL_PREFIX: str = Field(default="", alias="REDIS_CHANNEL_PREFIX")
    REDIS_SOCKET_TIMEOUT_SECONDS: float = Field(
        default=5.0, alias="REDIS_SOCKET_TIMEOUT_SECONDS"
    )
