"""TTL cache infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class CacheSettings(InfrastructureSettings):
    """In-process TTL cache configuration.

    Capacity and default TTL are fixed when the cache is constructed; the
    per-use TTLs below are passed explicitly by the components that read
    through the cache.

    Environment Variables:
        CACHE_MAX_ITEMS: Maximum number of live entries (default: 1000)
        CACHE_DEFAULT_TTL_SECONDS: TTL used when none is given (default: 300s)
        CONVERSATION_CACHE_TTL_SECONDS: TTL for cached conversations (default: 5s)
        STATUS_CACHE_TTL_SECONDS: TTL for presence / 2FA flag reads (default: 30s)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        cache = TTLCache(
            max_items=settings.cache.CACHE_MAX_ITEMS,
            default_ttl_seconds=settings.cache.CACHE_DEFAULT_TTL_SECONDS,
        )
        ```
    """

    CACHE_MAX_ITEMS: int = Field(default=1000, alias="CACHE_MAX_ITEMS", ge=1)
    CACHE_DEFAULT_TTL_SECONDS: float = Field(
        default=300.0, alias="CACHE_DEFAULT_TTL_SECONDS", gt=0
    )
    CONVERSATION_CACHE_TTL_SECONDS: float = Field(
        default=5.0, alias="CONVERSATION_CACHE_TTL_SECONDS", gt=0
    )
    STATUS_CACHE_TTL_SECONDS: float = Field(
        default=30.0, alias="STATUS_CACHE_TTL_SECONDS", gt=0
    )
