"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure
services and feature modules. Tests override them through
``app.dependency_overrides`` or by clearing the caches
(``get_settings.cache_clear()``).
"""

from functools import lru_cache

from infrastructure.cache import TTLCache
from infrastructure.configuration import Settings
from infrastructure.identity import PrincipalResolver
from infrastructure.persistence import DocumentStore, InMemoryDocumentStore
from infrastructure.realtime import (
    Broker,
    ChannelAuthorizer,
    InMemoryBroker,
    InMemoryTopicMembership,
    RedisBroker,
)
from infrastructure.resilience.retry import RetryExecutor
from modules.messaging import MessageStore
from modules.notifications import NotificationDispatcher
from modules.presence import StatusService


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    Infrastructure packages should use this directly:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_cache() -> TTLCache:
    """Process-local TTL cache shared by the message store and status service."""
    cache_settings = get_settings().cache
    return TTLCache(
        max_items=cache_settings.CACHE_MAX_ITEMS,
        default_ttl_seconds=cache_settings.CACHE_DEFAULT_TTL_SECONDS,
    )


@lru_cache
def get_retry_executor() -> RetryExecutor:
    return RetryExecutor()


@lru_cache
def get_document_store() -> DocumentStore:
    """Durable document store.

    Returns the in-process store; deployments bind a real store by
    overriding this provider.
    """
    return InMemoryDocumentStore()


@lru_cache
def get_broker() -> Broker:
    """Redis broker when REDIS_URL is set, otherwise the in-memory broker."""
    redis_settings = get_settings().redis
    if redis_settings.REDIS_URL:
        return RedisBroker.from_url(
            redis_settings.REDIS_URL,
            channel_prefix=redis_settings.REDIS_CHANNEL_PREFIX,
            socket_timeout_seconds=redis_settings.REDIS_SOCKET_TIMEOUT_SECONDS,
        )
    return InMemoryBroker()


@lru_cache
def get_topic_membership() -> InMemoryTopicMembership:
    return InMemoryTopicMembership()


@lru_cache
def get_authorizer() -> ChannelAuthorizer:
    return ChannelAuthorizer(
        membership=get_topic_membership(),
        membership_required=get_settings().realtime.TOPIC_MEMBERSHIP_REQUIRED,
    )


@lru_cache
def get_message_store() -> MessageStore:
    settings = get_settings()
    return MessageStore(
        documents=get_document_store(),
        executor=get_retry_executor(),
        cache=get_cache(),
        write_policy=settings.retry.write_policy(),
        read_policy=settings.retry.read_policy(),
        read_modify_policy=settings.retry.read_modify_policy(),
        conversation_ttl_seconds=settings.cache.CONVERSATION_CACHE_TTL_SECONDS,
    )


@lru_cache
def get_status_service() -> StatusService:
    settings = get_settings()
    return StatusService(
        documents=get_document_store(),
        executor=get_retry_executor(),
        cache=get_cache(),
        write_policy=settings.retry.write_policy(),
        read_policy=settings.retry.read_policy(),
        status_policy=settings.retry.status_policy(),
        status_ttl_seconds=settings.cache.STATUS_CACHE_TTL_SECONDS,
    )


@lru_cache
def get_dispatcher() -> NotificationDispatcher:
    return NotificationDispatcher(
        authorizer=get_authorizer(),
        message_store=get_message_store(),
        broker=get_broker(),
        status_service=get_status_service(),
    )


@lru_cache
def get_principal_resolver() -> PrincipalResolver:
    server = get_settings().server
    return PrincipalResolver(
        secret=server.JWT_SECRET,
        algorithms=server.JWT_ALGORITHMS,
        user_id_claim=server.JWT_USER_ID_CLAIM,
    )


ALL_PROVIDERS = (
    get_settings,
    get_cache,
    get_retry_executor,
    get_document_store,
    get_broker,
    get_topic_membership,
    get_authorizer,
    get_message_store,
    get_status_service,
    get_dispatcher,
    get_principal_resolver,
)


def reset_providers() -> None:
    """Drop every cached singleton so the next call rebuilds it."""
    for provider in ALL_PROVIDERS:
        provider.cache_clear()
