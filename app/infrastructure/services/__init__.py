"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    DispatcherDep,
    MessageStoreDep,
    PrincipalResolverDep,
    SettingsDep,
    StatusServiceDep,
)
from infrastructure.services.providers import (
    get_authorizer,
    get_broker,
    get_cache,
    get_dispatcher,
    get_document_store,
    get_message_store,
    get_principal_resolver,
    get_retry_executor,
    get_settings,
    get_status_service,
    get_topic_membership,
    reset_providers,
)

__all__ = [
    "DispatcherDep",
    "MessageStoreDep",
    "PrincipalResolverDep",
    "SettingsDep",
    "StatusServiceDep",
    "get_authorizer",
    "get_broker",
    "get_cache",
    "get_dispatcher",
    "get_document_store",
    "get_message_store",
    "get_principal_resolver",
    "get_retry_executor",
    "get_settings",
    "get_status_service",
    "get_topic_membership",
    "reset_providers",
]
