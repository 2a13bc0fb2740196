"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for infrastructure and feature services.
"""

from typing import Annotated

from fastapi import Depends

from infrastructure.configuration import Settings
from infrastructure.identity import PrincipalResolver
from infrastructure.services.providers import (
    get_dispatcher,
    get_message_store,
    get_principal_resolver,
    get_settings,
    get_status_service,
)
from modules.messaging import MessageStore
from modules.notifications import NotificationDispatcher
from modules.presence import StatusService

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Feature services
MessageStoreDep = Annotated[MessageStore, Depends(get_message_store)]
StatusServiceDep = Annotated[StatusService, Depends(get_status_service)]
DispatcherDep = Annotated[NotificationDispatcher, Depends(get_dispatcher)]

# Bearer token verification
PrincipalResolverDep = Annotated[PrincipalResolver, Depends(get_principal_resolver)]

__all__ = [
    "SettingsDep",
    "MessageStoreDep",
    "StatusServiceDep",
    "DispatcherDep",
    "PrincipalResolverDep",
]
