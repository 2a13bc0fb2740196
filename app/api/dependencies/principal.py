"""Bearer-token principal dependency."""

from typing import Annotated, Optional

import structlog
from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from infrastructure.exceptions import AuthenticationError
from infrastructure.identity import Principal
from infrastructure.services import PrincipalResolverDep

bearer = HTTPBearer(auto_error=False)


def get_current_principal(
    resolver: PrincipalResolverDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer),
) -> Principal:
    """Resolve the caller from the ``Authorization: Bearer`` header.

    Raises:
        AuthenticationError: No credentials or an invalid token.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing bearer token")
    principal = resolver.resolve_from_jwt(credentials.credentials)
    structlog.contextvars.bind_contextvars(user_id=principal.user_id)
    return principal


PrincipalDep = Annotated[Principal, Depends(get_current_principal)]
