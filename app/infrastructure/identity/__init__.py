"""Principal identity resolution.

Usage:
    from infrastructure.identity import PrincipalResolver

    resolver = PrincipalResolver(secret=settings.server.JWT_SECRET)
    principal = resolver.resolve_from_jwt(token)
"""

from infrastructure.identity.models import IdentitySource, Principal
from infrastructure.identity.resolver import PrincipalResolver

__all__ = ["IdentitySource", "Principal", "PrincipalResolver"]
