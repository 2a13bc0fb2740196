"""Principal resolution from bearer tokens."""

from typing import Any, Dict, Optional, Sequence

import jwt
import structlog

from infrastructure.exceptions import AuthenticationError
from infrastructure.identity.models import IdentitySource, Principal

logger = structlog.get_logger()


class PrincipalResolver:
    """Verifies signed tokens and returns the principal they identify.

    Args:
        secret: Shared signing secret. When None every token is rejected.
        algorithms: Accepted signing algorithms.
        user_id_claim: Claim holding the user id; ``sub`` is used when absent.
    """

    def __init__(
        self,
        secret: Optional[str],
        algorithms: Sequence[str] = ("HS256",),
        user_id_claim: str = "userId",
    ):
        self.secret = secret
        self.algorithms = list(algorithms)
        self.user_id_claim = user_id_claim
        self._logger = logger.bind(component="principal_resolver")

    def resolve_from_jwt(self, token: str) -> Principal:
        """Decode and verify ``token``.

        Raises:
            AuthenticationError: The token is missing, invalid, expired or
                carries no user id.
        """
        if not token:
            raise AuthenticationError("Missing bearer token")
        if not self.secret:
            self._logger.error("jwt_secret_not_configured")
            raise AuthenticationError("Token verification is not configured")

        try:
            claims: Dict[str, Any] = jwt.decode(
                token, self.secret, algorithms=self.algorithms
            )
        except jwt.PyJWTError as e:
            self._logger.warning("jwt_verification_failed", error=str(e))
            raise AuthenticationError("Invalid or expired token") from e

        user_id = claims.get(self.user_id_claim) or claims.get("sub")
        if not isinstance(user_id, str) or not user_id:
            self._logger.warning("jwt_missing_user_id", claim=self.user_id_claim)
            raise AuthenticationError("Token does not identify a user")

        self._logger.debug("jwt_principal_resolved", user_id=user_id)
        return Principal(user_id=user_id, source=IdentitySource.API_JWT, claims=claims)
