"""Server infrastructure settings."""

from typing import List

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """HTTP server and bearer-token configuration.

    Environment Variables:
        JWT_SECRET: Shared secret used to verify bearer tokens
        JWT_ALGORITHMS: Accepted signing algorithms (default: ["HS256"])
        JWT_USER_ID_CLAIM: Claim holding the principal id (default: userId,
            falls back to ``sub``)
        CORS_ALLOW_ORIGINS: Allowed CORS origins outside production

    Example:
        ```python
        from infrastructure.services import get_settings

        secret = get_settings().server.JWT_SECRET
        ```
    """

    JWT_SECRET: str | None = Field(default=None, alias="JWT_SECRET")
    JWT_ALGORITHMS: List[str] = Field(default_factory=lambda: ["HS256"], alias="JWT_ALGORITHMS")
    JWT_USER_ID_CLAIM: str = Field(default="userId", alias="JWT_USER_ID_CLAIM")
    CORS_ALLOW_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
        alias="CORS_ALLOW_ORIGINS",
    )
