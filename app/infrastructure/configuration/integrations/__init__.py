"""Integration settings __init__ - exports external collaborator settings."""

from infrastructure.configuration.integrations.redis import RedisSettings

__all__ = ["RedisSettings"]
