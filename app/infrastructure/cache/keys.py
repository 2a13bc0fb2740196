"""Cache key builder for consistent key generation."""

from typing import Any


class CacheKeyBuilder:
    """Build deterministic, namespaced cache keys.

    Example:
        >>> CacheKeyBuilder.conversation("bob", "alice")
        'conversation:alice:bob'
        >>> CacheKeyBuilder(namespace="status").build("alice")
        'status:alice'
    """

    CONVERSATION = "conversation"
    STATUS = "status"
    TWO_FACTOR = "two_factor"

    def __init__(self, namespace: str):
        if not namespace:
            raise ValueError("namespace must not be empty")
        self.namespace = namespace

    def build(self, *parts: Any) -> str:
        """Join the namespace and parts with ':'."""
        return ":".join([self.namespace, *(str(part) for part in parts)])

    def prefix(self) -> str:
        return f"{self.namespace}:"

    @classmethod
    def conversation(cls, user_a: str, user_b: str) -> str:
        """Key for the conversation between an unordered pair of users."""
        low, high = sorted((user_a, user_b))
        return cls(cls.CONVERSATION).build(low, high)

    @classmethod
    def status(cls, user_id: str) -> str:
        return cls(cls.STATUS).build(user_id)

    @classmethod
    def two_factor(cls, user_id: str) -> str:
        return cls(cls.TWO_FACTOR).build(user_id)
