"""Status service.

Stores each user's presence status in the ``users`` collection and serves
hot-path reads (status, two-factor flag) through the TTL cache.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

import structlog

from infrastructure.cache import CacheKeyBuilder, TTLCache
from infrastructure.exceptions import (
    PersistenceFailure,
    RetryExhausted,
    ValidationError,
)
from infrastructure.persistence import DocumentStore
from infrastructure.resilience.retry import RetryExecutor, RetryPolicy
from modules.presence.models import UserStatus

logger = structlog.get_logger()

USERS_COLLECTION = "users"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_status(value: Optional[str]) -> UserStatus:
    try:
        return UserStatus(value)
    except ValueError as e:
        allowed = ", ".join(status.value for status in UserStatus)
        raise ValidationError(
            f"Invalid status {value!r}; expected one of: {allowed}"
        ) from e


class StatusService:
    def __init__(
        self,
        documents: DocumentStore,
        executor: RetryExecutor,
        cache: TTLCache,
        write_policy: RetryPolicy,
        read_policy: RetryPolicy,
        status_policy: RetryPolicy,
        status_ttl_seconds: float = 30.0,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.documents = documents
        self.executor = executor
        self.cache = cache
        self.write_policy = write_policy
        self.read_policy = read_policy
        self.status_policy = status_policy
        self.status_ttl_seconds = status_ttl_seconds
        self._now = now
        self.log = logger.bind(component="status_service")

    async def update_status(self, user_id: str, status: Optional[str]) -> UserStatus:
        """Persist ``status`` for ``user_id``.

        Raises:
            ValidationError: Missing user id or unknown status.
            PersistenceFailure: The write failed under the write policy.
        """
        if not user_id:
            raise ValidationError("user_id is required")
        new_status = parse_status(status)
        values = {"status": new_status.value, "statusUpdatedAt": self._now()}

        try:
            await self.executor.run(
                lambda: self.documents.update_one(
                    USERS_COLLECTION, {"id": user_id}, values, upsert=True
                ),
                self.write_policy,
                operation_name="update_user_status",
            )
        except RetryExhausted as e:
            raise PersistenceFailure(
                "Status could not be saved",
                operation="update_status",
                attempts=e.attempts,
            ) from e

        self.cache.invalidate(CacheKeyBuilder.status(user_id))
        self.log.info("user_status_updated", user_id=user_id, status=new_status.value)
        return new_status

    async def get_status(self, user_id: str) -> UserStatus:
        """Current status; ``offline`` for users with no stored status."""
        if not user_id:
            raise ValidationError("user_id is required")

        async def load() -> UserStatus:
            try:
                document = await self.executor.run(
                    lambda: self.documents.find_one(USERS_COLLECTION, {"id": user_id}),
                    self.read_policy,
                    operation_name="find_user_status",
                )
            except RetryExhausted as e:
                raise PersistenceFailure(
                    "Status could not be loaded",
                    operation="get_status",
                    attempts=e.attempts,
                ) from e
            if not document or not document.get("status"):
                return UserStatus.OFFLINE
            try:
                return UserStatus(document["status"])
            except ValueError:
                self.log.warning(
                    "unknown_stored_status",
                    user_id=user_id,
                    status=document["status"],
                )
                return UserStatus.OFFLINE

        return await self.cache.get_or_compute(
            CacheKeyBuilder.status(user_id), load, ttl_seconds=self.status_ttl_seconds
        )

    async def two_factor_enabled(self, user_id: str) -> bool:
        """Whether the user has two-factor authentication enabled.

        Fail-soft: when the lookup cannot complete under the status policy,
        returns False without caching the fallback.
        """
        if not user_id:
            return False

        async def load() -> bool:
            document = await self.executor.run(
                lambda: self.documents.find_one(USERS_COLLECTION, {"id": user_id}),
                self.status_policy,
                operation_name="find_two_factor_flag",
            )
            return bool(document and document.get("twoFactorEnabled"))

        try:
            return await self.cache.get_or_compute(
                CacheKeyBuilder.two_factor(user_id),
                load,
                ttl_seconds=self.status_ttl_seconds,
            )
        except RetryExhausted as e:
            self.log.warning(
                "two_factor_lookup_failed",
                user_id=user_id,
                attempts=e.attempts,
                error=str(e.last_error),
            )
            return False
