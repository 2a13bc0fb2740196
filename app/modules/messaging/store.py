"""Message store for direct messages.

Every durable call goes through the retry executor under the policy for its
operation class. Conversation reads are served from the TTL cache keyed by
the unordered participant pair and invalidated whenever ``send`` or
``mark_read`` changes that pair.
"""

import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

import structlog

from infrastructure.cache import CacheKeyBuilder, TTLCache
from infrastructure.exceptions import (
    PersistenceFailure,
    RetryExhausted,
    ValidationError,
)
from infrastructure.persistence import DocumentStore
from infrastructure.resilience.retry import RetryExecutor, RetryPolicy
from modules.messaging.models import DirectMessage

logger = structlog.get_logger()

COLLECTION = "directMessages"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class MessageStore:
    """Sole writer of direct messages.

    Args:
        documents: Durable document store.
        executor: Retry executor wrapping each store call.
        cache: TTL cache for conversation views.
        write_policy: Policy for inserts.
        read_policy: Policy for conversation reads.
        read_modify_policy: Policy for read-receipt updates.
        conversation_ttl_seconds: TTL of cached conversation views.
        now: Timestamp source for ``createdAt``.
        id_factory: Generator of message ids.
    """

    def __init__(
        self,
        documents: DocumentStore,
        executor: RetryExecutor,
        cache: TTLCache,
        write_policy: RetryPolicy,
        read_policy: RetryPolicy,
        read_modify_policy: RetryPolicy,
        conversation_ttl_seconds: float = 5.0,
        now: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ):
        self.documents = documents
        self.executor = executor
        self.cache = cache
        self.write_policy = write_policy
        self.read_policy = read_policy
        self.read_modify_policy = read_modify_policy
        self.conversation_ttl_seconds = conversation_ttl_seconds
        self._now = now
        self._id_factory = id_factory
        self.log = logger.bind(component="message_store")

    async def send(self, sender_id: str, recipient_id: str, content: str) -> DirectMessage:
        """Persist a new unread message.

        Raises:
            ValidationError: Ids are empty or equal, or content is empty.
            PersistenceFailure: The insert failed under the write policy.
        """
        self._check_pair(sender_id, recipient_id)
        if not isinstance(content, str) or not content.strip():
            raise ValidationError("Message content must not be empty")

        message = DirectMessage(
            id=self._id_factory(),
            sender_id=sender_id,
            recipient_id=recipient_id,
            content=content,
            created_at=self._now(),
        )
        document = message.to_document()

        try:
            await self.executor.run(
                lambda: self.documents.insert_one(COLLECTION, document),
                self.write_policy,
                operation_name="insert_direct_message",
            )
        except RetryExhausted as e:
            raise PersistenceFailure(
                "Message could not be saved", operation="send", attempts=e.attempts
            ) from e

        self.cache.invalidate(CacheKeyBuilder.conversation(sender_id, recipient_id))
        self.log.info(
            "message_persisted",
            message_id=message.id,
            sender_id=sender_id,
            recipient_id=recipient_id,
        )
        return message

    async def conversation(self, user_a: str, user_b: str) -> Sequence[DirectMessage]:
        """All messages between the pair in either direction, oldest first.

        Messages with equal ``createdAt`` keep their insertion order.
        """
        self._check_pair(user_a, user_b)
        key = CacheKeyBuilder.conversation(user_a, user_b)

        async def load() -> tuple[DirectMessage, ...]:
            documents = await self._run_read(user_a, user_b)
            return tuple(DirectMessage.from_document(doc) for doc in documents)

        return await self.cache.get_or_compute(
            key, load, ttl_seconds=self.conversation_ttl_seconds
        )

    async def mark_read(self, reader_id: str, other_party_id: str) -> int:
        """Mark every unread message from ``other_party_id`` to ``reader_id`` as read.

        Applied as a single ``update_many``. Returns the number of messages
        transitioned; 0 when nothing was unread.
        """
        self._check_pair(reader_id, other_party_id)
        query = {"senderId": other_party_id, "recipientId": reader_id, "read": False}

        try:
            result = await self.executor.run(
                lambda: self.documents.update_many(COLLECTION, query, {"read": True}),
                self.read_modify_policy,
                operation_name="mark_direct_messages_read",
            )
        except RetryExhausted as e:
            raise PersistenceFailure(
                "Read receipts could not be saved",
                operation="mark_read",
                attempts=e.attempts,
            ) from e

        count = result.modified_count
        if count:
            self.cache.invalidate(CacheKeyBuilder.conversation(reader_id, other_party_id))
            self.log.info(
                "messages_marked_read",
                reader_id=reader_id,
                other_party_id=other_party_id,
                count=count,
            )
        return count

    async def _run_read(self, user_a: str, user_b: str) -> List[dict]:
        query = {
            "$or": [
                {"senderId": user_a, "recipientId": user_b},
                {"senderId": user_b, "recipientId": user_a},
            ]
        }
        try:
            return await self.executor.run(
                lambda: self.documents.find_many(
                    COLLECTION, query, sort=[("createdAt", 1)]
                ),
                self.read_policy,
                operation_name="find_conversation",
            )
        except RetryExhausted as e:
            raise PersistenceFailure(
                "Conversation could not be loaded",
                operation="conversation",
                attempts=e.attempts,
            ) from e

    @staticmethod
    def _check_pair(user_a: Optional[str], user_b: Optional[str]) -> None:
        if not user_a or not user_b:
            raise ValidationError("Both user ids are required")
        if user_a == user_b:
            raise ValidationError("A conversation needs two distinct users")
