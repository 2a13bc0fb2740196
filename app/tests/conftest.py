"""Shared fixtures for the notification core test suite."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from unittest.mock import AsyncMock

import pytest
import structlog

from infrastructure.cache import TTLCache
from infrastructure.persistence import InMemoryDocumentStore
from infrastructure.realtime import (
    ChannelAuthorizer,
    InMemoryBroker,
    InMemoryTopicMembership,
)
from infrastructure.resilience.retry import RetryExecutor, RetryPolicy
from infrastructure.services import reset_providers
from modules.messaging import MessageStore
from modules.notifications import NotificationDispatcher
from modules.presence import StatusService


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SteppingTimestamps:
    """Returns UTC datetimes one millisecond apart on each call."""

    def __init__(self, start: Optional[datetime] = None, step_ms: int = 1):
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.step = timedelta(milliseconds=step_ms)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture(autouse=True)
def reset_logging_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def reset_cached_providers():
    reset_providers()
    yield
    reset_providers()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def timestamps():
    return SteppingTimestamps()


@pytest.fixture
def recording_sleep():
    """AsyncMock standing in for asyncio.sleep; inspect ``await_args_list``."""
    return AsyncMock(return_value=None)


@pytest.fixture
def policy_factory():
    """Factory for RetryPolicy instances with small test defaults.

    Example:
        policy = policy_factory(max_attempts=1)
    """

    def _factory(
        max_attempts: int = 3,
        base_delay_seconds: float = 0.1,
        max_delay_seconds: float = 1.0,
        timeout_seconds: float = 1.0,
    ) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=max_attempts,
            base_delay_seconds=base_delay_seconds,
            max_delay_seconds=max_delay_seconds,
            timeout_seconds=timeout_seconds,
        )

    return _factory


@pytest.fixture
def cache(fake_clock):
    return TTLCache(max_items=100, default_ttl_seconds=60.0, clock=fake_clock)


@pytest.fixture
def executor(recording_sleep):
    return RetryExecutor(sleep=recording_sleep)


@pytest.fixture
def document_store():
    return InMemoryDocumentStore()


@pytest.fixture
def broker():
    return InMemoryBroker()


@pytest.fixture
def membership():
    return InMemoryTopicMembership()


@pytest.fixture
def authorizer(membership):
    return ChannelAuthorizer(membership=membership)


@pytest.fixture
def message_store_factory(document_store, executor, cache, policy_factory, timestamps):
    """Factory for MessageStore wired to in-memory collaborators.

    Example:
        store = message_store_factory(documents=failing_store)
    """

    def _factory(documents=None, write_attempts: int = 5, **overrides) -> MessageStore:
        params = dict(
            documents=documents if documents is not None else document_store,
            executor=executor,
            cache=cache,
            write_policy=policy_factory(max_attempts=write_attempts, max_delay_seconds=1.5),
            read_policy=policy_factory(max_attempts=3),
            read_modify_policy=policy_factory(max_attempts=2, max_delay_seconds=0.5),
            conversation_ttl_seconds=5.0,
            now=timestamps,
        )
        params.update(overrides)
        return MessageStore(**params)

    return _factory


@pytest.fixture
def message_store(message_store_factory):
    return message_store_factory()


@pytest.fixture
def status_service_factory(document_store, executor, cache, policy_factory):
    def _factory(documents=None, **overrides) -> StatusService:
        params = dict(
            documents=documents if documents is not None else document_store,
            executor=executor,
            cache=cache,
            write_policy=policy_factory(max_attempts=5, max_delay_seconds=1.5),
            read_policy=policy_factory(max_attempts=3),
            status_policy=policy_factory(
                max_attempts=1, max_delay_seconds=0.1, timeout_seconds=1.5
            ),
            status_ttl_seconds=30.0,
        )
        params.update(overrides)
        return StatusService(**params)

    return _factory


@pytest.fixture
def status_service(status_service_factory):
    return status_service_factory()


@pytest.fixture
def dispatcher(authorizer, message_store, broker, status_service):
    return NotificationDispatcher(
        authorizer=authorizer,
        message_store=message_store,
        broker=broker,
        status_service=status_service,
    )
