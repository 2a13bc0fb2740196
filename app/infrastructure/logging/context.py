"""Request context binding for structured logging.

Binds request-scoped metadata (correlation id, principal, path) so every
log entry emitted while handling a request carries it.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(correlation_id="req-123", user_id="alice"):
        logger.info("processing_request")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    user_id: Optional[str] = None,
    request_path: Optional[str] = None,
    request_method: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind request-scoped context to all logs within the block.

    Args:
        correlation_id: Unique request identifier. Generated if not provided.
        user_id: Authenticated principal id, when known.
        request_path: HTTP request path.
        request_method: HTTP method.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation id in effect for the block.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if user_id is not None:
        context["user_id"] = user_id
    if request_path is not None:
        context["request_path"] = request_path
    if request_method is not None:
        context["request_method"] = request_method

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context."""
    return structlog.contextvars.get_contextvars().get("correlation_id")


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID in the current logging context."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_request_context() -> None:
    """Clear all request-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
