"""Structured logging infrastructure.

Centralized logging configuration and utilities built on structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_request_context(): Context manager for request-scoped logging
    - get_correlation_id() / set_correlation_id() / clear_request_context()

Example:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging(settings)

    logger = get_module_logger()
    logger.info("module_initialized")
"""

from infrastructure.logging.setup import configure_logging, get_module_logger
from infrastructure.logging.context import (
    bind_request_context,
    get_correlation_id,
    set_correlation_id,
    clear_request_context,
)
from infrastructure.logging.formatters import (
    SENSITIVE_PATTERNS,
    add_app_info,
    mask_sensitive_data,
    redact_message_content,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_request_context",
    "get_correlation_id",
    "set_correlation_id",
    "clear_request_context",
    "SENSITIVE_PATTERNS",
    "add_app_info",
    "mask_sensitive_data",
    "redact_message_content",
]
