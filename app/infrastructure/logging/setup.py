"""Structlog configuration and logger setup.

Configures structlog over the standard library logger with context-variable
merging (correlation ids), call-site information, exception formatting and
environment-aware rendering: a console renderer during development and
JSON in production.

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging(settings)

    logger = get_module_logger()
    logger.info("event_name", key="value")
"""

import inspect
import logging
import sys
from typing import TYPE_CHECKING, Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.logging.formatters import (
    add_app_info,
    mask_sensitive_data,
    redact_message_content,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

APP_NAME = "squadchat-realtime"


def _is_test_environment() -> bool:
    """Detect if running under pytest."""
    return "pytest" in sys.modules


def configure_logging(
    settings: Optional["Settings"] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging.

    Args:
        settings: Settings instance; loaded through the provider when omitted.
        log_level: Optional override for settings.LOG_LEVEL.
        is_production: Optional override for settings.is_production. Controls
            JSON vs console output.

    Returns:
        Configured logger instance
    """
    if _is_test_environment():
        # Logs are built but never emitted while tests run
        logging.root.setLevel(logging.CRITICAL + 1)
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            level=logging.CRITICAL + 1,
            force=True,
        )
        return structlog.stdlib.get_logger()

    if settings is None:
        from infrastructure.services.providers import get_settings

        settings = get_settings()

    prod_mode = is_production if is_production is not None else settings.is_production

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        add_app_info(APP_NAME, settings.GIT_SHA),
        redact_message_content,
        mask_sensitive_data(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if not prod_mode:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    effective_log_level = log_level or settings.LOG_LEVEL
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, effective_log_level.upper(), logging.INFO),
        force=True,
    )

    return structlog.stdlib.get_logger()


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with full path context.

    Binds ``component`` (last dotted segment) and ``module_path``.

    Example:
        # In modules/messaging/store.py
        logger = get_module_logger()
        # context: {"component": "store", "module_path": "modules.messaging.store"}
    """
    logger = structlog.stdlib.get_logger()
    current_frame = inspect.currentframe()
    if current_frame is None or current_frame.f_back is None:
        return logger

    module = inspect.getmodule(current_frame.f_back)
    if module:
        module_name = module.__name__
        return logger.bind(
            component=module_name.split(".")[-1],
            module_path=module_name,
        )

    return logger.bind(component="unknown")
