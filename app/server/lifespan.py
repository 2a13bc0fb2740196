from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging.setup import configure_logging
from infrastructure.realtime import RedisBroker
from infrastructure.services import get_broker, get_settings

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _get_logger(settings: "Settings") -> BoundLogger:
    return configure_logging(settings=settings)


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def _warn_on_permissive_settings(settings: "Settings", logger: BoundLogger) -> None:
    if not settings.realtime.TOPIC_MEMBERSHIP_REQUIRED:
        logger.warning("topic_membership_not_enforced")
    if not settings.server.JWT_SECRET:
        logger.warning("jwt_secret_missing", effect="all authenticated routes return 401")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = _get_logger(settings)

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _list_configs(settings, logger)
    _warn_on_permissive_settings(settings, logger)

    broker = get_broker()
    logger.info("broker_selected", broker=type(broker).__name__)

    yield

    logger.info("application_shutdown")

    if isinstance(broker, RedisBroker):
        await broker.close()
        logger.info("redis_broker_closed")
