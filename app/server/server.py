"""FastAPI application: middleware, error mapping and routers."""

import uuid
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from api.dependencies.rate_limits import setup_rate_limiter
from api.router import api_router
from infrastructure.configuration import Settings
from infrastructure.exceptions import DeliveryFailure, RealtimeCoreError
from infrastructure.logging import bind_request_context
from infrastructure.services import get_settings
from server.lifespan import lifespan

logger = structlog.get_logger()

CORRELATION_HEADER = "X-Correlation-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds a correlation id and request metadata to every log entry."""

    async def dispatch(self, request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        with bind_request_context(
            correlation_id=correlation_id,
            request_path=request.url.path,
            request_method=request.method,
        ):
            response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


async def core_error_handler(request: Request, exc: RealtimeCoreError) -> JSONResponse:
    """Map core errors to HTTP responses.

    ``DeliveryFailure`` is a partial success: the state change was saved.
    """
    if isinstance(exc, DeliveryFailure):
        return JSONResponse(
            status_code=exc.status_code,
            content={"persisted": exc.persisted, "delivered": False},
        )
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "request_failed",
        path=request.url.path,
        error_code=exc.error_code,
        status_code=exc.status_code,
        error=exc.message,
    )
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code, content=exc.to_dict(), headers=headers
    )


async def request_validation_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_error",
            "message": "Invalid request body",
            "details": {"errors": [error.get("msg") for error in errors]},
        },
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings instance; the cached provider is used when omitted.
    """
    settings = settings or get_settings()

    app = FastAPI(title="squadchat-realtime", lifespan=lifespan)
    setup_rate_limiter(app)

    allow_origins = ["*"] if settings.is_production else settings.server.CORS_ALLOW_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(RealtimeCoreError, core_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(api_router)
    return app


handler = create_app()
