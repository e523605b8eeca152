"""FastAPI application entrypoint."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ballers_api.core.config import Settings, get_settings
from ballers_api.core.context import AppContext
from ballers_api.core.logging_safety import configure_logging, safe_log_identifier
from ballers_api.domain.validation import describe_parameter_error
from ballers_api.errors import ApiError, ErrorKind, normalize
from ballers_api.repositories.memory import InMemoryStore
from ballers_api.routes import (
    assigned_badges_router,
    badges_router,
    enquiries_router,
    knowledge_base_router,
    notifications_router,
    properties_router,
    referrals_router,
    users_router,
    visitations_router,
    welcome_router,
)
from ballers_api.routes.dependencies import get_request_correlation_id

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def _error_response(exc: BaseException) -> JSONResponse:
    status_code, payload = normalize(exc)
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json"))


def create_app(settings: Settings | None = None, store: InMemoryStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    context = AppContext.build(settings, store)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("app.started environment=%s", settings.environment)
        yield
        context.close()
        logger.info("app.stopped environment=%s", settings.environment)

    app = FastAPI(title="Ballers API", version="1.0.0", lifespan=lifespan)
    app.state.context = context

    @app.middleware("http")
    async def normalize_unexpected_errors(request: Request, call_next):
        correlation_id = get_request_correlation_id(request)
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "request.failed correlation_id=%s method=%s path=%s",
                safe_log_identifier(correlation_id, prefix="cid"),
                request.method,
                request.url.path,
            )
            response = _error_response(exc)
        response.headers["X-Correlation-Id"] = correlation_id
        return response

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_, exc: RequestValidationError) -> JSONResponse:
        return _error_response(ApiError(ErrorKind.VALIDATION_ERROR, describe_parameter_error(exc.errors()[0])))

    app.include_router(welcome_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(properties_router, prefix=API_PREFIX)
    app.include_router(badges_router, prefix=API_PREFIX)
    app.include_router(assigned_badges_router, prefix=API_PREFIX)
    app.include_router(enquiries_router, prefix=API_PREFIX)
    app.include_router(visitations_router, prefix=API_PREFIX)
    app.include_router(notifications_router, prefix=API_PREFIX)
    app.include_router(knowledge_base_router, prefix=API_PREFIX)
    app.include_router(referrals_router, prefix=API_PREFIX)

    return app


app = create_app()
