"""Application middleware: CORS, per-caller rate limiting, request logging,
domain error mapping and the store lifespan."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from fitbusiness.config import Settings
from fitbusiness.dependencies import (
    USER_EMAIL_HEADER,
    USER_ID_HEADER,
    USER_NAME_HEADER,
    USER_PHOTO_HEADER,
)
from fitbusiness.services.bulk_import import ImportStateError, ImportStructureError
from fitbusiness.services.goals import GoalValidationError
from fitbusiness.store import RecordNotFoundError, StoreError

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def caller_key(request: Request) -> str:
    """Rate-limit bucket: the identified user, else the client address."""
    uid = request.headers.get(USER_ID_HEADER)
    return f"user:{uid}" if uid else get_remote_address(request)


def get_limiter(settings: Settings) -> Limiter:
    return Limiter(key_func=caller_key, default_limits=[settings.rate_limit_default])


def configure_cors(app: FastAPI, settings: Settings) -> None:
    """Let the dashboard origins call the API with identity headers."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            REQUEST_ID_HEADER,
            USER_ID_HEADER,
            USER_EMAIL_HEADER,
            USER_NAME_HEADER,
            USER_PHOTO_HEADER,
        ],
        expose_headers=[REQUEST_ID_HEADER, "X-RateLimit-Remaining", "Content-Disposition"],
    )


def configure_rate_limiting(app: FastAPI, settings: Settings) -> None:
    """Apply the default limit to every route, bucketed per caller."""
    app.state.limiter = get_limiter(settings)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)


async def logging_middleware(request: Request, call_next) -> Response:
    """Log every request with a request id bound into the log context."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        user_id=request.headers.get(USER_ID_HEADER, "anonymous"),
    )

    start = time.monotonic()
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id

    logger.info(
        "http_request",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.monotonic() - start) * 1000, 2),
    )
    return response


def configure_request_logging(app: FastAPI) -> None:
    app.middleware("http")(logging_middleware)


# ─── Domain errors ──────────────────────────────────────────────────────────

def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


async def _not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    return _error_response(404, exc)


async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.warning("store_error", path=request.url.path, error=str(exc))
    return _error_response(400, exc)


async def _import_structure_handler(request: Request, exc: ImportStructureError) -> JSONResponse:
    return _error_response(422, exc)


async def _import_state_handler(request: Request, exc: ImportStateError) -> JSONResponse:
    return _error_response(409, exc)


async def _goal_validation_handler(request: Request, exc: GoalValidationError) -> JSONResponse:
    return _error_response(422, exc)


def configure_error_handlers(app: FastAPI) -> None:
    """Translate domain exceptions into HTTP responses."""
    app.add_exception_handler(RecordNotFoundError, _not_found_handler)
    app.add_exception_handler(StoreError, _store_error_handler)
    app.add_exception_handler(ImportStructureError, _import_structure_handler)
    app.add_exception_handler(ImportStateError, _import_state_handler)
    app.add_exception_handler(GoalValidationError, _goal_validation_handler)


# ─── Logging and lifespan ───────────────────────────────────────────────────

def configure_structured_logging(settings: Settings) -> None:
    """Route structlog through stdlib logging, rendered as JSON or console."""
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """The store lives exactly as long as the app."""
    settings = app.state.settings
    configure_structured_logging(settings)

    store = app.state.store
    logger.info(
        "application_starting",
        version=settings.app_version,
        environment=settings.environment,
        companies=len(store.companies),
        employees=len(store.employees),
        insights="ai" if app.state.insight_client.configured else "fallback",
    )

    yield

    logger.info("application_shutting_down", open_imports=len(store.import_sessions))
    store.reset()
