"""
Application entry point for the Service Health alert template API.

`create_app()` builds the FastAPI application; the module-level `app` is what
uvicorn serves (`alert_bicep.main:app`).
"""

import hmac
import logging
import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from alert_bicep.api.routes.health import router as health_router
from alert_bicep.api.routes.options import router as options_router
from alert_bicep.api.routes.templates import router as templates_router
from alert_bicep.core.config import settings
from alert_bicep.core.errors import AlertBicepError, get_status_code
from alert_bicep.core.middleware import RequestSizeLimitMiddleware
from alert_bicep.core.observability import (
    ObservabilityMiddleware,
    configure_structured_logging,
    extract_request_context,
    metrics_endpoint,
)

if settings.observability_structured_logs:
    configure_structured_logging(settings.app_log_level)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
METRICS_TOKEN_HEADER = "X-Metrics-Token"

# Detail values matching any of these are hidden from clients in prod
_REDACTED = "[REDACTED]"
_LEAKY_DETAIL_PATTERNS = (
    re.compile(r"[/\\][\w/-]+\.(py|json)", re.IGNORECASE),
    re.compile(r"Traceback \(most recent call last\)", re.IGNORECASE),
)


def _redact(value: Any) -> Any:
    if isinstance(value, str):
        return _REDACTED if any(p.search(value) for p in _LEAKY_DETAIL_PATTERNS) else value
    if isinstance(value, dict):
        return {key: _redact(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_redact(item) if isinstance(item, dict) else item for item in value]
    return value


def _sanitize_error_details(details: dict[str, Any]) -> dict[str, Any]:
    """
    Strip server-side paths and tracebacks from error details in prod.

    Other environments get the details unchanged so local debugging keeps
    full context.
    """
    if settings.app_env != "prod":
        return details
    return _redact(details)


def _error_body(error: str, message: Any, details: dict[str, Any] | None = None) -> dict:
    return {"error": error, "message": message, "details": details or {}}


def register_exception_handlers(app: FastAPI) -> None:
    """Attach handlers that turn exceptions into `{error, message, details}` bodies."""

    @app.exception_handler(AlertBicepError)
    async def alert_bicep_error_handler(request: Request, exc: AlertBicepError) -> JSONResponse:
        status_code = get_status_code(exc)
        error_name = exc.__class__.__name__
        log = logger.error if status_code >= 500 else logger.warning
        log(
            "%s on %s: %s",
            error_name,
            request.url.path,
            exc.message,
            extra={"details": exc.details, **extract_request_context(request)},
        )
        return JSONResponse(
            status_code=status_code,
            content=_error_body(error_name, exc.message, _sanitize_error_details(exc.details)),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "HTTP %d on %s: %s",
                exc.status_code,
                request.url.path,
                exc.detail,
                extra=extract_request_context(request),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("HTTPException", exc.detail),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        # Full detail goes to the log only; clients get a generic body
        logger.error(
            "Unhandled %s on %s",
            type(exc).__name__,
            request.url.path,
            exc_info=exc,
            extra=extract_request_context(request),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("InternalServerError", "An unexpected error occurred"),
        )


async def protected_metrics(request: Request) -> Response:
    """
    Prometheus scrape endpoint.

    Requires the `X-Metrics-Token` header to equal METRICS_TOKEN; answers 500
    when no token is configured and 403 on a mismatch.
    """
    expected = settings.metrics_token
    if not expected:
        logger.error("Metrics requested but METRICS_TOKEN is not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Metrics token not configured. Set METRICS_TOKEN environment variable.",
        )

    supplied = request.headers.get(METRICS_TOKEN_HEADER) or ""
    if not hmac.compare_digest(supplied, expected):
        logger.warning(
            "Rejected metrics request",
            extra={"client_ip": request.client.host if request.client else "unknown"},
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid metrics token")

    return metrics_endpoint()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(
        "Starting %s (env=%s, options_dir=%s)",
        settings.app_name,
        settings.app_env.value,
        settings.options_data_dir,
    )
    yield


def create_app() -> FastAPI:
    """
    Build the template API.

    Middleware (outermost first): request size limit, CORS, observability.
    Routers are mounted under `/api/v1`; `/metrics` is added at the root when
    observability is enabled.
    """
    app = FastAPI(
        title="Service Health Alert Bicep Generator",
        description="Generates Bicep templates for Azure Service Health activity log alerts",
        version="0.1.0",
        lifespan=lifespan,
    )

    if settings.observability_enabled:
        app.add_middleware(ObservabilityMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestSizeLimitMiddleware, max_size_mb=settings.max_request_size_mb)

    register_exception_handlers(app)

    for router in (health_router, options_router, templates_router):
        app.include_router(router, prefix=API_PREFIX)

    if settings.observability_enabled:
        app.add_api_route("/metrics", protected_metrics, methods=["GET"], include_in_schema=False)

    return app


app = create_app()
