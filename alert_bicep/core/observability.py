"""
Logging, request correlation and Prometheus metrics.

Provides:
- `StructuredFormatter`: one JSON object per log record, tagged with the
  current request ID
- `Metrics`: HTTP and template-render metrics in a private registry
- `ObservabilityMiddleware`: assigns request IDs, times requests, logs them

Usage:
    from alert_bicep.core.observability import get_request_id, metrics
"""

import json
import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

from fastapi import Request, Response
from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

REQUEST_ID_HEADER = "X-Request-ID"
PROMETHEUS_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"
UNMATCHED_ROUTE = "unmatched"

_request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")

request_logger = logging.getLogger("alert_bicep.request")


def generate_request_id() -> str:
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Return the request ID bound to the current context ("" outside requests)."""
    return _request_id_ctx.get()


def set_correlation_id(request_id: str) -> None:
    _request_id_ctx.set(request_id)


# ============================================================================
# Structured Logging
# ============================================================================

# Everything else on a LogRecord was passed through `extra=`
_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


class StructuredFormatter(logging.Formatter):
    """
    Render log records as single-line JSON.

    Keys: timestamp (ISO 8601, UTC), level, logger, message, function, line,
    plus request_id inside a request, exception {type, message} when
    exc_info is set, and extra for any fields passed via `extra=`.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = get_request_id()
        if request_id:
            entry["request_id"] = request_id

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {"type": exc_type.__name__, "message": str(exc_value)}

        extra = {k: v for k, v in vars(record).items() if k not in _STANDARD_RECORD_ATTRS}
        if extra:
            entry["extra"] = extra

        return json.dumps(entry, default=str)


def configure_structured_logging(level: str = "INFO") -> None:
    """Replace root handlers with a single JSON stream handler at `level`."""
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


# ============================================================================
# Prometheus Metrics
# ============================================================================

_registry = CollectorRegistry()


class Metrics:
    """
    Application metrics.

    HTTP: requests by method, route template and status, latency, in-flight
    requests by method, unhandled errors. Templates: renders by outcome and
    action mode, render duration and rendered size.
    """

    def __init__(self, registry: CollectorRegistry) -> None:
        self.registry = registry

        self.http_requests_total = Counter(
            "http_requests_total",
            "HTTP requests handled",
            ["method", "route", "status_code"],
            registry=registry,
        )
        self.http_request_duration_seconds = Histogram(
            "http_request_duration_seconds",
            "HTTP request handling time in seconds",
            ["method", "route"],
            buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
            registry=registry,
        )
        self.http_requests_in_progress = Gauge(
            "http_requests_in_progress",
            "HTTP requests being handled",
            ["method"],
            registry=registry,
        )
        self.http_errors_total = Counter(
            "http_errors_total",
            "Requests that raised an unhandled exception",
            ["error_type", "method", "route"],
            registry=registry,
        )

        self.template_renders_total = Counter(
            "template_renders_total",
            "Alert template renders",
            ["status", "action_mode"],
            registry=registry,
        )
        self.template_render_duration_seconds = Histogram(
            "template_render_duration_seconds",
            "Alert template render time in seconds",
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5),
            registry=registry,
        )
        self.template_bytes = Histogram(
            "template_bytes",
            "Rendered alert template size in bytes",
            buckets=(256, 512, 1024, 2048, 4096, 8192, 16384, 65536),
            registry=registry,
        )


metrics = Metrics(_registry)


def metrics_endpoint() -> Response:
    """Expose the private registry in Prometheus text format."""
    return Response(content=generate_latest(_registry), media_type=PROMETHEUS_CONTENT_TYPE)


# ============================================================================
# Middleware
# ============================================================================


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """
    Per-request correlation, timing and logging.

    The incoming `X-Request-ID` is reused when present, otherwise a new one
    is generated; either way it is echoed on the response. Requests to
    `skip_paths` are counted but not logged.
    """

    def __init__(
        self,
        app: ASGIApp,
        metrics_instance: Metrics | None = None,
        skip_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.metrics = metrics_instance or metrics
        self.skip_paths = tuple(skip_paths or ["/health", "/metrics"])

    def _observe(self, method: str, route: str, status_code: int, started: float) -> float:
        elapsed = time.perf_counter() - started
        self.metrics.http_requests_total.labels(
            method=method, route=route, status_code=status_code
        ).inc()
        self.metrics.http_request_duration_seconds.labels(method=method, route=route).observe(
            elapsed
        )
        return elapsed

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        set_correlation_id(request_id)

        method, path = request.method, request.url.path
        in_progress = self.metrics.http_requests_in_progress.labels(method=method)
        in_progress.inc()
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            route = route_label(request)
            elapsed = self._observe(method, route, 500, started)
            error_type = type(exc).__name__
            self.metrics.http_errors_total.labels(
                error_type=error_type, method=method, route=route
            ).inc()
            request_logger.error(
                "%s %s failed with %s",
                method,
                path,
                error_type,
                exc_info=exc,
                extra={"route": route, "status_code": 500, "latency_ms": round(elapsed * 1000, 2)},
            )
            raise
        finally:
            in_progress.dec()

        route = route_label(request)
        elapsed = self._observe(method, route, response.status_code, started)
        response.headers[REQUEST_ID_HEADER] = request_id

        if not path.endswith(self.skip_paths):
            request_logger.info(
                "%s %s -> %d",
                method,
                path,
                response.status_code,
                extra={
                    "route": route,
                    "status_code": response.status_code,
                    "latency_ms": round(elapsed * 1000, 2),
                },
            )
        return response


def route_label(request: Request) -> str:
    """
    Metric label for the route that handled `request`.

    The matched path template (`/api/v1/options/{kind}`) once routing has
    run, otherwise `unmatched`.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


def extract_request_context(request: Request) -> dict[str, Any]:
    """Fields identifying the current request, for `extra=` in error logs."""
    return {"request_id": get_request_id(), "method": request.method}
