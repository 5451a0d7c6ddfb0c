"""Quart request middleware: correlation context and HTTP metrics."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from quart import Response, g, request

from .error_handling.correlation import (
    CORRELATION_HEADER,
    extract_correlation_context_from_request,
)
from .logging_utils import bind_request_context, create_service_logger

if TYPE_CHECKING:
    from quart import Quart


def setup_correlation_middleware(app: Quart) -> None:
    """Attach a CorrelationContext to ``g`` and echo it in the response header."""

    @app.before_request
    async def _bind_correlation_context() -> None:
        ctx = extract_correlation_context_from_request(request)
        g.correlation_context = ctx
        bind_request_context(ctx.original, path=request.path)

    @app.after_request
    async def _echo_correlation_id(response: Response) -> Response:
        ctx = getattr(g, "correlation_context", None)
        if ctx is not None:
            response.headers[CORRELATION_HEADER] = ctx.original
        return response


def setup_metrics_middleware(
    app: Quart,
    request_count_metric_name: str = "request_count",
    request_duration_metric_name: str = "request_duration",
    status_label_name: str = "status",
    logger_name: str = "textcheck_service_libs.metrics",
) -> None:
    """
    Record request count and duration using collectors from ``app.extensions["metrics"]``.

    Missing collectors are logged once and the hooks become no-ops.
    """
    logger = create_service_logger(logger_name)
    metrics: dict[str, Any] = app.extensions.get("metrics", {})
    request_count = metrics.get(request_count_metric_name)
    request_duration = metrics.get(request_duration_metric_name)
    if request_count is None or request_duration is None:
        logger.warning(
            "HTTP metrics collectors not found, request metrics disabled",
            request_count_metric=request_count_metric_name,
            request_duration_metric=request_duration_metric_name,
        )
        return

    @app.before_request
    async def _start_timer() -> None:
        g.request_start_time = time.perf_counter()

    @app.after_request
    async def _record_request(response: Response) -> Response:
        start = getattr(g, "request_start_time", None)
        endpoint = request.url_rule.rule if request.url_rule is not None else "unknown"
        if start is not None:
            request_duration.labels(method=request.method, endpoint=endpoint).observe(
                time.perf_counter() - start
            )
        request_count.labels(
            **{
                "method": request.method,
                "endpoint": endpoint,
                status_label_name: str(response.status_code),
            }
        ).inc()
        return response
