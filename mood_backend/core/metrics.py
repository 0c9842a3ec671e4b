from __future__ import annotations

import time
from typing import cast

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from mood_backend.core.middleware.http_logging import route_label

metrics_router = APIRouter(tags=["monitoring"])

# Labels are route templates or fixed outcome names only, never user content.

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    labelnames=("method", "route", "status_code"),
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=("method", "route", "status_code"),
    # Upper buckets cover slow provider round trips (timeout defaults to 15s).
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0, 30.0),
)

chat_replies_total = Counter(
    "chat_replies_total",
    "Chat replies by outcome (crisis, llm, not_configured, provider/transport failures)",
    labelnames=("outcome",),
)


class PrometheusMetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            route = route_label(request)
            method = request.method
            code = str(int(status_code))
            duration = time.perf_counter() - started
            http_requests_total.labels(method=method, route=route, status_code=code).inc()
            http_request_duration_seconds.labels(
                method=method, route=route, status_code=code
            ).observe(duration)


def record_chat_outcome(outcome: str) -> None:
    chat_replies_total.labels(outcome=outcome).inc()


@metrics_router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    # Default registry; one process per container.
    payload = generate_latest()
    return Response(content=cast(bytes, payload), media_type=CONTENT_TYPE_LATEST)
