"""
FastAPI middleware for Prometheus metrics collection.
Separated for clarity and reusability.
"""

import time
from typing import Awaitable, Callable

from fastapi import Request, Response

from shared.libs.observability.metrics import (
    ACTIVE_REQUESTS,
    REQUEST_COUNT,
    REQUEST_DURATION,
    EXCEPTION_COUNT,
)


def endpoint_label(request: Request) -> str:
    """
    Route template of the matched endpoint (e.g. /categories/{category_id}),
    or the raw path when nothing matched. Catalog ids are free-form strings,
    so raw paths would give one label per node.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


async def metrics_middleware(
    request: Request, call_next: Callable[..., Awaitable[Response]]
) -> Response:
    """
    Middleware to collect HTTP request metrics.

    Tracks:
    - Request count
    - Request duration
    - Active requests
    - Exceptions (by type)
    """
    method = request.method

    ACTIVE_REQUESTS.labels(method=method).inc()
    start_time = time.time()

    try:
        response = await call_next(request)
        status_code = response.status_code
    except Exception as e:
        EXCEPTION_COUNT.labels(
            exception_type=type(e).__name__,
            method=method,
            endpoint=endpoint_label(request),
        ).inc()
        status_code = 500
        raise
    finally:
        duration = time.time() - start_time
        ACTIVE_REQUESTS.labels(method=method).dec()

        path = endpoint_label(request)
        REQUEST_COUNT.labels(method=method, endpoint=path, status=str(status_code)).inc()
        REQUEST_DURATION.labels(method=method, endpoint=path).observe(duration)

    return response
