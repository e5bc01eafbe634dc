"""
Prometheus metrics for the catalog service.
"""

from fastapi import Response
from prometheus_client import (
    Counter,
    Histogram,
    Gauge,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

# === HTTP METRICS ===
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status",
    ["method", "endpoint", "status"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "Request duration in seconds",
    ["method", "endpoint"],
    # Custom buckets: 10ms to 10s
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests", "Current active HTTP requests", ["method"]
)

EXCEPTION_COUNT = Counter(
    "http_exceptions_total",
    "Total number of exceptions raised by the service",
    ["exception_type", "method", "endpoint"],
)

# === CATALOG METRICS ===
DOCUMENT_WRITES = Counter(
    "catalog_document_writes_total",
    "Single-document writes against the category store",
    ["operation"],
)

TREE_MUTATIONS = Counter(
    "catalog_tree_mutations_total",
    "Nested tree mutations by operation and outcome",
    ["operation", "outcome"],
)

# === SYSTEM METRICS ===
SERVICE_HEALTH = Gauge(
    "service_health", "Service health status (1=healthy, 0=unhealthy)", []
)


def create_metrics_endpoint():
    """Create a /metrics endpoint for Prometheus."""

    async def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return metrics
