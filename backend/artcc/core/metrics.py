"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Event workflow metrics
registration_operations = Counter(
    'event_registration_operations_total',
    'Event registration operations',
    ['operation']  # upsert, unregister
)

position_assignments = Counter(
    'event_position_assignments_total',
    'Position controller assignments',
    ['result']  # assigned, cleared
)

# Activity report metrics
activity_report_requests = Counter(
    'activity_report_requests_total',
    'Activity report requests',
    ['result']  # hit, miss, error
)

activity_report_duration = Histogram(
    'activity_report_generation_seconds',
    'Time spent computing an activity report',
    buckets=[0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
)

external_feed_errors = Counter(
    'activity_feed_errors_total',
    'Activity feed failures',
    ['source']
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
)

redis_connection_errors = Counter(
    'redis_connection_errors_total',
    'Redis connection errors'
)

# HTTP metrics
request_latency = Histogram(
    'http_request_latency_seconds',
    'HTTP request latency',
    ['method', 'status'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_registration(operation: str):
    """Record a registration change. Operation: upsert, unregister"""
    registration_operations.labels(operation=operation).inc()


def record_assignment(assigned: bool):
    result = "assigned" if assigned else "cleared"
    position_assignments.labels(result=result).inc()


def record_activity_report(result: str):
    """Record activity report request. Result: hit, miss, error"""
    activity_report_requests.labels(result=result).inc()


def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
