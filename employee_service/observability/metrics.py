"""
Application Metrics with Prometheus
=============================================================================
CONCEPT: Counters and Histograms

  Your App  ──(exposes /metrics)──>  Prometheus  ──(queries)──>  Grafana

  1. COUNTER: only goes up. Use rate() in PromQL for per-second values.
  2. HISTOGRAM: distribution of observed values (latency), exported as
     <name>_bucket / <name>_count / <name>_sum series.

WHAT WE TRACK:
  - employee_operations_total: successful service operations by name
    (create, update, patch, delete, search_by_name, ...). Shows the traffic
    mix of the API.
  - api_errors_total: every error body the API produced, by error kind and
    status. A rising "unexpected" series is the one worth alerting on.
  - http_request_duration_seconds: end-to-end request latency.

Example Prometheus queries:
  Error ratio over 5 minutes:
    sum(rate(api_errors_total[5m])) / sum(rate(http_request_duration_seconds_count[5m]))

  Writes per second:
    sum(rate(employee_operations_total{operation=~"create|update|patch|delete"}[5m]))
=============================================================================
"""

from prometheus_client import Counter, Histogram

employee_operations_total = Counter(
    name="employee_operations_total",
    documentation="Total number of successful employee operations, partitioned by operation.",
    labelnames=["operation"],
)

api_errors_total = Counter(
    name="api_errors_total",
    documentation="Total number of error responses, partitioned by error kind and status code.",
    labelnames=["error_kind", "status_code"],
)

# Buckets sized for single-table CRUD: most requests finish well under 100ms.
http_request_duration_seconds = Histogram(
    name="http_request_duration_seconds",
    documentation="HTTP request latency in seconds, partitioned by method and status code.",
    labelnames=["method", "status_code"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)


def record_operation(operation: str) -> None:
    employee_operations_total.labels(operation=operation).inc()


def record_error(error_kind: str, status_code: int) -> None:
    api_errors_total.labels(error_kind=error_kind, status_code=str(status_code)).inc()


def record_request(method: str, status_code: int, duration_ms: float) -> None:
    """
    Record one completed HTTP request.

    duration_ms is converted to seconds, the Prometheus base unit.
    """
    http_request_duration_seconds.labels(
        method=method,
        status_code=str(status_code),
    ).observe(duration_ms / 1000.0)
