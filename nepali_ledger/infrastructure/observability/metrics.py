"""Prometheus metrics for calculation volume, failures and request latency"""

from prometheus_client import Counter, Histogram

# Calculation metrics
calculation_counter = Counter(
    "ledger_calculation_total",
    "Total calculations served",
    ["kind"],  # interest | net_balance | dashboard | conversion
)

calculation_failures_counter = Counter(
    "ledger_calculation_failures_total",
    "Calculations rejected by the domain layer",
    ["kind", "error"],  # error: out_of_range | invalid_date | invalid_input
)

principal_bucket_counter = Counter(
    "ledger_principal_bucket",
    "Principals calculated by bucket",
    ["bucket"],  # <10k, 10k-100k, 100k-1M, 1M+
)

# Calendar health
degraded_today_counter = Counter(
    "ledger_degraded_today_total",
    "Times the system clock fell outside the supported BS calendar",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(kind: str, principal: float) -> None:
    """Record calculation metrics for monitoring volume and loan size distribution"""
    calculation_counter.labels(kind=kind).inc()

    if principal < 10_000:
        bucket = "<10k"
    elif principal < 100_000:
        bucket = "10k-100k"
    elif principal < 1_000_000:
        bucket = "100k-1M"
    else:
        bucket = "1M+"

    principal_bucket_counter.labels(bucket=bucket).inc()


def record_failure(kind: str, error: str) -> None:
    calculation_failures_counter.labels(kind=kind, error=error).inc()
