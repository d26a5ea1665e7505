from __future__ import annotations

from prometheus_client import Counter, Histogram

forecasts_provider_requests_total = Counter(
    "forecasts_provider_requests_total",
    "Total forecast provider requests",
    labelnames=["provider", "endpoint"],
)

forecasts_provider_errors_total = Counter(
    "forecasts_provider_errors_total",
    "Total forecast provider request errors",
    labelnames=["provider", "endpoint", "error_type"],
)

forecasts_provider_latency_seconds = Histogram(
    "forecasts_provider_latency_seconds",
    "Latency of forecast provider requests",
    labelnames=["provider", "endpoint"],
    buckets=(0.1, 0.3, 0.5, 1, 2, 5, 10, 20, 30),
)
