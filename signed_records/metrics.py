# signed_records/metrics.py
"""
Prometheus metrics for the Adobe Sign -> Content Manager transfer.

Collectors are created through :func:`get_metric` so repeated imports (tests
reloading modules, the smoke script running next to the CLI) reuse the
already-registered instance instead of tripping the duplicate-timeseries
check in ``prometheus_client``.
"""
from __future__ import annotations

from typing import Any, Dict, Tuple, Type

from prometheus_client import Counter, Histogram

__all__ = [
    "get_metric",
    "tokens_issued_total",
    "token_refresh_errors_total",
    "http_requests_total",
    "http_latency_seconds",
    "pipeline_stage_total",
]

_METRICS: Dict[Tuple[Type[Any], str], Any] = {}


def get_metric(cls: Type[Any], name: str, *args, **kwargs):
    key = (cls, name)
    if key in _METRICS:
        return _METRICS[key]
    metric = cls(name, *args, **kwargs)
    _METRICS[key] = metric
    return metric


tokens_issued_total = get_metric(
    Counter, "adobe_sign_tokens_issued_total",
    "Access tokens minted from the stored refresh token",
)

token_refresh_errors_total = get_metric(
    Counter, "adobe_sign_refresh_errors_total",
    "Failed access token refreshes",
    ["reason"],
)

http_requests_total = get_metric(
    Counter, "integration_http_requests_total",
    "HTTP requests issued to external systems",
    ["system", "endpoint", "method", "status"],
)

http_latency_seconds = get_metric(
    Histogram, "integration_http_latency_seconds",
    "Latency of HTTP requests to external systems (seconds)",
    ["system", "endpoint"],
    buckets=(0.1, 0.25, 0.5, 1, 2, 5, 10, 30),
)

pipeline_stage_total = get_metric(
    Counter, "pipeline_stage_total",
    "Pipeline stage outcomes",
    ["stage", "result"],
)
