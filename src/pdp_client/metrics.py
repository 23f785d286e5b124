"""Prometheus instruments for PDP calls."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

ATTEMPT_COUNTER = Counter(
    "pdp_client_attempts_total",
    "Individual POST attempts against the Policy Decision Point",
    ["outcome"],
)
RETRIES_EXHAUSTED_COUNTER = Counter(
    "pdp_client_retries_exhausted_total",
    "Calls that failed after every allowed attempt",
)
ATTEMPT_LATENCY = Histogram(
    "pdp_client_request_latency_seconds",
    "Latency of a single POST attempt",
)


__all__ = ["ATTEMPT_COUNTER", "RETRIES_EXHAUSTED_COUNTER", "ATTEMPT_LATENCY"]
