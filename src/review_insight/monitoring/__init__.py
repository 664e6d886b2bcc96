"""Monitoring and metrics instrumentation for Review Insight.

Exports custom Prometheus metrics for inference calls and event logging.
"""

from review_insight.monitoring.metrics import (
    events_logged_total,
    inference_latency_seconds,
    inference_outcomes_total,
    label_matches_total,
    warmup_retries_total,
)

__all__ = [
    "inference_outcomes_total",
    "inference_latency_seconds",
    "warmup_retries_total",
    "label_matches_total",
    "events_logged_total",
]
