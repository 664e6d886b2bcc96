"""Custom Prometheus metrics for Review Insight.

Exposed at /metrics next to the HTTP metrics from the instrumentator.
Useful alerts:
- inference_outcomes_total{outcome="payment_required"|"rate_limited"} rising
  (token quota exhausted)
- warmup_retries_total high relative to inference calls (cold model)
"""

from prometheus_client import Counter, Histogram

# === Inference Metrics ===

inference_outcomes_total = Counter(
    "inference_outcomes_total",
    "Inference calls by operation and final outcome",
    ["operation", "outcome"],
)
"""
Final outcome per inference call.

Labels:
- operation: classify, score
- outcome: success or an ErrorKind value (rate_limited, model_warming_up, ...)
"""

inference_latency_seconds = Histogram(
    "inference_latency_seconds",
    "Inference call latency in seconds, retry delay included",
    ["operation", "success"],
    buckets=[0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)

warmup_retries_total = Counter(
    "warmup_retries_total",
    "Delayed retries issued after a 404/503 warmup response",
    ["operation"],
)

# === Display Metrics ===

label_matches_total = Counter(
    "label_matches_total",
    "Display labels chosen for model answers",
    ["task", "category"],
)
"""
Labels:
- task: sentiment, noun_density, scored_sentiment
- category: positive, negative, neutral, high, medium, low, unknown

A growing share of "unknown" means the model stopped answering with the
expected keywords.
"""

# === Event Logging Metrics ===

events_logged_total = Counter(
    "events_logged_total",
    "Events posted to the logging endpoint by event name and status",
    ["event", "status"],
)
