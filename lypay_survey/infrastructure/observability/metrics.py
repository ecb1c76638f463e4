"""Prometheus metrics for monitoring submissions, flagged banks, and AI summary performance"""

from prometheus_client import Counter, Histogram, Gauge

# Submission metrics
entries_submitted_counter = Counter(
    "survey_entries_submitted_total",
    "Total survey entries stored",
    ["status"],  # COMPLETED | REJECTED
)

problematic_banks_gauge = Gauge(
    "survey_problematic_banks",
    "Banks currently flagged by the 24h critical-issue detector",
)

# Store metrics
store_failures_counter = Counter(
    "survey_store_failures_total",
    "Failed survey store reads and writes",
    ["operation"],  # append | list
)

# AI summary metrics
summary_latency_histogram = Histogram(
    "summary_latency_seconds",
    "AI summarization response time",
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

summary_failures_counter = Counter(
    "summary_failures_total",
    "AI summarization calls that fell back to the static message",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_submission(status: str) -> None:
    entries_submitted_counter.labels(status=status).inc()


def record_detection(flagged_count: int) -> None:
    """Publish the size of the latest detector output"""
    problematic_banks_gauge.set(flagged_count)
