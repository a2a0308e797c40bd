"""Monitoring configuration for the spelling app."""
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Practice metrics
attempts_recorded = Counter(
    "spellcat_attempts_recorded_total",
    "Total number of spelling attempts recorded",
    ["result"],
)

sessions_created = Counter(
    "spellcat_sessions_created_total",
    "Total number of sessions saved",
    ["session_type"],
)

session_score = Histogram(
    "spellcat_session_score_percent",
    "Score of saved practice sessions in percent",
    buckets=[20, 40, 60, 80, 100],
)

comparisons = Counter(
    "spellcat_spelling_comparisons_total",
    "Total number of spelling comparisons computed",
)

# Error metrics
error_count = Counter(
    "spellcat_errors_total",
    "Total number of errors encountered",
    ["error_type"],
)

# Performance metrics
request_duration = Histogram(
    "spellcat_request_duration_seconds",
    "Duration of API requests in seconds",
    ["endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0],
)


def record_attempt(is_correct: bool) -> None:
    """Count one recorded attempt by its result."""
    attempts_recorded.labels(result="correct" if is_correct else "incorrect").inc()


def render_metrics() -> tuple[bytes, str]:
    """Render the default registry in the Prometheus text format."""
    return generate_latest(), CONTENT_TYPE_LATEST
