"""Prometheus metrics for cascade adjustments."""

from prometheus_client import Counter, Histogram

cascade_runs_total = Counter(
    "cascade_runs_total",
    "Total cascade adjustments by outcome",
    ["outcome"],
)

cascade_affected_segments = Histogram(
    "cascade_affected_segments",
    "Number of segments shifted by a successful cascade",
    buckets=[1, 2, 3, 5, 8, 13, 21, 34],
)


class PrometheusCascadeMetrics:
    """Prometheus-based cascade metrics implementation."""

    def record_outcome(self, outcome: str) -> None:
        """Increment the cascade counter for an outcome."""
        cascade_runs_total.labels(outcome=outcome).inc()

    def observe_affected(self, count: int) -> None:
        """Record how many segments a cascade shifted."""
        cascade_affected_segments.observe(count)
