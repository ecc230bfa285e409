from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

REQUESTS_METRIC = "reqs_count"


class RequestMetrics:
    """
    Request counter keyed by server identity.

    Each instance owns its own registry, so the metrics of one server (or
    one test) never leak into another. Counter increments are guarded by
    prometheus_client's internal lock and are safe from any thread.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, process_metrics: bool = True):
        self.registry = CollectorRegistry()
        self.requests = Counter(
            REQUESTS_METRIC,
            "The total number of received requests",
            ["server_id"],
            registry=self.registry,
        )
        if process_metrics:
            ProcessCollector(registry=self.registry)
            PlatformCollector(registry=self.registry)

    def register(self, identity: str) -> None:
        """Create the series for ``identity`` at zero so it is scraped before any traffic."""
        self.requests.labels(server_id=identity)

    def increment(self, identity: str) -> None:
        self.requests.labels(server_id=identity).inc()

    def value(self, identity: str) -> float:
        sample = self.registry.get_sample_value(
            f"{REQUESTS_METRIC}_total", {"server_id": identity}
        )
        return sample or 0.0

    def render(self) -> bytes:
        """Prometheus text exposition of every metric in the registry."""
        return generate_latest(self.registry)
