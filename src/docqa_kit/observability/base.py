# src/docqa_kit/observability/base.py

import logging
from collections import defaultdict
from typing import Protocol

logger = logging.getLogger(__name__)

Labels = dict[str, str] | None


class MetricsHook(Protocol):
    """Sink for metrics emitted by chunking, embedding, storage and QA.

    Plug in a Prometheus/StatsD adapter by implementing these three methods.
    """

    def record_latency(self, name: str, value_ms: float, labels: Labels = None) -> None: ...

    def increment(self, name: str, value: int = 1, labels: Labels = None) -> None: ...

    def record_gauge(self, name: str, value: float, labels: Labels = None) -> None: ...


class NoOpMetricsHook:
    def record_latency(self, name: str, value_ms: float, labels: Labels = None) -> None:
        pass

    def increment(self, name: str, value: int = 1, labels: Labels = None) -> None:
        pass

    def record_gauge(self, name: str, value: float, labels: Labels = None) -> None:
        pass


class LoggingMetricsHook:
    """Writes every metric to the log at DEBUG level."""

    def record_latency(self, name: str, value_ms: float, labels: Labels = None) -> None:
        logger.debug("latency %s=%.1fms labels=%s", name, value_ms, labels or {})

    def increment(self, name: str, value: int = 1, labels: Labels = None) -> None:
        logger.debug("counter %s+=%d labels=%s", name, value, labels or {})

    def record_gauge(self, name: str, value: float, labels: Labels = None) -> None:
        logger.debug("gauge %s=%s labels=%s", name, value, labels or {})


class InMemoryMetricsHook:
    """Keeps metrics in memory, keyed by name. Handy in tests and scripts."""

    def __init__(self) -> None:
        self.latencies: dict[str, list[float]] = defaultdict(list)
        self.counters: dict[str, int] = defaultdict(int)
        self.gauges: dict[str, float] = {}

    def record_latency(self, name: str, value_ms: float, labels: Labels = None) -> None:
        self.latencies[name].append(value_ms)

    def increment(self, name: str, value: int = 1, labels: Labels = None) -> None:
        self.counters[name] += value

    def record_gauge(self, name: str, value: float, labels: Labels = None) -> None:
        self.gauges[name] = value
