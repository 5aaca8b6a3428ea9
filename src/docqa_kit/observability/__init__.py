from . import names
from .base import InMemoryMetricsHook, LoggingMetricsHook, MetricsHook, NoOpMetricsHook

__all__ = [
    "InMemoryMetricsHook",
    "LoggingMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    "names",
]
