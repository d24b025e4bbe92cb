# /app/services/metrics_service.py

"""
Request counters and the Prometheus exposition for GET /api/metrics.

A `MetricsStore` is owned by the FastAPI app (see `create_app`) rather than
living in module globals, so every test can build an isolated one. Each store
carries its own `CollectorRegistry`; the default prometheus_client registry is
never touched. Counters are per process; a scraper federates across replicas.
"""

import threading
import time
from typing import Dict, Iterator

import psutil
from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from ..models.metrics_model import MetricsSnapshot

METRICS_PATH = "/api/metrics"


def normalize_path(path: str) -> str:
    return path.split("?", 1)[0]


def metric_families(snapshot: MetricsSnapshot) -> Iterator[Metric]:
    """Yields the four process gauges, then the request counters."""
    yield GaugeMetricFamily(
        "process_uptime_seconds", "The number of seconds the process has been running",
        value=snapshot.process_uptime_seconds,
    )
    yield GaugeMetricFamily(
        "process_memory_rss_bytes", "Resident Set Size memory usage",
        value=snapshot.process_memory_rss_bytes,
    )
    yield GaugeMetricFamily(
        "process_memory_heap_total_bytes", "Total heap memory allocated",
        value=snapshot.process_memory_heap_total_bytes,
    )
    yield GaugeMetricFamily(
        "process_memory_heap_used_bytes", "Heap memory in use",
        value=snapshot.process_memory_heap_used_bytes,
    )
    # Exposed as http_requests_total.
    yield CounterMetricFamily(
        "http_requests", "Total number of HTTP requests",
        value=snapshot.http_requests_total,
    )

    by_endpoint = CounterMetricFamily(
        "http_requests_by_endpoint", "Total requests by endpoint", labels=["path"]
    )
    for path, count in snapshot.requests_by_path.items():
        by_endpoint.add_metric([path], count)
    yield by_endpoint


class _SnapshotCollector(Collector):
    def __init__(self, snapshot: MetricsSnapshot):
        self._snapshot = snapshot

    def collect(self) -> Iterator[Metric]:
        return metric_families(self._snapshot)


class _LiveCollector(Collector):
    def __init__(self, store: "MetricsStore"):
        self._store = store

    def collect(self) -> Iterator[Metric]:
        return metric_families(self._store.snapshot())


class MetricsStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._requests_total = 0
        self._requests_by_path: Dict[str, int] = {}
        self.registry = CollectorRegistry()
        self.registry.register(_LiveCollector(self))

    def record_request(self, path: str) -> None:
        path = normalize_path(path)
        with self._lock:
            self._requests_total += 1
            self._requests_by_path[path] = self._requests_by_path.get(path, 0) + 1

    def reset(self) -> None:
        with self._lock:
            self._requests_total = 0
            self._requests_by_path = {}

    def snapshot(self) -> MetricsSnapshot:
        # Looked up per call so a forked worker reports its own pid.
        process = psutil.Process()
        memory = process.memory_info()
        with self._lock:
            requests_total = self._requests_total
            requests_by_path = dict(self._requests_by_path)
        return MetricsSnapshot(
            process_uptime_seconds=max(time.time() - process.create_time(), 0.0),
            process_memory_rss_bytes=memory.rss,
            # No managed heap in CPython: virtual size stands in for the
            # allocated total, the data segment (where reported) for the used part.
            process_memory_heap_total_bytes=memory.vms,
            process_memory_heap_used_bytes=getattr(memory, "data", memory.rss),
            http_requests_total=requests_total,
            requests_by_path=requests_by_path,
        )

    def render(self) -> bytes:
        return generate_latest(self.registry)


def render_metrics(snapshot: MetricsSnapshot) -> str:
    """Formats a fixed snapshot in the Prometheus text exposition format."""
    registry = CollectorRegistry()
    registry.register(_SnapshotCollector(snapshot))
    return generate_latest(registry).decode("utf-8")
