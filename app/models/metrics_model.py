# /app/models/metrics_model.py

from typing import Dict

from pydantic import BaseModel, Field


class MetricsSnapshot(BaseModel):
    """
    Point-in-time values for the Prometheus scrape. The process gauges are
    read fresh on every snapshot; the request counters are copied from the
    owning MetricsStore.
    """

    process_uptime_seconds: float
    process_memory_rss_bytes: int
    process_memory_heap_total_bytes: int
    process_memory_heap_used_bytes: int
    http_requests_total: int
    requests_by_path: Dict[str, int] = Field(default_factory=dict)
