"""
Defines Prometheus metrics for the profile service.
"""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import REGISTRY as _PROM_REGISTRY
from prometheus_client import Counter as _OrigCounter
from prometheus_client import Histogram as _OrigHistogram
from prometheus_client import generate_latest

# ---------------------------------------------------------------------------
# Duplicate-safe Prometheus metric wrappers
# ---------------------------------------------------------------------------
# Re-importing this module (test reloads, uvicorn reloader) must reuse the
# collectors already in the default registry instead of registering twice.


def _duplicate_safe_factory(metric_cls):
    """Return a factory that reuses an existing collector if already present."""

    def _factory(name: str, documentation: str, *args, **kwargs):  # type: ignore[override]
        existing = _PROM_REGISTRY._names_to_collectors.get(name)
        if existing is not None:
            return existing  # type: ignore[return-value]

        try:
            return metric_cls(name, documentation, *args, **kwargs)  # type: ignore[call-arg]
        except ValueError:
            return _PROM_REGISTRY._names_to_collectors[name]  # type: ignore[return-value]

    return _factory


Counter = _duplicate_safe_factory(_OrigCounter)  # type: ignore[assignment]
Histogram = _duplicate_safe_factory(_OrigHistogram)  # type: ignore[assignment]


def _create_metrics() -> Dict[str, Any]:
    return {
        "requests_total": Counter(
            "siteprofile_requests_total",
            "Profile extraction requests by outcome",
            ["outcome"],
        ),
        "fetch_latency_seconds": Histogram(
            "siteprofile_fetch_latency_seconds",
            "Time taken to fetch a page",
            ["page"],
            buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
        ),
        "index_fallback_total": Counter(
            "siteprofile_index_fallback_total",
            "Requests where the derived index page was unavailable",
        ),
        "extraction_seconds": Histogram(
            "siteprofile_extraction_seconds",
            "Time spent running the field extractors",
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        ),
    }


METRICS: Dict[str, Any] = _create_metrics()


def export_prometheus() -> bytes:
    """Export metrics in Prometheus text format."""
    return generate_latest()
