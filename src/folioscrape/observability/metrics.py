"""
Defines Prometheus metrics for the scraper.
"""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import REGISTRY as _PROM_REGISTRY
from prometheus_client import Counter as _OrigCounter
from prometheus_client import Histogram as _OrigHistogram

# ---------------------------------------------------------------------------
# Duplicate-safe Prometheus metric wrappers
# ---------------------------------------------------------------------------
# Module reloads in the test suite must not trip duplicate registration.


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
    # Counter names are registered without the `_total` suffix prometheus_client appends.
    return {
        "scrapes": Counter(
            "folioscrape_scrapes",
            "Portfolio scrape requests by outcome",
            ["outcome"],
        ),
        "fetch_duration_seconds": Histogram(
            "folioscrape_fetch_duration_seconds",
            "Time taken to fetch or render a page",
            ["method"],
        ),
        "extraction_duration_seconds": Histogram(
            "folioscrape_extraction_duration_seconds",
            "Time taken to parse a page and run all extraction passes",
        ),
    }


METRICS: Dict[str, Any] = _create_metrics()


def export_prometheus() -> bytes:
    """Export metrics in Prometheus text format."""
    from prometheus_client import generate_latest

    return generate_latest()
