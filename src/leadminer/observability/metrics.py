"""
Defines Prometheus metrics for the URL-based extraction path.
"""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import REGISTRY as _PROM_REGISTRY
from prometheus_client import Counter as _OrigCounter
from prometheus_client import Histogram as _OrigHistogram


def _duplicate_safe_factory(metric_cls):
    """Return a factory that reuses an existing collector if already registered."""

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

METRICS: Dict[str, Any] = {
    "page_fetches": Counter(
        "leadminer_page_fetches_total",
        "Page fetches by kind and outcome",
        ["kind", "outcome"],
    ),
    "fetch_duration": Histogram(
        "leadminer_fetch_duration_seconds",
        "Wall time of single page fetches",
        ["kind"],
        buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0, 30.0),
    ),
    "contact_page_hits": Counter(
        "leadminer_contact_page_email_hits_total",
        "Contact pages that yielded at least one email",
    ),
}
