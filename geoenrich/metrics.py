"""
Prometheus metrics for GeoIP enrichment
"""

import threading
import weakref
from typing import Optional

from prometheus_client import REGISTRY, CollectorRegistry, Gauge, Histogram


class EnrichmentMetrics:
    """Instruments for one collector registry.

    prometheus_client refuses to register the same metric name twice on a
    registry, so instances are cached per registry; use `for_registry`
    instead of the constructor.
    """

    _instances: "weakref.WeakKeyDictionary[CollectorRegistry, EnrichmentMetrics]" = weakref.WeakKeyDictionary()
    _lock = threading.Lock()

    def __init__(self, registry: CollectorRegistry):
        self.resolve_time = Histogram(
            'geoenrich_resolve_seconds',
            'Time spent resolving a single address against a GeoIP database',
            buckets=[0.00005, 0.0001, 0.00025, 0.0005, 0.001, 0.005, 0.01, 0.05],
            registry=registry
        )
        self.resolver_enabled = Gauge(
            'geoenrich_resolver_enabled',
            'GeoIP resolver status (1=enabled, 0=disabled)',
            ['resolver'],
            registry=registry
        )

    @classmethod
    def for_registry(cls, registry: Optional[CollectorRegistry] = None) -> "EnrichmentMetrics":
        registry = registry if registry is not None else REGISTRY
        with cls._lock:
            metrics = cls._instances.get(registry)
            if metrics is None:
                metrics = cls(registry)
                cls._instances[registry] = metrics
            return metrics

    def set_resolver_enabled(self, resolver: str, enabled: bool):
        self.resolver_enabled.labels(resolver=resolver).set(1 if enabled else 0)

