"""
Derived-metrics pipeline with memoization.

Runs the aggregator, risk ranker, index/anomaly interpreter and policy
simulator for one (bundle, parameters) pair. Results are cached under a
SHA-256 of both inputs, so any change to either produces a fresh run and
identical inputs return the identical result object.
"""
import hashlib
import logging
import threading
from collections import OrderedDict
from typing import Any, Dict, Optional

from aadhaar_insight.config import settings
from aadhaar_insight.schemas.bundle import AnalyticsBundle
from aadhaar_insight.schemas.metrics import (
    AnomalyFeedResponse,
    DashboardMetrics,
    SimulationParameters,
)
from aadhaar_insight.services.aggregator import (
    age_population_pools,
    compliance_by_state,
    zone_distribution,
)
from aadhaar_insight.services.index_interpreter import (
    anomalies_or_fallback,
    anomaly_stats,
    interpret_anomalies,
    rank_ali,
)
from aadhaar_insight.services.policy_simulator import PolicySimulationEngine
from aadhaar_insight.services.risk_ranker import derive_action_queue, derive_risks

logger = logging.getLogger(__name__)


def bundle_hash(bundle: AnalyticsBundle) -> str:
    return hashlib.sha256(bundle.model_dump_json().encode("utf-8")).hexdigest()


class MetricsPipeline:
    """Computes and memoizes the full set of derived metrics."""

    DEFAULT_MAX_ENTRIES = 32

    def __init__(self,
                 engine: Optional[PolicySimulationEngine] = None,
                 max_entries: int = DEFAULT_MAX_ENTRIES,
                 risk_top_n: int = 10,
                 compliance_top_n: int = 5,
                 action_queue_size: int = 10):
        self.engine = engine or PolicySimulationEngine()
        self.max_entries = max_entries
        self.risk_top_n = risk_top_n
        self.compliance_top_n = compliance_top_n
        self.action_queue_size = action_queue_size

        self._cache: "OrderedDict[str, DashboardMetrics]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def cache_key(self, bundle: AnalyticsBundle, params: SimulationParameters) -> str:
        # Hashed on every call: frozen models still hold mutable lists
        digest = hashlib.sha256()
        digest.update(bundle_hash(bundle).encode("utf-8"))
        digest.update(b"|")
        digest.update(params.model_dump_json().encode("utf-8"))
        return digest.hexdigest()

    def compute(self, bundle: AnalyticsBundle, params: SimulationParameters) -> DashboardMetrics:
        """Run every component from scratch. No caching."""
        anomaly_records, synthesized = anomalies_or_fallback(bundle)
        pools = age_population_pools(bundle.raw_data)

        return DashboardMetrics(
            compliance=compliance_by_state(bundle.bio_compliance, limit=self.compliance_top_n),
            zones=zone_distribution(bundle.strategic_matrix),
            risks=derive_risks(bundle.strategic_matrix, limit=self.risk_top_n),
            actions=derive_action_queue(bundle.strategic_matrix, limit=self.action_queue_size),
            ali=rank_ali(bundle.ali_index),
            anomalies=AnomalyFeedResponse(
                anomalies=interpret_anomalies(anomaly_records),
                stats=anomaly_stats(anomaly_records),
                synthesized=synthesized
            ),
            pools=pools,
            parameters=params,
            simulation=self.engine.simulate(pools, params)
        )

    def run(self, bundle: AnalyticsBundle, params: Optional[SimulationParameters] = None) -> DashboardMetrics:
        """
        Get derived metrics for the inputs, computing them only on a cache miss.

        Args:
            bundle: Analytics bundle snapshot
            params: Simulation parameters (defaults if omitted)
        """
        params = params or SimulationParameters()

        with self._lock:
            key = self.cache_key(bundle, params)
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                self._hits += 1
                logger.debug(f"Metrics cache hit: {key[:12]}")
                return cached

        result = self.compute(bundle, params)

        with self._lock:
            self._misses += 1
            self._cache[key] = result
            self._cache.move_to_end(key)
            while len(self._cache) > self.max_entries:
                self._cache.popitem(last=False)
        logger.debug(f"Metrics cache miss: {key[:12]}")
        return result

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "size": len(self._cache),
                "max_entries": self.max_entries
            }

    def clear_cache(self):
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0


# Global engine and pipeline built from settings
engine = PolicySimulationEngine(
    base_daily_capacity=settings.BASE_DAILY_CAPACITY,
    unit_cost=settings.UNIT_COST_PER_UPDATE,
    national_population=settings.NATIONAL_POPULATION
)

pipeline = MetricsPipeline(
    engine=engine,
    max_entries=settings.CACHE_MAX_ENTRIES,
    risk_top_n=settings.RISK_TOP_N,
    compliance_top_n=settings.COMPLIANCE_TOP_N,
    action_queue_size=settings.ACTION_QUEUE_SIZE
)


def get_engine() -> PolicySimulationEngine:
    """Dependency for the configured simulation engine."""
    return engine


def get_pipeline() -> MetricsPipeline:
    """Dependency for the shared metrics pipeline."""
    return pipeline
