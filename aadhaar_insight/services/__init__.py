"""
Services package initialization.
"""
from aadhaar_insight.services.aggregator import (
    aggregate,
    merge_aggregates,
    compliance_by_state,
    state_totals,
    zone_distribution,
    age_population_pools,
)
from aadhaar_insight.services.risk_ranker import (
    is_at_risk,
    derive_risks,
    derive_action_queue,
    matrix_points,
)
from aadhaar_insight.services.index_interpreter import (
    DeviationUndefined,
    ali_status,
    rank_ali,
    classify_anomaly_type,
    deviation_pct,
    interpret_anomalies,
    anomaly_stats,
    anomalies_or_fallback,
)
from aadhaar_insight.services.policy_simulator import PolicySimulationEngine, simulate
from aadhaar_insight.services.bundle_loader import BundleRepository, BundleUnavailable, parse_bundle
from aadhaar_insight.services.pipeline import MetricsPipeline

__all__ = [
    "aggregate",
    "merge_aggregates",
    "compliance_by_state",
    "state_totals",
    "zone_distribution",
    "age_population_pools",
    "is_at_risk",
    "derive_risks",
    "derive_action_queue",
    "matrix_points",
    "DeviationUndefined",
    "ali_status",
    "rank_ali",
    "classify_anomaly_type",
    "deviation_pct",
    "interpret_anomalies",
    "anomaly_stats",
    "anomalies_or_fallback",
    "PolicySimulationEngine",
    "simulate",
    "BundleRepository",
    "BundleUnavailable",
    "parse_bundle",
    "MetricsPipeline",
]
