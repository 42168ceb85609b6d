"""
Schemas package initialization.
"""
from aadhaar_insight.schemas.common import (
    HealthResponse,
    BundleStatusResponse,
    CacheStatsResponse,
)
from aadhaar_insight.schemas.bundle import (
    AnalyticsBundle,
    DistrictRecord,
    ALIRecord,
    ALIComponents,
    AnomalyRecord,
    BioComplianceRow,
    RawDataRow,
    EnrolmentBuckets,
)
from aadhaar_insight.schemas.metrics import (
    AggregateBucket,
    ComplianceBucket,
    ZoneDistribution,
    AgePopulationPools,
    RiskEntry,
    ActionItem,
    MatrixPoint,
    ALITierEntry,
    ALIIndexResponse,
    AnomalyView,
    AnomalyStats,
    AnomalyFeedResponse,
    SimulationParameters,
    SimulationResult,
    SimulationResponse,
    SweepPoint,
    SweepResponse,
    DashboardMetrics,
)

__all__ = [
    # Common
    "HealthResponse",
    "BundleStatusResponse",
    "CacheStatsResponse",
    # Bundle
    "AnalyticsBundle",
    "DistrictRecord",
    "ALIRecord",
    "ALIComponents",
    "AnomalyRecord",
    "BioComplianceRow",
    "RawDataRow",
    "EnrolmentBuckets",
    # Aggregates
    "AggregateBucket",
    "ComplianceBucket",
    "ZoneDistribution",
    "AgePopulationPools",
    # Risks
    "RiskEntry",
    "ActionItem",
    "MatrixPoint",
    # Index & anomalies
    "ALITierEntry",
    "ALIIndexResponse",
    "AnomalyView",
    "AnomalyStats",
    "AnomalyFeedResponse",
    # Simulation
    "SimulationParameters",
    "SimulationResult",
    "SimulationResponse",
    "SweepPoint",
    "SweepResponse",
    # Dashboard
    "DashboardMetrics",
]
