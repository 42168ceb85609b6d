"""
Derived-metrics Pydantic schemas.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Literal, Optional


class MetricsModel(BaseModel):
    """Base for immutable derived values."""

    class Config:
        frozen = True


# ==================== AGGREGATES ====================

class AggregateBucket(MetricsModel):
    """Summed numeric fields for one grouping key."""
    key: Any
    values: Dict[str, float]
    count: int = 0  # number of source records in the group


class ComplianceBucket(MetricsModel):
    """Biometric compliance for one state."""
    state: str
    required: int  # summed enrolment volume
    actual: int  # summed biometric update volume
    compliance_pct: Optional[float]  # None when nothing was required


class ZoneDistribution(MetricsModel):
    """District counts per zone label."""
    counts: Dict[str, int]
    fraud_risk: int
    camp_target: int
    healthy: int
    total: int


class AgePopulationPools(MetricsModel):
    """Enrolment totals per age bucket, aggregated over all raw rows."""
    child_pool: float = Field(0, ge=0, description="Age 0-5")
    youth_pool: float = Field(0, ge=0, description="Age 5-18")
    adult_pool: float = Field(0, ge=0, description="Age 18+")

    @property
    def total(self) -> float:
        return self.child_pool + self.youth_pool + self.adult_pool


# ==================== RISKS ====================

class RiskEntry(MetricsModel):
    """A district on the risk watchlist."""
    district: str
    state: str
    type: Literal["Biometric Anomaly", "Inclusion Deficit"]
    value: float  # bio ratio as a fraction
    volume: int
    severity: Literal["CRITICAL", "HIGH"]


class ActionItem(MetricsModel):
    """Recommended intervention for a district outside the settled zones."""
    district: str
    state: str
    zone: str
    label: str
    action: str
    bio_ratio: float
    enrolment_volume: int


class MatrixPoint(MetricsModel):
    """Scatter point of the strategic operations matrix."""
    x: float  # demographic intensity
    y: float  # biometric intensity
    z: int  # enrolment volume
    name: str
    zone: str


# ==================== ALI INDEX & ANOMALIES ====================

class ALITierEntry(MetricsModel):
    """ALI record with its derived tier."""
    rank: int
    district: str
    state: str
    ali_score: float
    status: Literal["Structurally Excluded", "At-Risk", "Stable"]
    color: str
    access_gap: float
    digital_gap: float


class ALIIndexResponse(MetricsModel):
    entries: List[ALITierEntry]
    tier_counts: Dict[str, int]
    total_count: int


class AnomalyView(MetricsModel):
    """Anomaly with derived severity and deviation."""
    month: str
    state: str
    type: str
    value: float
    expected: float
    severity: Literal["CRITICAL", "REVIEW"]
    deviation_pct: Optional[float]  # None when the baseline is zero
    deviation_display: str


class AnomalyStats(MetricsModel):
    critical_count: int
    high_priority_count: int
    states_affected: int
    total_flagged: int


class AnomalyFeedResponse(MetricsModel):
    anomalies: List[AnomalyView]
    stats: AnomalyStats
    synthesized: bool  # True when derived from the strategic matrix


# ==================== POLICY SIMULATION ====================

class SimulationParameters(MetricsModel):
    """User-adjustable what-if assumptions."""
    min_age: int = Field(18, ge=0, le=80, description="Mandatory update age threshold")
    grace_months: int = Field(6, ge=1, le=24, description="Rollout timeline in months")
    surge_capacity: float = Field(1.0, description="1.0 = standard staffing, 1.5 = +50% surge")

    @field_validator("surge_capacity")
    @classmethod
    def check_surge(cls, v):
        if v not in (1.0, 1.5):
            raise ValueError("surge_capacity must be 1.0 or 1.5")
        return float(v)


class SimulationResult(MetricsModel):
    """Projection for one parameter set. Always recomputed, never stored."""
    target_volume: float
    daily_load: float
    load_percentage: float
    cost_in_crores: float
    is_critical: bool
    system_capacity_daily: float
    population_coverage_pct: float  # share of national population, capped at 100
    load_bar_pct: float  # load percentage capped at 100


class SimulationResponse(MetricsModel):
    parameters: SimulationParameters
    pools: AgePopulationPools
    result: SimulationResult
    display: Dict[str, str]


class SweepPoint(MetricsModel):
    min_age: int
    result: SimulationResult


class SweepResponse(MetricsModel):
    grace_months: int
    surge_capacity: float
    points: List[SweepPoint]


# ==================== DASHBOARD ====================

class DashboardMetrics(MetricsModel):
    """Everything the views display, computed in one pipeline run."""
    compliance: List[ComplianceBucket]
    zones: ZoneDistribution
    risks: List[RiskEntry]
    actions: List[ActionItem]
    ali: ALIIndexResponse
    anomalies: AnomalyFeedResponse
    pools: AgePopulationPools
    parameters: SimulationParameters
    simulation: SimulationResult
