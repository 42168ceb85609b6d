"""
Index & Anomaly Interpreter.

Reads the externally scored ALI index and the anomaly feed. Nothing here
computes a score; it buckets, labels and measures deviation against the
baseline the detector reported.
"""
import math
from typing import Dict, List, Optional, Sequence, Tuple

from aadhaar_insight.schemas.bundle import ALIRecord, AnalyticsBundle, AnomalyRecord
from aadhaar_insight.schemas.metrics import (
    ALIIndexResponse,
    ALITierEntry,
    AnomalyStats,
    AnomalyView,
)
from aadhaar_insight.utils.constants import (
    ALI_AT_RISK_THRESHOLD,
    ALI_COLORS,
    ALI_EXCLUDED_THRESHOLD,
    ALI_STATUS_AT_RISK,
    ALI_STATUS_EXCLUDED,
    ALI_STATUS_STABLE,
    ALI_STATUSES,
    CRITICAL_ANOMALY_MARKERS,
    FALLBACK_CRITICAL_TYPE,
    FALLBACK_HIGH_TYPE,
    HIGH_PRIORITY_ANOMALY_MARKER,
    RISK_ZONES,
    SEVERITY_CRITICAL,
    SEVERITY_REVIEW,
    ZONE_FRAUD_RISK,
)
from aadhaar_insight.utils.formatters import format_deviation


class DeviationUndefined(ZeroDivisionError):
    """Deviation requested against a zero (or non-finite) baseline."""

    def __init__(self, value: float, expected: float):
        self.value = value
        self.expected = expected
        super().__init__(f"deviation undefined for value={value} expected={expected}")


# ==================== ALI INDEX ====================

def ali_status(score: float) -> str:
    """
    Tier an ALI score. Both breakpoints are strict:
    80 -> At-Risk, 80.01 -> Structurally Excluded, 60 -> Stable.
    """
    if score > ALI_EXCLUDED_THRESHOLD:
        return ALI_STATUS_EXCLUDED
    if score > ALI_AT_RISK_THRESHOLD:
        return ALI_STATUS_AT_RISK
    return ALI_STATUS_STABLE


def ali_color(score: float) -> str:
    return ALI_COLORS[ali_status(score)]


def ali_tier_counts(records: Sequence[ALIRecord]) -> Dict[str, int]:
    counts = {status: 0 for status in ALI_STATUSES}
    for record in records:
        counts[ali_status(record.ali_score)] += 1
    return counts


def rank_ali(records: Sequence[ALIRecord], limit: Optional[int] = None) -> ALIIndexResponse:
    """
    Rank districts by ALI score, most excluded first.

    Args:
        records: ALI index rows
        limit: Number of entries to keep (None keeps all). Tier counts
            always cover the full index.
    """
    ordered = sorted(records, key=lambda r: r.ali_score, reverse=True)
    if limit is not None:
        ordered = ordered[:limit]

    entries = [
        ALITierEntry(
            rank=i + 1,
            district=r.district,
            state=r.state,
            ali_score=r.ali_score,
            status=ali_status(r.ali_score),
            color=ali_color(r.ali_score),
            access_gap=r.components.access_gap,
            digital_gap=r.components.digital_gap
        )
        for i, r in enumerate(ordered)
    ]
    return ALIIndexResponse(
        entries=entries,
        tier_counts=ali_tier_counts(records),
        total_count=len(records)
    )


# ==================== ANOMALIES ====================

def classify_anomaly_type(type_text: str) -> str:
    """
    Severity of an anomaly from its free-text type.

    The upstream detector encodes severity only in the type string, so
    this is a substring contract: "Critical" or "Spike" anywhere in the
    text (case-sensitive) means CRITICAL, anything else needs REVIEW.
    """
    if any(marker in type_text for marker in CRITICAL_ANOMALY_MARKERS):
        return SEVERITY_CRITICAL
    return SEVERITY_REVIEW


def deviation_pct(value: float, expected: float) -> float:
    """
    Percentage deviation of value from its expected baseline.

    Raises:
        DeviationUndefined: if expected is zero or the result is not finite
    """
    if expected == 0:
        raise DeviationUndefined(value, expected)
    result = (value - expected) / expected * 100
    if not math.isfinite(result):
        raise DeviationUndefined(value, expected)
    return result


def try_deviation_pct(value: float, expected: float) -> Optional[float]:
    """deviation_pct, or None when undefined."""
    try:
        return deviation_pct(value, expected)
    except DeviationUndefined:
        return None


def interpret_anomaly(record: AnomalyRecord) -> AnomalyView:
    deviation = try_deviation_pct(record.value, record.expected)
    return AnomalyView(
        month=record.month,
        state=record.state,
        type=record.type,
        value=record.value,
        expected=record.expected,
        severity=classify_anomaly_type(record.type),
        deviation_pct=round(deviation, 1) if deviation is not None else None,
        deviation_display=format_deviation(deviation)
    )


def interpret_anomalies(records: Sequence[AnomalyRecord]) -> List[AnomalyView]:
    return [interpret_anomaly(r) for r in records]


def anomaly_stats(records: Sequence[AnomalyRecord]) -> AnomalyStats:
    """Counters shown beside the anomaly feed."""
    return AnomalyStats(
        critical_count=sum(1 for r in records if classify_anomaly_type(r.type) == SEVERITY_CRITICAL),
        high_priority_count=sum(1 for r in records if HIGH_PRIORITY_ANOMALY_MARKER in r.type),
        states_affected=len({r.state for r in records}),
        total_flagged=len(records)
    )


def anomalies_or_fallback(bundle: AnalyticsBundle) -> Tuple[List[AnomalyRecord], bool]:
    """
    The anomaly feed, or one synthesized from the strategic matrix.

    When the detector reported nothing, Fraud Risk and Camp Target
    districts stand in as "Critical Anomaly" / "High Priority Gap" entries.
    They carry no baseline, so their deviation is undefined.

    Returns:
        (records, synthesized)
    """
    if bundle.anomalies:
        return list(bundle.anomalies), False

    synthesized = [
        AnomalyRecord(
            state=d.state,
            type=FALLBACK_CRITICAL_TYPE if d.zone == ZONE_FRAUD_RISK else FALLBACK_HIGH_TYPE
        )
        for d in bundle.strategic_matrix
        if d.zone in RISK_ZONES
    ]
    return synthesized, bool(synthesized)
