"""
Zone Classifier & Risk Ranker.

Turns strategic matrix rows into the district watchlist, the intervention
queue and the matrix scatter points.

Risk rule:
a district is at risk if ANY of these holds
- zone == "Fraud Risk"
- zone == "Camp Target"
- bio_ratio < 10 (percent)
Zone labels outside the known set only qualify through the bio ratio.
"""
from typing import List, Optional, Sequence

from aadhaar_insight.schemas.bundle import DistrictRecord
from aadhaar_insight.schemas.metrics import ActionItem, MatrixPoint, RiskEntry
from aadhaar_insight.utils.constants import (
    ACTION_AUDIT,
    ACTION_LABEL_ANOMALY,
    ACTION_LABEL_COVERAGE_GAP,
    ACTION_MOBILE_UNIT,
    LOW_BIO_RATIO_THRESHOLD,
    RISK_TYPE_BIOMETRIC_ANOMALY,
    RISK_TYPE_INCLUSION_DEFICIT,
    RISK_ZONES,
    SETTLED_ZONES,
    SEVERITY_CRITICAL,
    SEVERITY_HIGH,
    ZONE_FRAUD_RISK,
)


def is_at_risk(record: DistrictRecord) -> bool:
    """Return True if the district qualifies for the risk watchlist."""
    return record.zone in RISK_ZONES or record.bio_ratio < LOW_BIO_RATIO_THRESHOLD


def to_risk_entry(record: DistrictRecord) -> RiskEntry:
    """Label a qualifying record. Fraud Risk is critical, everything else high."""
    fraud = record.zone == ZONE_FRAUD_RISK
    return RiskEntry(
        district=record.district,
        state=record.state,
        type=RISK_TYPE_BIOMETRIC_ANOMALY if fraud else RISK_TYPE_INCLUSION_DEFICIT,
        value=record.bio_ratio / 100,
        volume=record.enrolment_volume,
        severity=SEVERITY_CRITICAL if fraud else SEVERITY_HIGH
    )


def derive_risks(records: Sequence[DistrictRecord], limit: Optional[int] = 10) -> List[RiskEntry]:
    """
    Rank at-risk districts, lowest biometric intensity first.

    Filter, sort ascending by bio ratio (stable), dedup by district
    keeping the first occurrence, then truncate. Each district therefore
    keeps its lowest-ratio snapshot.

    Args:
        records: Strategic matrix rows (may hold several snapshots per district)
        limit: Maximum entries to return (None keeps all)

    Returns:
        Risk entries, non-decreasing in value, one per district. Empty
        when nothing qualifies.
    """
    entries = sorted(
        (to_risk_entry(r) for r in records if is_at_risk(r)),
        key=lambda e: e.value
    )

    seen = set()
    ranked = []
    for entry in entries:
        if limit is not None and len(ranked) >= limit:
            break
        if entry.district in seen:
            continue
        seen.add(entry.district)
        ranked.append(entry)
    return ranked


def derive_action_queue(records: Sequence[DistrictRecord], limit: Optional[int] = 10) -> List[ActionItem]:
    """
    Districts needing intervention, in matrix order.

    Everything outside Healthy and Growth Stable is listed. Fraud Risk
    districts get an audit, the rest a mobile enrolment unit.
    """
    queue = []
    for record in records:
        if limit is not None and len(queue) >= limit:
            break
        if record.zone in SETTLED_ZONES:
            continue
        fraud = record.zone == ZONE_FRAUD_RISK
        queue.append(ActionItem(
            district=record.district,
            state=record.state,
            zone=record.zone,
            label=ACTION_LABEL_ANOMALY if fraud else ACTION_LABEL_COVERAGE_GAP,
            action=ACTION_AUDIT if fraud else ACTION_MOBILE_UNIT,
            bio_ratio=record.bio_ratio,
            enrolment_volume=record.enrolment_volume
        ))
    return queue


def matrix_points(records: Sequence[DistrictRecord], zone: str = "All") -> List[MatrixPoint]:
    """Scatter points (demo ratio vs bio ratio, sized by volume), optionally one zone only."""
    return [
        MatrixPoint(
            x=r.demo_ratio,
            y=r.bio_ratio,
            z=r.enrolment_volume,
            name=r.district,
            zone=r.zone
        )
        for r in records
        if zone == "All" or r.zone == zone
    ]
