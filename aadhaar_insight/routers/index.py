"""
ALI index and anomaly feed API endpoints.
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from aadhaar_insight.schemas.bundle import AnalyticsBundle
from aadhaar_insight.schemas.metrics import ALIIndexResponse, AnomalyFeedResponse, AnomalyStats
from aadhaar_insight.services.bundle_loader import get_bundle
from aadhaar_insight.services.index_interpreter import (
    anomalies_or_fallback,
    anomaly_stats,
    interpret_anomalies,
    rank_ali,
)

router = APIRouter()


@router.get("/ali", response_model=ALIIndexResponse)
def get_ali_index(
    limit: Optional[int] = Query(None, ge=1),
    bundle: AnalyticsBundle = Depends(get_bundle)
):
    """
    ALI index ranked by score with derived tiers.

    Tiers: Structurally Excluded (> 80), At-Risk (> 60), Stable.

    - **limit**: Number of districts to return (tier counts cover all)
    """
    return rank_ali(bundle.ali_index, limit=limit)


@router.get("/anomalies", response_model=AnomalyFeedResponse)
def get_anomalies(
    severity: Optional[str] = Query(None, pattern="^(CRITICAL|REVIEW)$"),
    bundle: AnalyticsBundle = Depends(get_bundle)
):
    """
    Anomaly feed with severity and deviation from baseline.

    Deviation is null (display "N/A") when the baseline is zero. If the
    detector reported nothing, the feed is synthesized from Fraud Risk
    and Camp Target districts.

    - **severity**: Keep only CRITICAL or REVIEW entries
    """
    records, synthesized = anomalies_or_fallback(bundle)
    views = interpret_anomalies(records)
    if severity:
        views = [v for v in views if v.severity == severity]

    return AnomalyFeedResponse(
        anomalies=views,
        stats=anomaly_stats(records),
        synthesized=synthesized
    )


@router.get("/anomalies/stats", response_model=AnomalyStats)
def get_anomaly_stats(bundle: AnalyticsBundle = Depends(get_bundle)):
    """Critical, high-priority, states-affected and total counts."""
    records, _ = anomalies_or_fallback(bundle)
    return anomaly_stats(records)
