"""
Aggregate API endpoints (state and zone summaries).
"""
from fastapi import APIRouter, Depends, Query
from typing import List, Literal

from aadhaar_insight.config import settings
from aadhaar_insight.schemas.bundle import AnalyticsBundle
from aadhaar_insight.schemas.metrics import AggregateBucket, ComplianceBucket, ZoneDistribution
from aadhaar_insight.services.aggregator import compliance_by_state, state_totals, zone_distribution
from aadhaar_insight.services.bundle_loader import get_bundle

router = APIRouter()


@router.get("/compliance", response_model=List[ComplianceBucket])
def get_compliance(
    limit: int = Query(settings.COMPLIANCE_TOP_N, ge=1, le=100),
    bundle: AnalyticsBundle = Depends(get_bundle)
):
    """
    Biometric compliance by state, largest required volume first.

    - **limit**: Number of states to return
    """
    return compliance_by_state(bundle.bio_compliance, limit=limit)


@router.get("/states", response_model=List[AggregateBucket])
def get_state_totals(
    field: Literal["enrolment_volume", "bio_update_volume"] = Query("enrolment_volume"),
    bundle: AnalyticsBundle = Depends(get_bundle)
):
    """
    Per-state totals of one compliance volume, largest first.

    - **field**: enrolment_volume or bio_update_volume
    """
    return state_totals(bundle.bio_compliance, field)


@router.get("/zones", response_model=ZoneDistribution)
def get_zone_distribution(bundle: AnalyticsBundle = Depends(get_bundle)):
    """District counts per strategic zone."""
    return zone_distribution(bundle.strategic_matrix)
