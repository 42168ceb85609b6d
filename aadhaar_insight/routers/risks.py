"""
Risk watchlist API endpoints.
"""
from fastapi import APIRouter, Depends, Query
from typing import List

from aadhaar_insight.config import settings
from aadhaar_insight.schemas.bundle import AnalyticsBundle
from aadhaar_insight.schemas.metrics import ActionItem, MatrixPoint, RiskEntry
from aadhaar_insight.services.bundle_loader import get_bundle
from aadhaar_insight.services.risk_ranker import derive_action_queue, derive_risks, matrix_points

router = APIRouter()


@router.get("", response_model=List[RiskEntry])
def get_risks(
    limit: int = Query(settings.RISK_TOP_N, ge=1, le=100),
    bundle: AnalyticsBundle = Depends(get_bundle)
):
    """
    At-risk districts, lowest biometric update intensity first.

    A district qualifies if its zone is Fraud Risk or Camp Target, or its
    bio ratio is below 10%. One entry per district.

    - **limit**: Maximum number of districts
    """
    return derive_risks(bundle.strategic_matrix, limit=limit)


@router.get("/actions", response_model=List[ActionItem])
def get_action_queue(
    limit: int = Query(settings.ACTION_QUEUE_SIZE, ge=1, le=100),
    bundle: AnalyticsBundle = Depends(get_bundle)
):
    """
    Recommended interventions for districts outside Healthy/Growth Stable.

    - **limit**: Maximum number of districts
    """
    return derive_action_queue(bundle.strategic_matrix, limit=limit)


@router.get("/matrix", response_model=List[MatrixPoint])
def get_matrix(
    zone: str = Query("All", description="Zone label to keep, or All"),
    bundle: AnalyticsBundle = Depends(get_bundle)
):
    """
    Strategic operations matrix: demographic vs biometric intensity per district.

    - **zone**: Filter to one zone label
    """
    return matrix_points(bundle.strategic_matrix, zone=zone)
