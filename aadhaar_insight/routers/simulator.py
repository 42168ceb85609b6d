"""
Policy simulator API endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from aadhaar_insight.schemas.bundle import AnalyticsBundle
from aadhaar_insight.schemas.metrics import (
    AgePopulationPools,
    SimulationParameters,
    SimulationResponse,
    SweepResponse,
)
from aadhaar_insight.services.aggregator import age_population_pools
from aadhaar_insight.services.bundle_loader import get_bundle
from aadhaar_insight.services.pipeline import get_engine
from aadhaar_insight.services.policy_simulator import PolicySimulationEngine

router = APIRouter()


def simulation_parameters(
    min_age: int = Query(18, ge=0, le=80, description="Mandatory update age threshold"),
    grace_months: int = Query(6, ge=1, le=24, description="Rollout timeline in months"),
    surge_capacity: float = Query(1.0, description="1.0 standard, 1.5 surge")
) -> SimulationParameters:
    """Build validated simulation parameters from query params."""
    try:
        return SimulationParameters(
            min_age=min_age,
            grace_months=grace_months,
            surge_capacity=surge_capacity
        )
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        raise HTTPException(status_code=422, detail=messages)


@router.get("/pools", response_model=AgePopulationPools)
def get_population_pools(bundle: AnalyticsBundle = Depends(get_bundle)):
    """Enrolment totals per age bucket (0-5, 5-18, 18+)."""
    return age_population_pools(bundle.raw_data)


@router.get("/run", response_model=SimulationResponse)
def run_simulation(
    params: SimulationParameters = Depends(simulation_parameters),
    bundle: AnalyticsBundle = Depends(get_bundle),
    engine: PolicySimulationEngine = Depends(get_engine)
):
    """
    Run a what-if scenario for a mandatory update policy.

    - **min_age**: Everyone at or above this age must update
    - **grace_months**: Months allowed for compliance
    - **surge_capacity**: Operator capacity multiplier (1.0 or 1.5)
    """
    pools = age_population_pools(bundle.raw_data)
    result = engine.simulate(pools, params)
    return SimulationResponse(
        parameters=params,
        pools=pools,
        result=result,
        display=engine.describe(result)
    )


@router.get("/sweep", response_model=SweepResponse)
def sweep_min_age(
    grace_months: int = Query(6, ge=1, le=24),
    surge_capacity: float = Query(1.0),
    bundle: AnalyticsBundle = Depends(get_bundle),
    engine: PolicySimulationEngine = Depends(get_engine)
):
    """
    Simulate every age threshold from 0 to 80 in steps of 5.

    - **grace_months**: Months allowed for compliance
    - **surge_capacity**: Operator capacity multiplier (1.0 or 1.5)
    """
    if surge_capacity not in (1.0, 1.5):
        raise HTTPException(status_code=422, detail="surge_capacity must be 1.0 or 1.5")

    pools = age_population_pools(bundle.raw_data)
    return SweepResponse(
        grace_months=grace_months,
        surge_capacity=surge_capacity,
        points=engine.sweep_min_age(pools, grace_months, surge_capacity)
    )
