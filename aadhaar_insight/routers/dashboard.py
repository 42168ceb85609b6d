"""
Dashboard API endpoints (full pipeline run and bundle management).
"""
from fastapi import APIRouter, Depends

from aadhaar_insight.schemas.bundle import AnalyticsBundle
from aadhaar_insight.schemas.common import BundleStatusResponse, CacheStatsResponse
from aadhaar_insight.schemas.metrics import DashboardMetrics, SimulationParameters
from aadhaar_insight.services.bundle_loader import BundleUnavailable, get_bundle, repository
from aadhaar_insight.services.pipeline import MetricsPipeline, bundle_hash, get_pipeline
from aadhaar_insight.routers.simulator import simulation_parameters

router = APIRouter()


@router.get("/dashboard", response_model=DashboardMetrics)
def get_dashboard(
    params: SimulationParameters = Depends(simulation_parameters),
    bundle: AnalyticsBundle = Depends(get_bundle),
    pipeline: MetricsPipeline = Depends(get_pipeline)
):
    """
    Every derived metric the views display, in one response.

    Results are cached per (bundle content, simulation parameters).
    """
    return pipeline.run(bundle, params)


@router.get("/dashboard/cache", response_model=CacheStatsResponse)
def get_cache_stats(pipeline: MetricsPipeline = Depends(get_pipeline)):
    """Metrics cache hit/miss counters."""
    return pipeline.stats()


@router.post("/bundle/reload", response_model=BundleStatusResponse)
def reload_bundle():
    """
    Re-read the analytics bundle from disk.

    Cached metrics for the previous content stay valid; new content gets
    a new cache key.
    """
    try:
        bundle = repository.reload()
    except (OSError, ValueError, TypeError) as e:
        raise BundleUnavailable(str(e)) from e

    status = repository.status()
    return BundleStatusResponse(
        path=status["path"],
        loaded=status["loaded"],
        record_counts=status["record_counts"],
        content_hash=bundle_hash(bundle)
    )
