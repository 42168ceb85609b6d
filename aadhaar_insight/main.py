"""
FastAPI application entry point.

Aadhaar Insight Metrics - derived metrics for the Aadhaar analytics
dashboard, computed from the pre-built analytics bundle.
"""
import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aadhaar_insight.config import settings, configure_logging
from aadhaar_insight.routers import aggregates, dashboard, index, risks, simulator
from aadhaar_insight.schemas.common import HealthResponse
from aadhaar_insight.services.bundle_loader import BundleUnavailable, get_bundle

logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    **Aadhaar Insight Metrics API**

    Serves the derived metrics behind the Aadhaar insight dashboard.
    The analytics bundle (strategic matrix, ALI index, anomalies,
    biometric compliance, raw age-bucket enrolment) is produced upstream;
    this service only aggregates, classifies, ranks and simulates.

    ## Key Features

    * **Aggregates**: State compliance and zone distribution
    * **Risk Watchlist**: Deduplicated top-N at-risk districts
    * **ALI Index**: Inequality tiers (Structurally Excluded / At-Risk / Stable)
    * **Anomalies**: Severity and deviation from baseline
    * **Policy Simulator**: What-if load and cost of mandatory update policies
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Load the analytics bundle on startup."""
    configure_logging()
    try:
        bundle = get_bundle()
        logger.info(f"Analytics bundle ready: {bundle.record_counts}")
    except BundleUnavailable as e:
        logger.warning(f"Analytics bundle unavailable at startup: {e}")


# Include routers with prefixes
app.include_router(
    aggregates.router,
    prefix=f"{settings.API_PREFIX}/aggregates",
    tags=["Aggregates"]
)
app.include_router(
    risks.router,
    prefix=f"{settings.API_PREFIX}/risks",
    tags=["Risk Watchlist"]
)
app.include_router(
    index.router,
    prefix=f"{settings.API_PREFIX}/index",
    tags=["ALI Index & Anomalies"]
)
app.include_router(
    simulator.router,
    prefix=f"{settings.API_PREFIX}/simulator",
    tags=["Policy Simulator"]
)
app.include_router(
    dashboard.router,
    prefix=settings.API_PREFIX,
    tags=["Dashboard"]
)


# Root endpoint
@app.get("/", tags=["Root"])
def root():
    """API root endpoint with basic information."""
    return {
        "message": "Aadhaar Insight Metrics API",
        "version": settings.VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "endpoints": {
            "aggregates": f"{settings.API_PREFIX}/aggregates",
            "risks": f"{settings.API_PREFIX}/risks",
            "index": f"{settings.API_PREFIX}/index",
            "simulator": f"{settings.API_PREFIX}/simulator",
            "dashboard": f"{settings.API_PREFIX}/dashboard"
        }
    }


# Health check
@app.get(f"{settings.API_PREFIX}/health", tags=["Health"], response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    try:
        bundle = get_bundle()
        bundle_status = "healthy"
        counts = bundle.record_counts
    except BundleUnavailable as e:
        bundle_status = f"unavailable: {e}"
        counts = {}

    return HealthResponse(
        status="healthy" if bundle_status == "healthy" else "degraded",
        version=settings.VERSION,
        bundle=bundle_status,
        record_counts=counts
    )


# Exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "status_code": exc.status_code
        }
    )


@app.exception_handler(BundleUnavailable)
async def bundle_unavailable_handler(request, exc):
    return JSONResponse(
        status_code=503,
        content={
            "error": "Analytics bundle unavailable",
            "detail": str(exc),
            "status_code": 503
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    logger.exception("Unhandled error")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "status_code": 500
        }
    )
