"""
Common Pydantic schemas shared across endpoints.
"""
from pydantic import BaseModel
from typing import Dict, Optional


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    bundle: str
    record_counts: Dict[str, int]


class BundleStatusResponse(BaseModel):
    """Response for the bundle reload endpoint."""
    path: str
    loaded: bool
    record_counts: Dict[str, int]
    content_hash: Optional[str]


class CacheStatsResponse(BaseModel):
    hits: int
    misses: int
    size: int
    max_entries: int
