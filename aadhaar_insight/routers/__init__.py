"""
Routers package initialization.
"""
from aadhaar_insight.routers import aggregates
from aadhaar_insight.routers import risks
from aadhaar_insight.routers import index
from aadhaar_insight.routers import simulator
from aadhaar_insight.routers import dashboard

__all__ = [
    "aggregates",
    "risks",
    "index",
    "simulator",
    "dashboard",
]
