"""Shared pytest fixtures for the Aadhaar Insight Metrics test suite.

The sample bundle is small but exercises every rule: repeated district
snapshots, an unknown zone label, a zero baseline anomaly, a state with
nothing required, and null components.
"""

import copy

import pytest
from fastapi.testclient import TestClient

from aadhaar_insight.main import app
from aadhaar_insight.routers import dashboard as dashboard_router
from aadhaar_insight.schemas import AgePopulationPools, AnalyticsBundle
from aadhaar_insight.services import bundle_loader
from aadhaar_insight.services.bundle_loader import BundleRepository
from aadhaar_insight.services.pipeline import MetricsPipeline, get_pipeline
from aadhaar_insight.services.policy_simulator import PolicySimulationEngine


RAW_BUNDLE = {
    "strategic_matrix": [
        {"state": "Maharashtra", "district": "Pune", "x_demo_ratio": 12.0,
         "y_bio_ratio": 25.0, "z_enrolment": 5000, "zone": "Healthy"},
        {"state": "Haryana", "district": "Nuh", "x_demo_ratio": 40.0,
         "y_bio_ratio": 4.0, "z_enrolment": 1200, "zone": "Fraud Risk"},
        {"state": "Rajasthan", "district": "Barmer", "x_demo_ratio": 5.0,
         "y_bio_ratio": 8.0, "z_enrolment": 3000, "zone": "Camp Target"},
        {"state": "Haryana", "district": "Nuh", "x_demo_ratio": 35.0,
         "y_bio_ratio": 6.0, "z_enrolment": 1100, "zone": "Fraud Risk"},
        {"state": "Rajasthan", "district": "Jaipur", "x_demo_ratio": 15.0,
         "y_bio_ratio": 30.0, "z_enrolment": 7000, "zone": "Growth Stable"},
        {"state": "Bihar", "district": "Kishanganj", "x_demo_ratio": 9.0,
         "y_bio_ratio": 9.5, "z_enrolment": 2500, "zone": "Watchlist"},
        {"state": "Uttar Pradesh", "district": "Lucknow", "x_demo_ratio": 20.0,
         "y_bio_ratio": 15.0, "z_enrolment": 6000, "zone": "Camp Target"},
    ],
    "ali_index": [
        {"district": "Nuh", "state": "Haryana", "ali_score": 85.2,
         "components": {"access_gap": 40.1, "digital_gap": 45.1}},
        {"district": "Barmer", "state": "Rajasthan", "ali_score": 80.0,
         "components": {"access_gap": 42.0, "digital_gap": 38.0}},
        {"district": "Pune", "state": "Maharashtra", "ali_score": 61.0,
         "components": {"access_gap": 30.0, "digital_gap": 31.0}},
        {"district": "Jaipur", "state": "Rajasthan", "ali_score": 60.0,
         "components": {"access_gap": 25.0, "digital_gap": 35.0}},
        {"district": "Lucknow", "state": "Uttar Pradesh", "ali_score": 45.0,
         "components": None},
    ],
    "anomalies": [
        {"month": "2025-03", "state": "Haryana", "type": "Critical Spike",
         "value": 1500, "expected": 1000},
        {"month": "2025-04", "state": "Bihar", "type": "High Deviation",
         "value": 80, "expected": 100},
        {"month": "2025-05", "state": "Haryana", "type": "Enrolment Spike",
         "value": 120, "expected": 0},
        {"month": "2025-05", "state": "Rajasthan", "type": "Drop",
         "value": 50, "expected": 40},
    ],
    "bio_compliance": [
        {"state": "Maharashtra", "enrolment_volume": 1000, "bio_update_volume": 800},
        {"state": "Maharashtra", "enrolment_volume": 500, "bio_update_volume": 100},
        {"state": "Bihar", "enrolment_volume": 2000, "bio_update_volume": 500},
        {"state": "Haryana", "enrolment_volume": 300, "bio_update_volume": 0},
        {"state": "Goa", "enrolment_volume": 0, "bio_update_volume": 0},
        {"state": "Uttar Pradesh", "enrolment_volume": 900, "bio_update_volume": 450},
        {"state": "Rajasthan", "enrolment_volume": 1200, "bio_update_volume": 1200},
    ],
    "raw_data": [
        {"state": "Maharashtra", "district": "Pune",
         "enrolment": {"age_0_5": 40, "age_5_17": 100, "age_18_plus": 500}},
        {"state": "Bihar", "district": "Kishanganj",
         "enrolment": {"age_0_5": 60, "age_5_17": 200, "age_18_plus": 400}},
        {"state": "Goa", "district": "North Goa", "enrolment": None},
    ],
}


# =============================================================================
# Bundle Fixtures
# =============================================================================

@pytest.fixture
def raw_bundle():
    """Decoded bundle document; a deep copy, safe to mutate."""
    return copy.deepcopy(RAW_BUNDLE)


@pytest.fixture
def bundle(raw_bundle):
    return AnalyticsBundle.model_validate(raw_bundle)


@pytest.fixture
def empty_bundle():
    return AnalyticsBundle()


@pytest.fixture
def pools():
    """Pools of 100 / 300 / 900 (child / youth / adult)."""
    return AgePopulationPools(child_pool=100, youth_pool=300, adult_pool=900)


@pytest.fixture
def engine():
    return PolicySimulationEngine()


# =============================================================================
# API Fixtures
# =============================================================================

@pytest.fixture
def make_client(monkeypatch):
    """Factory fixture: a TestClient serving the given bundle.

    Examples
    --------
    >>> def test_empty(make_client, empty_bundle):
    ...     client = make_client(empty_bundle)
    ...     assert client.get("/api/risks").json() == []
    """
    def _make(served_bundle=None, repository=None):
        repo = repository or BundleRepository()
        if served_bundle is not None:
            repo.set_bundle(served_bundle)
        monkeypatch.setattr(bundle_loader, "repository", repo)
        monkeypatch.setattr(dashboard_router, "repository", repo)

        fresh_pipeline = MetricsPipeline()
        app.dependency_overrides[get_pipeline] = lambda: fresh_pipeline
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, bundle):
    return make_client(bundle)
