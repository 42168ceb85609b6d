"""Endpoint tests through FastAPI's TestClient."""

import json

from aadhaar_insight.schemas import AnalyticsBundle
from aadhaar_insight.services.bundle_loader import BundleRepository


class TestRootAndHealth:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["endpoints"]["risks"] == "/api/risks"

    def test_health(self, client):
        data = client.get("/api/health").json()

        assert data["status"] == "healthy"
        assert data["record_counts"]["strategic_matrix"] == 7

    def test_health_degraded_when_bundle_unreadable(self, make_client, tmp_path):
        path = tmp_path / "bundle.json"
        path.write_text("{broken", encoding="utf-8")
        client = make_client(repository=BundleRepository(path))

        data = client.get("/api/health").json()
        assert data["status"] == "degraded"
        assert data["record_counts"] == {}


class TestAggregateEndpoints:

    def test_compliance(self, client):
        data = client.get("/api/aggregates/compliance").json()

        assert len(data) == 5
        assert data[0]["state"] == "Bihar"
        assert data[0]["compliance_pct"] == 25.0

    def test_compliance_limit(self, client):
        data = client.get("/api/aggregates/compliance", params={"limit": 10}).json()
        assert data[-1]["state"] == "Goa"
        assert data[-1]["compliance_pct"] is None

    def test_state_totals(self, client):
        data = client.get("/api/aggregates/states", params={"field": "bio_update_volume"}).json()
        assert data[0]["key"] == "Rajasthan"
        assert data[0]["values"]["bio_update_volume"] == 1200

    def test_state_totals_unknown_field(self, client):
        response = client.get("/api/aggregates/states", params={"field": "volume"})
        assert response.status_code == 422

    def test_zones(self, client):
        data = client.get("/api/aggregates/zones").json()
        assert data["fraud_risk"] == 2
        assert data["total"] == 7


class TestRiskEndpoints:

    def test_risks(self, client):
        data = client.get("/api/risks").json()

        assert [r["district"] for r in data] == ["Nuh", "Barmer", "Kishanganj", "Lucknow"]
        assert data[0]["severity"] == "CRITICAL"

    def test_risks_limit(self, client):
        assert len(client.get("/api/risks", params={"limit": 2}).json()) == 2

    def test_actions(self, client):
        data = client.get("/api/risks/actions").json()
        assert len(data) == 5
        assert data[0]["action"] == "Init Audit Protocol"

    def test_matrix_filter(self, client):
        data = client.get("/api/risks/matrix", params={"zone": "Camp Target"}).json()
        assert [p["name"] for p in data] == ["Barmer", "Lucknow"]

    def test_non_finite_ratios_served_as_zero(self, make_client, tmp_path):
        path = tmp_path / "bundle.json"
        path.write_text(
            '{"strategic_matrix": ['
            '{"district": "a", "y_bio_ratio": 5, "zone": "Camp Target"},'
            '{"district": "b", "y_bio_ratio": NaN, "zone": "Fraud Risk"},'
            '{"district": "c", "y_bio_ratio": Infinity, "zone": "Camp Target"}]}',
            encoding="utf-8"
        )
        client = make_client(repository=BundleRepository(path))

        data = client.get("/api/risks").json()

        assert [r["value"] for r in data] == [0.0, 0.0, 0.05]
        assert [r["district"] for r in data] == ["b", "c", "a"]


class TestIndexEndpoints:

    def test_ali(self, client):
        data = client.get("/api/index/ali", params={"limit": 2}).json()

        assert [e["district"] for e in data["entries"]] == ["Nuh", "Barmer"]
        assert data["entries"][1]["status"] == "At-Risk"
        assert data["total_count"] == 5

    def test_anomalies(self, client):
        data = client.get("/api/index/anomalies").json()

        assert data["synthesized"] is False
        assert len(data["anomalies"]) == 4
        zero_baseline = data["anomalies"][2]
        assert zero_baseline["deviation_pct"] is None
        assert zero_baseline["deviation_display"] == "N/A"

    def test_anomalies_severity_filter(self, client):
        data = client.get("/api/index/anomalies", params={"severity": "CRITICAL"}).json()

        assert [a["type"] for a in data["anomalies"]] == ["Critical Spike", "Enrolment Spike"]
        assert data["stats"]["total_flagged"] == 4

    def test_anomalies_bad_severity(self, client):
        response = client.get("/api/index/anomalies", params={"severity": "LOW"})
        assert response.status_code == 422

    def test_anomaly_stats(self, client):
        data = client.get("/api/index/anomalies/stats").json()
        assert data == {
            "critical_count": 2,
            "high_priority_count": 1,
            "states_affected": 3,
            "total_flagged": 4,
        }


class TestSimulatorEndpoints:

    def test_pools(self, client):
        data = client.get("/api/simulator/pools").json()
        assert data == {"child_pool": 100, "youth_pool": 300, "adult_pool": 900}

    def test_run(self, client):
        data = client.get("/api/simulator/run", params={"min_age": 0}).json()

        assert data["result"]["target_volume"] == 1300
        assert data["parameters"]["min_age"] == 0
        assert data["display"]["status"] == "Within Capacity"

    def test_run_with_defaults(self, client):
        response = client.get("/api/simulator/run")

        assert response.status_code == 200
        data = response.json()
        assert data["parameters"] == {"min_age": 18, "grace_months": 6, "surge_capacity": 1.0}
        assert data["result"]["target_volume"] == 900

    def test_run_with_explicit_defaults(self, client):
        params = {"min_age": 18, "grace_months": 6, "surge_capacity": 1.0}
        response = client.get("/api/simulator/run", params=params)
        assert response.status_code == 200

    def test_run_accepts_off_grid_age(self, client):
        data = client.get("/api/simulator/run", params={"min_age": 49}).json()
        assert data["result"]["target_volume"] == 450

    def test_run_rejects_surge_with_message(self, client):
        response = client.get("/api/simulator/run", params={"surge_capacity": 1.2})

        assert response.status_code == 422
        assert "surge_capacity must be 1.0 or 1.5" in response.json()["error"]

    def test_run_rejects_out_of_range(self, client):
        assert client.get("/api/simulator/run", params={"min_age": 85}).status_code == 422
        assert client.get("/api/simulator/run", params={"grace_months": 0}).status_code == 422
        assert client.get("/api/simulator/run", params={"surge_capacity": 2}).status_code == 422

    def test_sweep(self, client):
        data = client.get("/api/simulator/sweep", params={"surge_capacity": 1.5}).json()

        assert len(data["points"]) == 17
        assert data["surge_capacity"] == 1.5
        assert data["points"][-1]["result"]["target_volume"] == 0

    def test_sweep_rejects_surge(self, client):
        assert client.get("/api/simulator/sweep", params={"surge_capacity": 3}).status_code == 422


class TestDashboardEndpoints:

    def test_dashboard_with_defaults(self, client):
        response = client.get("/api/dashboard")

        assert response.status_code == 200
        assert response.json()["parameters"]["min_age"] == 18

    def test_dashboard_is_cached(self, client):
        first = client.get("/api/dashboard").json()
        second = client.get("/api/dashboard").json()

        assert first == second
        stats = client.get("/api/dashboard/cache").json()
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_dashboard_parameters(self, client):
        data = client.get("/api/dashboard", params={"min_age": 5, "grace_months": 12}).json()
        assert data["parameters"]["grace_months"] == 12
        assert data["simulation"]["target_volume"] == 1200

    def test_reload(self, make_client, tmp_path, raw_bundle):
        path = tmp_path / "bundle.json"
        path.write_text(json.dumps(raw_bundle), encoding="utf-8")
        client = make_client(repository=BundleRepository(path))

        data = client.post("/api/bundle/reload").json()

        assert data["loaded"] is True
        assert data["record_counts"]["anomalies"] == 4
        assert len(data["content_hash"]) == 64

    def test_reload_unreadable_bundle(self, make_client, tmp_path):
        path = tmp_path / "bundle.json"
        path.write_text("[]", encoding="utf-8")
        client = make_client(repository=BundleRepository(path))

        response = client.post("/api/bundle/reload")

        assert response.status_code == 503
        assert response.json()["error"] == "Analytics bundle unavailable"


class TestEmptyBundle:
    """Every view renders its empty state."""

    def test_empty_views(self, make_client):
        client = make_client(AnalyticsBundle())

        assert client.get("/api/risks").json() == []
        assert client.get("/api/risks/actions").json() == []
        assert client.get("/api/aggregates/compliance").json() == []
        assert client.get("/api/index/ali").json()["entries"] == []
        feed = client.get("/api/index/anomalies").json()
        assert feed["anomalies"] == []
        assert feed["synthesized"] is False
        assert client.get("/api/simulator/run").json()["result"]["target_volume"] == 0
