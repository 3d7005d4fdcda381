"""Tests for the HTTP API layer.

Covers:
  - Schema / defaults / simulation-count endpoints
  - Drinks and food simulation endpoints
  - Relationship suggestion and ratio check endpoints
  - Error responses for engine and pydantic failures
  - Deep merge utility
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from party_simulator.api.server import _build_scenario, _deep_merge, app


client = TestClient(app)


def _seeded(**simulation) -> dict:
    return {"scenario": {"simulation": {"random_seed": 1, "simulation_count": 200, **simulation}}}


# ═══════════════════════════════════════════════════════════════════════════
# Info endpoints
# ═══════════════════════════════════════════════════════════════════════════

class TestInfoEndpoints:

    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_root(self):
        data = client.get("/").json()
        assert data["name"] == "Party Consumption Simulator API"

    def test_schema(self):
        data = client.get("/schema").json()
        assert "properties" in data
        assert {"profiles", "items", "event", "time_periods", "relationships", "simulation"} <= set(data["properties"])

    def test_defaults(self):
        data = client.get("/scenario/defaults").json()
        assert data["simulation"]["attendees"] == 40
        assert [i["id"] for i in data["items"]] == ["beer-12pk", "rum", "cola", "ice", "cups"]
        assert len(data["profiles"]) == 3

    def test_simulation_count(self):
        data = client.get("/simulation-count", params={"attendees": 300}).json()
        assert data["simulation_count"] == 800
        assert data["precision"] == "medium"

    def test_simulation_count_rejects_zero(self):
        assert client.get("/simulation-count", params={"attendees": 0}).status_code == 422


# ═══════════════════════════════════════════════════════════════════════════
# Simulation endpoints
# ═══════════════════════════════════════════════════════════════════════════

class TestSimulate:

    def test_defaults(self):
        resp = client.post("/simulate", json=_seeded())
        assert resp.status_code == 200
        data = resp.json()
        assert set(data["results"]) == {"beer-12pk", "rum", "cola", "ice", "cups"}
        assert data["total_cost"] == pytest.approx(
            sum(r["total_cost"] for r in data["results"].values()), abs=0.01,
        )
        assert {c["category"] for c in data["categories"]} == {"beer", "spirits", "mixers", "ice", "supplies"}

    def test_empty_body_uses_defaults(self):
        resp = client.post("/simulate", json={})
        assert resp.status_code == 200
        assert len(resp.json()["results"]) == 5

    def test_result_shape(self):
        rum = client.post("/simulate", json=_seeded()).json()["results"]["rum"]
        assert rum["stockout_risk"] == pytest.approx(10)
        assert 10 <= len(rum["distribution"]) <= 15
        assert [p["period_name"] for p in rum["timeline"]] == ["Early", "Peak", "Late"]

    def test_partial_override(self):
        small = client.post("/simulate", json=_seeded(attendees=10)).json()
        large = client.post("/simulate", json=_seeded(attendees=100)).json()
        assert large["results"]["beer-12pk"]["recommended_servings"] > small["results"]["beer-12pk"]["recommended_servings"]

    def test_seeded_is_reproducible(self):
        a = client.post("/simulate", json=_seeded()).json()
        b = client.post("/simulate", json=_seeded()).json()
        assert a == b

    def test_engine_error_is_422(self):
        body = _seeded()
        body["scenario"]["items"] = []
        resp = client.post("/simulate", json=body)
        assert resp.status_code == 422
        assert resp.json()["error"] == "EmptyItemSetError"

    def test_bad_confidence_is_422(self):
        resp = client.post("/simulate", json=_seeded(confidence_level=0))
        assert resp.status_code == 422
        assert resp.json()["error"] == "InvalidConfidenceLevelError"

    def test_invalid_field_is_422(self):
        body = _seeded()
        body["scenario"]["event"] = {"temperature": "scorching"}
        resp = client.post("/simulate", json=body)
        assert resp.status_code == 422
        assert resp.json()["error"] == "ValidationError"


class TestSimulateFood:

    @pytest.fixture
    def food_body(self) -> dict:
        return {
            "attendees": 20,
            "items": [
                {"id": "burgers", "name": "Burgers x4", "category": "meat", "servings_per_unit": 4, "unit_cost": 89},
                {"id": "buns", "name": "Buns x8", "category": "sides", "servings_per_unit": 8, "unit_cost": 35},
            ],
            "relationships": [{"primary_item_id": "burgers", "secondary_item_id": "buns", "ratio": 1}],
            "simulation_count": 300,
            "random_seed": 5,
        }

    def test_food(self, food_body):
        resp = client.post("/simulate/food", json=food_body)
        assert resp.status_code == 200
        results = resp.json()["results"]
        assert [p["period_name"] for p in results["burgers"]["timeline"]] == ["Event"]
        assert results["buns"]["recommended_units"] >= results["burgers"]["recommended_units"]

    def test_items_required(self):
        assert client.post("/simulate/food", json={"attendees": 10}).status_code == 422


# ═══════════════════════════════════════════════════════════════════════════
# Relationship endpoints
# ═══════════════════════════════════════════════════════════════════════════

class TestRelationshipEndpoints:

    def test_suggest(self):
        body = {
            "items": [
                {"id": "rum", "name": "Rum 750ml", "category": "spirits"},
                {"id": "cola", "name": "Cola 3L", "category": "mixers"},
            ],
        }
        data = client.post("/relationships/suggest", json=body).json()
        assert data["suggestions"] == [
            {"primary_item_id": "rum", "secondary_item_id": "cola", "suggested_ratio": 3.0},
        ]
        assert data["new_relationships"][0]["ratio"] == 3.0

    def test_check(self):
        body = {
            "items": [
                {"id": "rum", "name": "Rum", "category": "spirits", "units": 2},
                {"id": "cola", "name": "Cola", "category": "mixers", "units": 1},
            ],
            "relationships": [{"primary_item_id": "rum", "secondary_item_id": "cola", "ratio": 3}],
        }
        data = client.post("/relationships/check", json=body).json()
        assert len(data) == 1
        assert data[0]["deficit"] == 5


# ═══════════════════════════════════════════════════════════════════════════
# Deep merge
# ═══════════════════════════════════════════════════════════════════════════

class TestDeepMerge:

    def test_nested(self):
        base = {"a": {"b": 1, "c": 2}, "d": 3}
        _deep_merge(base, {"a": {"b": 10}})
        assert base == {"a": {"b": 10, "c": 2}, "d": 3}

    def test_lists_replaced(self):
        base = {"items": [1, 2, 3]}
        _deep_merge(base, {"items": [4]})
        assert base["items"] == [4]

    def test_new_keys_added(self):
        base = {"a": 1}
        _deep_merge(base, {"b": 2})
        assert base == {"a": 1, "b": 2}

    def test_build_scenario_keeps_defaults(self):
        scenario = _build_scenario({"event": {"temperature": "hot"}})
        assert scenario.event.temperature == "hot"
        assert scenario.event.event_type == "casual"
        assert len(scenario.items) == 5
