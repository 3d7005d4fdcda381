"""Tests for engine/orchestrator.py — full simulation runs.

Covers:
  - Baseline single-item scenario (seeded and scripted sources)
  - Environmental scaling and confidence monotonicity
  - Complementary floor survives analysis
  - Non-enforced relationships leave results unchanged
  - Configuration errors surface before sampling
  - Reproducibility, sharding and the trial-major array layout
"""

from __future__ import annotations

import math

import pytest

from party_simulator.config import ComplementaryRelationship, EventFactors, PurchasableItem
from party_simulator.engine.orchestrator import (
    run_simulation,
    run_simulation_sharded,
    run_trials,
    simulate,
)
from party_simulator.engine.random_source import NumpyRandomSource
from party_simulator.errors import DivisionByZeroError, EmptyItemSetError


def _with_sim(scenario, **updates):
    return scenario.model_copy(update={
        "simulation": scenario.simulation.model_copy(update=updates),
    })


# ═══════════════════════════════════════════════════════════════════════════
# Baseline
# ═══════════════════════════════════════════════════════════════════════════

class TestBaseline:

    def test_one_result_per_item(self, party_scenario):
        results = run_simulation(party_scenario)
        assert list(results) == [item.id for item in party_scenario.items]

    def test_seeded_recommendation_is_plausible(self, scenario_a):
        result = run_simulation(scenario_a)["rum"]
        # 40 guests × 1 serving × 95% presence ≈ 38 on average
        assert 30 <= result.recommended_servings <= 55
        assert result.min <= result.median <= result.max
        assert result.stockout_risk == pytest.approx(10)

    def test_scripted_source_gives_exact_base_rate(self, scenario_a, fixed_source):
        result = run_simulation(scenario_a, rng=fixed_source())["rum"]
        assert result.mean == pytest.approx(40)
        assert result.recommended_servings == pytest.approx(40)
        assert result.recommended_units == 3
        assert result.total_cost == pytest.approx(3 * 94.90)

    def test_units_cover_recommendation(self, party_scenario):
        results = run_simulation(party_scenario)
        for item in party_scenario.items:
            r = results[item.id]
            assert r.recommended_units == math.ceil(r.recommended_servings / item.servings_per_unit)
            assert r.total_cost == pytest.approx(r.recommended_units * item.unit_cost)

    def test_everything_non_negative(self, party_scenario):
        for r in run_simulation(party_scenario).values():
            assert r.min >= 0
            assert r.recommended_servings >= 0

    def test_simulate_alias(self):
        assert simulate is run_simulation


# ═══════════════════════════════════════════════════════════════════════════
# Environment and confidence
# ═══════════════════════════════════════════════════════════════════════════

class TestScaling:

    def test_hot_outdoor_party_needs_more(self, scenario_a):
        hot = scenario_a.model_copy(update={
            "event": EventFactors(temperature="hot", event_type="party", is_outdoor=True, duration_hours=4),
        })
        baseline = run_simulation(scenario_a)["rum"].recommended_servings
        assert run_simulation(hot)["rum"].recommended_servings > baseline

    def test_confidence_is_monotonic(self, party_scenario):
        recs = [
            run_simulation(_with_sim(party_scenario, confidence_level=c))["beer-12pk"].recommended_servings
            for c in (80, 90, 95, 99)
        ]
        assert recs == sorted(recs)

    def test_timeline_shares_near_whole(self, party_scenario):
        result = run_simulation(party_scenario)["beer-12pk"]
        assert [p.period_name for p in result.timeline] == ["Early", "Peak", "Late"]
        total = sum(p.percentage_of_total for p in result.timeline)
        assert 80 < total < 105

    def test_distribution_covers_every_trial(self, party_scenario):
        for r in run_simulation(party_scenario).values():
            assert sum(b.count for b in r.distribution) == party_scenario.simulation.simulation_count
            assert 10 <= len(r.distribution) <= 15


# ═══════════════════════════════════════════════════════════════════════════
# Relationships end to end
# ═══════════════════════════════════════════════════════════════════════════

class TestRelationships:

    def test_mixer_covers_spirit_ratio(self, rum_and_cola):
        results = run_simulation(rum_and_cola)
        assert results["cola"].recommended_servings >= 3 * results["rum"].recommended_servings - 1e-9

    def test_scripted_mixer_floor(self, rum_and_cola, fixed_source):
        results = run_simulation(rum_and_cola, rng=fixed_source())
        assert results["rum"].recommended_servings == pytest.approx(40)
        assert results["cola"].recommended_servings == pytest.approx(120)
        assert results["cola"].recommended_units == 4

    def test_non_enforced_pair_changes_nothing(self, scenario_a):
        beer = PurchasableItem(id="beer", category="beer", servings_per_unit=12, unit_cost=49.9)
        ice = PurchasableItem(id="ice", category="ice", servings_per_unit=15, unit_cost=6.5)
        plain = scenario_a.model_copy(update={"items": [beer, ice]})
        related = plain.model_copy(update={"relationships": [
            ComplementaryRelationship(primary_item_id="beer", secondary_item_id="ice", ratio=2),
        ]})
        assert run_simulation(plain) == run_simulation(related)

    def test_rules_can_be_disabled(self, rum_and_cola, fixed_source):
        off = _with_sim(rum_and_cola, relationship_rules=[])
        assert run_simulation(off, rng=fixed_source())["cola"].recommended_servings == pytest.approx(40)


# ═══════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════

class TestErrors:

    def test_zero_servings_per_unit(self, scenario_a, fixed_source):
        bad = scenario_a.model_copy(update={
            "items": [PurchasableItem(id="broken", category="beer", servings_per_unit=0)],
        })
        source = fixed_source()
        with pytest.raises(DivisionByZeroError):
            run_simulation(bad, rng=source)
        assert source.calls == []

    def test_no_items(self, scenario_a):
        with pytest.raises(EmptyItemSetError):
            run_simulation(scenario_a.model_copy(update={"items": []}))


# ═══════════════════════════════════════════════════════════════════════════
# Reproducibility and sharding
# ═══════════════════════════════════════════════════════════════════════════

class TestReproducibility:

    def test_same_seed_same_results(self, party_scenario):
        assert run_simulation(party_scenario) == run_simulation(party_scenario)

    def test_different_seeds_differ(self, party_scenario):
        other = _with_sim(party_scenario, random_seed=8)
        a = run_simulation(party_scenario)["beer-12pk"]
        b = run_simulation(other)["beer-12pk"]
        assert a.mean != b.mean

    def test_trial_arrays_are_trial_major(self, party_scenario):
        raw = run_trials(party_scenario, NumpyRandomSource(1), trials=25)
        for data in raw.values():
            assert data.totals.shape == (25,)
            assert list(data.periods) == ["Early", "Peak", "Late"]
            assert sum(data.periods.values()) == pytest.approx(data.totals)


class TestSharded:

    def test_odd_trial_count_fully_covered(self, party_scenario):
        scenario = _with_sim(party_scenario, simulation_count=1001)
        results = run_simulation_sharded(scenario, shards=4)
        for r in results.values():
            assert sum(b.count for b in r.distribution) == 1001

    def test_reproducible_for_fixed_shards(self, party_scenario):
        a = run_simulation_sharded(party_scenario, shards=3)
        b = run_simulation_sharded(party_scenario, shards=3)
        assert a == b

    def test_close_to_sequential(self, party_scenario):
        scenario = _with_sim(party_scenario, simulation_count=4000)
        seq = run_simulation(scenario)["beer-12pk"].mean
        par = run_simulation_sharded(scenario, shards=4)["beer-12pk"].mean
        assert par == pytest.approx(seq, rel=0.02)

    def test_mixer_floor_after_merge(self, rum_and_cola):
        results = run_simulation_sharded(rum_and_cola, shards=2)
        assert results["cola"].recommended_servings >= 3 * results["rum"].recommended_servings - 1e-9
