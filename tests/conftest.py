"""Shared test fixtures — minimal scenarios and a scripted random source."""

from __future__ import annotations

import numpy as np
import pytest

from party_simulator.config import (
    ComplementaryRelationship,
    DrinkerProfile,
    EventFactors,
    PurchasableItem,
    Scenario,
    SimulationConfig,
    TimePeriod,
)
from party_simulator.config.defaults import default_scenario


class FixedUniformSource:
    """Random source that returns the same uniform for every draw of a kind.

    The sampler asks for ``(3, trials, count)`` blocks: row 0 feeds the
    Box–Muller radius (via ``1 − u``), row 1 the angle, row 2 attendance.
    The defaults give ``z = 0`` and every attendee present, so each sampled
    consumption equals its base rate exactly.
    """

    def __init__(self, radius_u: float = 0.0, angle_u: float = 0.25, attendance_u: float = 0.0):
        self.radius_u = radius_u
        self.angle_u = angle_u
        self.attendance_u = attendance_u
        self.calls: list[tuple[int, ...]] = []

    def uniform(self, size: tuple[int, ...]) -> np.ndarray:
        self.calls.append(size)
        out = np.empty(size, dtype=np.float64)
        out[0] = self.radius_u
        out[1] = self.angle_u
        out[2] = self.attendance_u
        return out


@pytest.fixture
def fixed_source():
    """Factory for :class:`FixedUniformSource`."""
    return FixedUniformSource


@pytest.fixture
def neutral_event() -> EventFactors:
    """Environmental factor exactly 1.0."""
    return EventFactors(temperature="moderate", event_type="casual", is_outdoor=False, duration_hours=2.0)


@pytest.fixture
def single_period() -> list[TimePeriod]:
    return [TimePeriod(name="All night", duration_percentage=100, consumption_factor=1.0)]


@pytest.fixture
def single_profile() -> list[DrinkerProfile]:
    return [DrinkerProfile(name="Everyone", share_percent=100,
                           alcoholic_multiplier=1.0, non_alcoholic_multiplier=1.0)]


@pytest.fixture
def rum() -> PurchasableItem:
    return PurchasableItem(id="rum", name="Rum 750ml", category="spirits",
                           servings_per_unit=15, unit_cost=94.90)


@pytest.fixture
def cola() -> PurchasableItem:
    return PurchasableItem(id="cola", name="Cola 3L", category="mixers",
                           servings_per_unit=30, unit_cost=20.50)


@pytest.fixture
def scenario_a(single_profile, neutral_event, single_period, rum) -> Scenario:
    """40 guests, one profile, one period, neutral environment, one spirit."""
    return Scenario(
        profiles=single_profile,
        items=[rum],
        event=neutral_event,
        time_periods=single_period,
        relationships=[],
        simulation=SimulationConfig(
            attendees=40, confidence_level=90, simulation_count=1000, random_seed=42,
        ),
    )


@pytest.fixture
def rum_and_cola(scenario_a, cola) -> Scenario:
    return scenario_a.model_copy(update={
        "items": [*scenario_a.items, cola],
        "relationships": [
            ComplementaryRelationship(primary_item_id="rum", secondary_item_id="cola", ratio=3),
        ],
    })


@pytest.fixture
def party_scenario() -> Scenario:
    """The default drinks scenario with a fixed seed."""
    scenario = default_scenario()
    scenario.simulation.random_seed = 7
    return scenario
