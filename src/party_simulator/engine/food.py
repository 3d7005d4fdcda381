"""Food simulation — the drinks engine with everything but the noise turned off.

Food consumption has no timeline and no environmental effects, so a food
scenario is a drinks scenario with:
  - one period covering 100% of the event at factor 1.0
  - neutral event factors (moderate, casual, indoor, 2 h → factor 1.0)
  - every guest present (no attendance draw) and a 0.1-serving floor
  - ``unit_coverage`` relationships (e.g. one bun per burger, in whole packs)
"""

from __future__ import annotations

from party_simulator.config.catalog import ComplementaryRelationship, PurchasableItem
from party_simulator.config.event import EventFactors, TimePeriod
from party_simulator.config.profiles import EaterProfile
from party_simulator.config.scenario import SamplingConfig, Scenario, SimulationConfig
from party_simulator.engine.orchestrator import run_simulation
from party_simulator.models.results import ItemSimulationResult

FOOD_PERIOD_NAME = "Event"

NEUTRAL_EVENT = EventFactors(
    temperature="moderate", event_type="casual", is_outdoor=False, duration_hours=2.0,
)

FOOD_SAMPLING = SamplingConfig(attendance_probability=1.0, noise_cv=0.2, min_consumption=0.1)


def build_food_scenario(
    attendees: int,
    eater_profiles: list[EaterProfile],
    items: list[PurchasableItem],
    relationships: list[ComplementaryRelationship] | None = None,
    confidence_level: float = 90.0,
    simulation_count: int = 1000,
    random_seed: int | None = None,
) -> Scenario:
    return Scenario(
        profiles=[p.to_drinker_profile() for p in eater_profiles],
        items=items,
        event=NEUTRAL_EVENT.model_copy(),
        time_periods=[TimePeriod(name=FOOD_PERIOD_NAME, duration_percentage=100, consumption_factor=1.0)],
        relationships=relationships or [],
        simulation=SimulationConfig(
            attendees=attendees,
            confidence_level=confidence_level,
            simulation_count=simulation_count,
            random_seed=random_seed,
            relationship_rules=["unit_coverage"],
            sampling=FOOD_SAMPLING.model_copy(),
        ),
    )


def run_food_simulation(
    attendees: int,
    eater_profiles: list[EaterProfile],
    items: list[PurchasableItem],
    relationships: list[ComplementaryRelationship] | None = None,
    confidence_level: float = 90.0,
    simulation_count: int = 1000,
    random_seed: int | None = None,
) -> dict[str, ItemSimulationResult]:
    """Build a food scenario and run it through the standard engine."""
    scenario = build_food_scenario(
        attendees, eater_profiles, items, relationships,
        confidence_level, simulation_count, random_seed,
    )
    return run_simulation(scenario)
