"""Starting values for a new party plan.

The catalog mirrors a typical house party shopping list: a beer twelve-pack,
a bottle of rum with cola to mix, ice and cups.
"""

from __future__ import annotations

from party_simulator.config.profiles import DrinkerProfile, EaterProfile
from party_simulator.config.event import EventFactors, TimePeriod
from party_simulator.config.catalog import ComplementaryRelationship, PurchasableItem
from party_simulator.config.scenario import Scenario, SimulationConfig

CONFIDENCE_LEVEL_OPTIONS: tuple[int, ...] = (80, 90, 95, 99)
"""80 = rough estimate, 90 = normal planning, 95 = careful planning, 99 = maximum safety."""

SIMULATION_COUNT_OPTIONS: tuple[int, ...] = (100, 500, 1000, 5000)
"""Fast → very precise."""


def default_drinker_profiles() -> list[DrinkerProfile]:
    return [
        DrinkerProfile(
            name="Light drinker", share_percent=30,
            alcoholic_multiplier=1.5, non_alcoholic_multiplier=2.0,
            prefers_wine=True,
        ),
        DrinkerProfile(
            name="Social drinker", share_percent=50,
            alcoholic_multiplier=3.0, non_alcoholic_multiplier=1.5,
            prefers_beer=True,
        ),
        DrinkerProfile(
            name="Heavy drinker", share_percent=20,
            alcoholic_multiplier=5.0, non_alcoholic_multiplier=1.0,
            prefers_spirits=True,
        ),
    ]


def default_eater_profiles() -> list[EaterProfile]:
    return [
        EaterProfile(name="Light Eater", share_percent=25, servings_multiplier=0.7),
        EaterProfile(name="Average Eater", share_percent=50, servings_multiplier=1.0),
        EaterProfile(name="Heavy Eater", share_percent=25, servings_multiplier=1.5),
    ]


def default_time_periods() -> list[TimePeriod]:
    return [
        TimePeriod(name="Early", duration_percentage=25, consumption_factor=0.8),
        TimePeriod(name="Peak", duration_percentage=50, consumption_factor=1.3),
        TimePeriod(name="Late", duration_percentage=25, consumption_factor=0.7),
    ]


def default_drink_items() -> list[PurchasableItem]:
    return [
        PurchasableItem(id="beer-12pk", name="Beer twelve-pack 355ml", category="beer",
                        servings_per_unit=12, unit_cost=49.90, units=1),
        PurchasableItem(id="rum", name="Rum 750ml", category="spirits",
                        servings_per_unit=15, unit_cost=94.90, units=1),
        PurchasableItem(id="cola", name="Cola twopack 3L", category="mixers",
                        servings_per_unit=30, unit_cost=20.50, units=1),
        PurchasableItem(id="ice", name="Ice bag 3kg", category="ice",
                        servings_per_unit=15, unit_cost=6.50, units=1),
        PurchasableItem(id="cups", name="Party cups 16oz x50", category="supplies",
                        servings_per_unit=50, unit_cost=29.90, units=1),
    ]


def default_relationships() -> list[ComplementaryRelationship]:
    return [ComplementaryRelationship(primary_item_id="rum", secondary_item_id="cola", ratio=3)]


def default_scenario() -> Scenario:
    """Complete, valid drinks scenario for 40 guests at a 4-hour casual party."""
    return Scenario(
        profiles=default_drinker_profiles(),
        items=default_drink_items(),
        event=EventFactors(),
        time_periods=default_time_periods(),
        relationships=default_relationships(),
        simulation=SimulationConfig(),
    )
