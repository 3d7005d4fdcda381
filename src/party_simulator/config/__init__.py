"""Configuration models — all simulation input types."""

from party_simulator.config.profiles import DrinkerProfile, EaterProfile, PREFERENCE_BOOST
from party_simulator.config.event import EventFactors, TimePeriod
from party_simulator.config.catalog import (
    ALCOHOLIC_CATEGORIES,
    ComplementaryRelationship,
    ItemCategory,
    PurchasableItem,
)
from party_simulator.config.scenario import SamplingConfig, Scenario, SimulationConfig

__all__ = [
    "DrinkerProfile",
    "EaterProfile",
    "PREFERENCE_BOOST",
    "EventFactors",
    "TimePeriod",
    "ALCOHOLIC_CATEGORIES",
    "ComplementaryRelationship",
    "ItemCategory",
    "PurchasableItem",
    "SamplingConfig",
    "SimulationConfig",
    "Scenario",
]
