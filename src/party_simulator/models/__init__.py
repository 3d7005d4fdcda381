"""Result models — simulation output contracts."""

from party_simulator.models.results import (
    CategoryConsumption,
    DistributionBin,
    ItemSimulationResult,
    RatioShortfall,
    SuggestedRelationship,
    TimelinePoint,
    TrialData,
)

__all__ = [
    "CategoryConsumption",
    "DistributionBin",
    "ItemSimulationResult",
    "RatioShortfall",
    "SuggestedRelationship",
    "TimelinePoint",
    "TrialData",
]
