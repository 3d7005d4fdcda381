"""Planning helpers around a simulation run."""

from __future__ import annotations

import math
from typing import Literal

from party_simulator.config.catalog import PurchasableItem
from party_simulator.models.results import CategoryConsumption, ItemSimulationResult

BASE_SIMULATION_COUNTS = {"low": 100, "medium": 500, "high": 1000}


def recommended_simulation_count(
    attendees: int,
    precision: Literal["low", "medium", "high"] = "medium",
) -> int:
    """Suggest a trial count: more guests → more variability → more trials.

    ``base × max(1, log10(attendees / 10))``, rounded up to the next hundred
    below 1000 and to the next thousand above.
    """
    scale = math.log10(attendees / 10) if attendees > 10 else 0.0
    raw = BASE_SIMULATION_COUNTS[precision] * max(1.0, scale)
    if raw < 1000:
        return math.ceil(raw / 100) * 100
    return math.ceil(raw / 1000) * 1000


def summarize_by_category(
    results: dict[str, ItemSimulationResult],
    items: list[PurchasableItem],
) -> list[CategoryConsumption]:
    """Roll recommended servings and cost up by category, in catalog order."""
    servings: dict[str, float] = {}
    cost: dict[str, float] = {}
    for item in items:
        result = results.get(item.id)
        if result is None:
            continue
        servings[item.category] = servings.get(item.category, 0.0) + result.recommended_servings
        cost[item.category] = cost.get(item.category, 0.0) + result.total_cost

    total = sum(servings.values())
    return [
        CategoryConsumption(
            category=category,
            servings=servings[category],
            percentage=servings[category] / total * 100 if total > 0 else 0.0,
            cost=cost[category],
        )
        for category in servings
    ]
