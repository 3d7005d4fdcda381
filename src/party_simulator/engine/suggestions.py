"""Relationship suggestions, ratio checks and quantity planning for a shopping list.

Suggestions come from a small table of common pairings matched on item
category and (optionally) a keyword in the item name.  Keywords cover both
Spanish and English product names.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from party_simulator.config.catalog import ComplementaryRelationship, PurchasableItem
from party_simulator.errors import DivisionByZeroError
from party_simulator.models.results import RatioShortfall, SuggestedRelationship


@dataclass(frozen=True)
class _Pairing:
    primary_category: str
    secondary_category: str
    ratio: float
    primary_keyword: str = ""
    secondary_keyword: str = ""


COMMON_PAIRINGS: tuple[_Pairing, ...] = (
    # Burgers and hot dogs need buns
    _Pairing("meat", "sides", 1, "hamburg", "pan"),
    _Pairing("meat", "sides", 1, "burger", "bun"),
    _Pairing("meat", "sides", 1, "hotdog", "pan"),
    _Pairing("meat", "sides", 1, "hot dog", "bun"),
    _Pairing("meat", "sides", 1, "salchicha", "pan"),
    # Mixed drinks
    _Pairing("spirits", "mixers", 3, "ron", "cola"),
    _Pairing("spirits", "mixers", 3, "rum", "cola"),
    _Pairing("spirits", "mixers", 3, "vodka", "jugo"),
    _Pairing("spirits", "mixers", 3, "vodka", "juice"),
    _Pairing("spirits", "mixers", 3, "gin", "tonic"),
    _Pairing("spirits", "ice", 2, "whisky", "hielo"),
    _Pairing("spirits", "ice", 2, "whisky", "ice"),
    # Any spirit
    _Pairing("spirits", "ice", 2),
    _Pairing("spirits", "mixers", 3),
)


def _matches(item: PurchasableItem, category: str, keyword: str) -> bool:
    if item.category != category:
        return False
    return not keyword or keyword in item.name.lower()


def suggest_complementary_items(items: list[PurchasableItem]) -> list[SuggestedRelationship]:
    """Every (primary, secondary) pair matching a known pairing.

    A pair matched by several table rows is reported once, with the ratio of
    the first (most specific) row.
    """
    suggestions: list[SuggestedRelationship] = []
    seen: set[tuple[str, str]] = set()

    for pairing in COMMON_PAIRINGS:
        for primary in items:
            if not _matches(primary, pairing.primary_category, pairing.primary_keyword):
                continue
            for secondary in items:
                if secondary.id == primary.id:
                    continue
                if not _matches(secondary, pairing.secondary_category, pairing.secondary_keyword):
                    continue
                key = (primary.id, secondary.id)
                if key in seen:
                    continue
                seen.add(key)
                suggestions.append(SuggestedRelationship(
                    primary_item_id=primary.id,
                    secondary_item_id=secondary.id,
                    suggested_ratio=pairing.ratio,
                ))
    return suggestions


def auto_suggest_relationships(
    items: list[PurchasableItem],
    existing: list[ComplementaryRelationship],
) -> list[ComplementaryRelationship]:
    """Suggested relationships not already declared."""
    existing_pairs = {(rel.primary_item_id, rel.secondary_item_id) for rel in existing}
    return [
        ComplementaryRelationship(
            primary_item_id=s.primary_item_id,
            secondary_item_id=s.secondary_item_id,
            ratio=s.suggested_ratio,
        )
        for s in suggest_complementary_items(items)
        if (s.primary_item_id, s.secondary_item_id) not in existing_pairs
    ]


def find_ratio_shortfalls(
    items: list[PurchasableItem],
    relationships: list[ComplementaryRelationship],
    units: dict[str, float] | None = None,
) -> list[RatioShortfall]:
    """Flag secondary items bought below ``primary units × ratio``.

    ``units`` overrides each item's ``units`` (e.g. the ``recommended_units``
    of a simulation run); items missing from it fall back to ``item.units``.
    """
    by_id = {item.id: item for item in items}
    units = units or {}

    shortfalls: list[RatioShortfall] = []
    for rel in relationships:
        primary = by_id.get(rel.primary_item_id)
        secondary = by_id.get(rel.secondary_item_id)
        if primary is None or secondary is None:
            continue

        primary_units = units.get(primary.id, primary.units)
        secondary_units = units.get(secondary.id, secondary.units)
        expected = primary_units * rel.ratio
        if secondary_units < expected:
            deficit = expected - secondary_units
            label_primary = primary.name or primary.id
            label_secondary = secondary.name or secondary.id
            shortfalls.append(RatioShortfall(
                primary_item_id=primary.id,
                secondary_item_id=secondary.id,
                expected_units=expected,
                actual_units=secondary_units,
                deficit=deficit,
                message=f"Need {deficit:g} more units of {label_secondary} "
                        f"to keep the ratio with {label_primary}",
            ))
    return shortfalls


def optimal_quantities(
    items: list[PurchasableItem],
    relationships: list[ComplementaryRelationship],
    required_servings: float,
) -> dict[str, float]:
    """Units to buy when every primary item must cover ``required_servings``.

    Each item starts at its current ``units``.  Every item that is the
    primary of some relationship is set to
    ``ceil(required_servings / servings_per_unit)`` units, and that quantity
    is pushed down the primary → secondary graph as ``quantity × ratio``.
    Primaries are processed in catalog order, so a later primary overwrites
    what an earlier one pushed down.  A path stops when it revisits an item.

    Raises
    ------
    DivisionByZeroError
        A primary item has ``servings_per_unit <= 0``.
    """
    result: dict[str, float] = {item.id: item.units for item in items}

    dependents: dict[str, list[tuple[str, float]]] = {item.id: [] for item in items}
    for rel in relationships:
        if rel.primary_item_id in dependents and rel.secondary_item_id in dependents:
            dependents[rel.primary_item_id].append((rel.secondary_item_id, rel.ratio))

    def push(item_id: str, quantity: float, visited: frozenset[str]) -> None:
        if item_id in visited:
            return
        visited = visited | {item_id}
        result[item_id] = quantity
        for secondary_id, ratio in dependents[item_id]:
            push(secondary_id, quantity * ratio, visited)

    primary_ids = {rel.primary_item_id for rel in relationships}
    for item in items:
        if item.id not in primary_ids:
            continue
        if item.servings_per_unit <= 0:
            raise DivisionByZeroError(
                f"Item '{item.id}' has servings_per_unit={item.servings_per_unit}; must be > 0"
            )
        push(item.id, math.ceil(required_servings / item.servings_per_unit), frozenset())

    return result
