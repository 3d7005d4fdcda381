"""Complementary-demand propagation.

Runs once, after every trial has been sampled, and raises (never lowers) the
sampled consumption of a secondary item so it covers what its primary item
implies.  Each enforced category pairing is a :class:`RelationshipRule`;
relationships that no active rule claims are accepted as data and left
without numeric effect.

Rules
-----
``spirits_mixer``
    Primary must be spirits and secondary mixers.  Per trial,
    ``mixer_total = max(mixer_total, spirit_total × ratio)`` and each period
    subtotal is floored at ``spirit_period × ratio`` the same way.
``unit_coverage``
    Food mode, any category pair.  The primary's consumption is rounded up
    to whole purchased units, and the secondary must cover
    ``units × ratio`` of its own units:
    ``required = ceil(primary / primary.servings_per_unit) × ratio
    × secondary.servings_per_unit``.  Raised totals rescale the secondary's
    period subtotals proportionally.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import numpy as np

from party_simulator.config.catalog import ComplementaryRelationship, PurchasableItem
from party_simulator.models.results import TrialData

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Rules
# ═══════════════════════════════════════════════════════════════════════════

class RelationshipRule(ABC):
    """Base class for one enforced primary → secondary pairing."""

    name: str = ""

    @abstractmethod
    def applies(self, primary: PurchasableItem, secondary: PurchasableItem) -> bool:
        ...

    @abstractmethod
    def apply(
        self,
        primary: PurchasableItem,
        secondary: PurchasableItem,
        ratio: float,
        primary_data: TrialData,
        secondary_data: TrialData,
    ) -> None:
        """Raise ``secondary_data`` in place."""


class SpiritsMixerRule(RelationshipRule):
    """Mixers must cover ``ratio`` servings per spirit serving."""

    name = "spirits_mixer"

    def applies(self, primary: PurchasableItem, secondary: PurchasableItem) -> bool:
        return primary.category == "spirits" and secondary.category == "mixers"

    def apply(self, primary, secondary, ratio, primary_data, secondary_data) -> None:
        required = primary_data.totals * ratio
        raised = secondary_data.totals < required
        if not raised.any():
            return

        secondary_data.totals[raised] = required[raised]

        for period_name, sub in secondary_data.periods.items():
            primary_sub = primary_data.periods.get(period_name)
            if primary_sub is None:
                continue
            required_sub = primary_sub * ratio
            floor_here = raised & (sub < required_sub)
            sub[floor_here] = required_sub[floor_here]


class UnitCoverageRule(RelationshipRule):
    """Secondary covers the primary in whole purchased units (food pairs)."""

    name = "unit_coverage"

    def applies(self, primary: PurchasableItem, secondary: PurchasableItem) -> bool:
        return primary.servings_per_unit > 0

    def apply(self, primary, secondary, ratio, primary_data, secondary_data) -> None:
        primary_units = np.ceil(primary_data.totals / primary.servings_per_unit)
        required = primary_units * ratio * secondary.servings_per_unit

        current = secondary_data.totals
        raised = current < required
        if not raised.any():
            return

        # Spread the raise over periods in proportion to what was sampled;
        # a trial that sampled nothing splits it evenly.
        scale = np.divide(required, current, out=np.zeros_like(current), where=current > 0)
        sampled = current[raised] > 0
        even_share = required[raised] / max(1, len(secondary_data.periods))
        for sub in secondary_data.periods.values():
            sub[raised] = np.where(sampled, sub[raised] * scale[raised], even_share)

        current[raised] = required[raised]


RULES: dict[str, RelationshipRule] = {
    rule.name: rule for rule in (SpiritsMixerRule(), UnitCoverageRule())
}


# ═══════════════════════════════════════════════════════════════════════════
# Propagator
# ═══════════════════════════════════════════════════════════════════════════

def propagate_complementary_demand(
    trials: dict[str, TrialData],
    items: list[PurchasableItem],
    relationships: list[ComplementaryRelationship],
    rule_names: list[str] | None = None,
) -> dict[str, TrialData]:
    """Apply every active rule to every declared relationship.

    Parameters
    ----------
    trials : dict[str, TrialData]
        Item id → sampled arrays.  Secondary arrays are modified in place.
    items : list[PurchasableItem]
        The simulated item set.
    relationships : list[ComplementaryRelationship]
        Declared pairings.  Empty → no-op.
    rule_names : list[str] | None
        Names from :data:`RULES`; defaults to ``["spirits_mixer"]``.

    Returns
    -------
    dict[str, TrialData]
        The same ``trials`` mapping.
    """
    if not relationships:
        return trials

    if rule_names is None:
        rule_names = ["spirits_mixer"]
    rules = [RULES[name] for name in rule_names]
    by_id = {item.id: item for item in items}

    for rel in relationships:
        primary = by_id.get(rel.primary_item_id)
        secondary = by_id.get(rel.secondary_item_id)
        if primary is None or secondary is None:
            logger.debug(
                "Skipping relationship %s → %s: item not in simulated set",
                rel.primary_item_id, rel.secondary_item_id,
            )
            continue

        for rule in rules:
            if rule.applies(primary, secondary):
                rule.apply(
                    primary, secondary, rel.ratio,
                    trials[primary.id], trials[secondary.id],
                )

    return trials
