"""Result types — the contract between engine and host.

``ItemSimulationResult`` is the per-item output of a run.  ``TrialData`` is
the engine's internal scratch record (raw numpy arrays) passed between the
orchestrator, the propagator and the analyzer; it never leaves the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from pydantic import BaseModel


# ═══════════════════════════════════════════════════════════════════════════
# Internal trial arrays
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class TrialData:
    """Raw Monte-Carlo samples for one item."""

    totals: np.ndarray
    """Shape ``(simulation_count,)`` — total servings per trial."""

    periods: dict[str, np.ndarray] = field(default_factory=dict)
    """Period name → shape ``(simulation_count,)`` subtotal per trial, in timeline order."""

    def copy(self) -> TrialData:
        return TrialData(
            totals=self.totals.copy(),
            periods={name: arr.copy() for name, arr in self.periods.items()},
        )


# ═══════════════════════════════════════════════════════════════════════════
# Public output models
# ═══════════════════════════════════════════════════════════════════════════

class DistributionBin(BaseModel):
    """One histogram bin over the trial totals."""

    min: float
    max: float
    count: int
    contains_recommendation: bool
    """True when ``min <= recommended_servings < max``."""


class TimelinePoint(BaseModel):
    """Mean consumption in one event phase."""

    period_name: str
    mean_servings: float
    percentage_of_total: float
    """``mean_servings / recommended_servings × 100``."""


class ItemSimulationResult(BaseModel):
    """Statistical summary and purchase recommendation for one item."""

    item_id: str

    # --- Distribution statistics ---
    mean: float
    median: float
    min: float
    max: float

    # --- Recommendation ---
    recommended_servings: float
    """Trial total at the confidence percentile (rank-based, not interpolated)."""
    recommended_units: int
    """ceil(recommended_servings / servings_per_unit)."""
    total_cost: float
    """recommended_units × unit_cost."""

    # --- Risk ---
    stockout_risk: float
    """100 − confidence_level (%)."""

    distribution: list[DistributionBin]
    timeline: list[TimelinePoint]


class CategoryConsumption(BaseModel):
    """Recommended servings and cost rolled up by item category."""

    category: str
    servings: float
    percentage: float
    cost: float


class RatioShortfall(BaseModel):
    """A secondary item bought below the ratio its primary requires."""

    primary_item_id: str
    secondary_item_id: str
    expected_units: float
    actual_units: float
    deficit: float
    message: str


class SuggestedRelationship(BaseModel):
    """A likely complementary pair detected from names and categories."""

    primary_item_id: str
    secondary_item_id: str
    suggested_ratio: float
