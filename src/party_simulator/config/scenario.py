"""Top-level scenario — bundles every input of one simulation run."""

from typing import Literal

from pydantic import BaseModel, Field

from party_simulator.config.profiles import DrinkerProfile
from party_simulator.config.event import EventFactors, TimePeriod
from party_simulator.config.catalog import ComplementaryRelationship, PurchasableItem

RuleName = Literal["spirits_mixer", "unit_coverage"]


class SamplingConfig(BaseModel):
    """Noise model for one attendee's consumption in one period.

    Drinks use the defaults.  The food special case turns the attendance
    draw off (probability 1.0) and raises the floor to 0.1 servings.
    """

    attendance_probability: float = Field(
        default=0.95, ge=0, le=1.0,
        description="Chance an attendee is present for a given period",
    )
    noise_cv: float = Field(
        default=0.2, ge=0,
        description="Std-dev of the Gaussian perturbation as a fraction of the base rate",
    )
    min_consumption: float = Field(
        default=0.01, ge=0,
        description="Floor on a present attendee's sampled consumption",
    )


class SimulationConfig(BaseModel):
    """Run-level settings.

    Attendee count, confidence level and simulation count are range-checked
    by the engine's validation step (not by pydantic) so that a bad value
    raises the matching ``SimulationError`` subclass.
    """

    attendees: int = Field(default=40, description="Number of guests")
    confidence_level: float = Field(
        default=90.0,
        description="Percentile of simulated demand to buy for, in (0, 100]. "
                    "Typical: 80, 90, 95, 99.",
    )
    simulation_count: int = Field(
        default=1000,
        description="Number of Monte-Carlo trials (typically 100–5000)",
    )
    random_seed: int | None = Field(
        default=None,
        description="Optional RNG seed for reproducible runs. None = non-deterministic.",
    )
    relationship_rules: list[RuleName] = Field(
        default_factory=lambda: ["spirits_mixer"],
        description="Complementary-demand rules to enforce. 'spirits_mixer' raises "
                    "mixers to cover spirits; 'unit_coverage' (food) covers any pair "
                    "in whole purchased units.",
    )
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)


class Scenario(BaseModel):
    """Complete input bundle for one simulation run."""

    profiles: list[DrinkerProfile] = Field(default_factory=lambda: [DrinkerProfile()])
    items: list[PurchasableItem] = Field(default_factory=list)
    event: EventFactors = Field(default_factory=EventFactors)
    time_periods: list[TimePeriod] = Field(default_factory=lambda: [TimePeriod()])
    relationships: list[ComplementaryRelationship] = Field(default_factory=list)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
