"""Behavioral profiles — who is drinking (or eating), and how much."""

from pydantic import BaseModel, Field

PREFERENCE_BOOST = 1.3
"""Multiplier applied when a profile prefers the item's category."""


class DrinkerProfile(BaseModel):
    """One consumer archetype.

    ``share_percent`` is a relative weight: the engine normalizes the whole
    profile list so the shares sum to exactly 100 before allocating attendees.
    Negative shares are rejected by the normalizer, not here, so callers get
    an ``InvalidProfileConfigurationError`` rather than a pydantic error.
    """

    name: str = Field(default="Moderate", description="Label, unique within a run")
    share_percent: float = Field(default=100.0, description="Share of attendees (%)")
    alcoholic_multiplier: float = Field(
        default=1.0, ge=0,
        description="Servings per person of alcoholic items over a full event "
                    "(spirits, beer, wine) before period/environment scaling",
    )
    non_alcoholic_multiplier: float = Field(
        default=1.0, ge=0,
        description="Servings per person of every other category",
    )
    prefers_beer: bool = Field(default=False, description="×1.3 on beer")
    prefers_spirits: bool = Field(default=False, description="×1.3 on spirits")
    prefers_wine: bool = Field(default=False, description="×1.3 on wine")


class EaterProfile(BaseModel):
    """Food consumer archetype (single multiplier, no preferences)."""

    name: str = Field(default="Average Eater")
    share_percent: float = Field(default=100.0, description="Share of attendees (%)")
    servings_multiplier: float = Field(default=1.0, ge=0, description="Servings per person")

    def to_drinker_profile(self) -> DrinkerProfile:
        """Express this eater as a profile the consumption engine understands."""
        return DrinkerProfile(
            name=self.name,
            share_percent=self.share_percent,
            alcoholic_multiplier=self.servings_multiplier,
            non_alcoholic_multiplier=self.servings_multiplier,
        )
