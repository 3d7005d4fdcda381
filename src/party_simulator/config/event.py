"""Event conditions and the phased timeline."""

from typing import Literal

from pydantic import BaseModel, Field


class EventFactors(BaseModel):
    """Event-wide conditions folded into one environmental multiplier.

    Moderate temperature, a casual indoor event and a 2-hour duration give a
    factor of exactly 1.0.
    """

    temperature: Literal["cool", "moderate", "hot"] = Field(
        default="moderate",
        description="cool ×0.8, moderate ×1.0, hot ×1.3",
    )
    event_type: Literal["formal", "casual", "party"] = Field(
        default="casual",
        description="formal ×0.9, casual ×1.0, party ×1.2",
    )
    is_outdoor: bool = Field(default=False, description="Outdoor venue ×1.1")
    duration_hours: float = Field(
        default=4.0, gt=0,
        description="Event length. Applies min(1.5, 0.8 + hours/10).",
    )


class TimePeriod(BaseModel):
    """One phase of the event (e.g. arrival, peak, wind-down)."""

    name: str = Field(default="Peak", description="Label, unique within a run")
    duration_percentage: float = Field(
        default=100.0, ge=0, le=100,
        description="Share of the event's duration (%). All periods sum to 100.",
    )
    consumption_factor: float = Field(
        default=1.0, gt=0,
        description="Relative consumption intensity in this phase (typically 0.5–1.5)",
    )
