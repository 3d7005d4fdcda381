"""Environmental factor — event metadata reduced to one multiplier."""

from __future__ import annotations

from party_simulator.config.event import EventFactors

TEMPERATURE_FACTORS = {"cool": 0.8, "moderate": 1.0, "hot": 1.3}
EVENT_TYPE_FACTORS = {"formal": 0.9, "casual": 1.0, "party": 1.2}
OUTDOOR_FACTOR = 1.1


def duration_factor(duration_hours: float) -> float:
    """Thirst grows with event length, capped at ×1.5 (reached at 7 hours)."""
    return min(1.5, 0.8 + duration_hours / 10)


def compute_environmental_factor(event: EventFactors) -> float:
    """Multiply temperature, event type, venue and duration adjustments.

    Always positive; typically within [0.5, 2.2].
    """
    factor = 1.0
    factor *= TEMPERATURE_FACTORS[event.temperature]
    factor *= EVENT_TYPE_FACTORS[event.event_type]
    if event.is_outdoor:
        factor *= OUTDOOR_FACTOR
    factor *= duration_factor(event.duration_hours)
    return factor
