"""Up-front scenario validation.

``validate_scenario`` runs once at the start of every simulation and raises
the first violation it finds, so a bad configuration never produces partial
or NaN-laden results.
"""

from __future__ import annotations

from party_simulator.config.scenario import Scenario
from party_simulator.errors import (
    DivisionByZeroError,
    DuplicateIdentifierError,
    EmptyItemSetError,
    EmptyTimelineSetError,
    InvalidAttendeeCountError,
    InvalidConfidenceLevelError,
    InvalidProfileConfigurationError,
    InvalidSimulationCountError,
    InvalidTimelineError,
)

DURATION_TOLERANCE = 0.01
"""Allowed drift (percentage points) when period durations are summed."""


def _duplicates(names: list[str]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for name in names:
        if name in seen and name not in dupes:
            dupes.append(name)
        seen.add(name)
    return dupes


def validate_scenario(scenario: Scenario) -> None:
    """Raise a ``SimulationError`` subclass if ``scenario`` cannot be simulated."""
    sim = scenario.simulation

    # ── Run settings ────────────────────────────────────────────────────
    if sim.simulation_count <= 0:
        raise InvalidSimulationCountError(
            f"simulation_count must be positive (got {sim.simulation_count})"
        )
    if not 0 < sim.confidence_level <= 100:
        raise InvalidConfidenceLevelError(
            f"confidence_level must be in (0, 100] (got {sim.confidence_level})"
        )
    if sim.attendees < 1:
        raise InvalidAttendeeCountError(f"attendees must be at least 1 (got {sim.attendees})")

    # ── Items ───────────────────────────────────────────────────────────
    if not scenario.items:
        raise EmptyItemSetError("No items to simulate")
    dupes = _duplicates([item.id for item in scenario.items])
    if dupes:
        raise DuplicateIdentifierError(f"Duplicate item ids: {dupes}")
    for item in scenario.items:
        if item.servings_per_unit <= 0:
            raise DivisionByZeroError(
                f"Item '{item.id}' has servings_per_unit={item.servings_per_unit}; must be > 0"
            )

    # ── Timeline ────────────────────────────────────────────────────────
    if not scenario.time_periods:
        raise EmptyTimelineSetError("No time periods defined")
    dupes = _duplicates([p.name for p in scenario.time_periods])
    if dupes:
        raise InvalidTimelineError(f"Duplicate period names: {dupes}")
    total_duration = sum(p.duration_percentage for p in scenario.time_periods)
    if abs(total_duration - 100) > DURATION_TOLERANCE:
        raise InvalidTimelineError(
            f"Period durations must sum to 100% (got {total_duration:g}%)"
        )

    # ── Profiles ────────────────────────────────────────────────────────
    # Shares themselves are checked by normalize_profiles.
    dupes = _duplicates([p.name for p in scenario.profiles])
    if dupes:
        raise InvalidProfileConfigurationError(f"Duplicate profile names: {dupes}")
