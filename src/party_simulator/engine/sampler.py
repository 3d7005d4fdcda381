"""Per-period consumption sampler — the computational core.

For one item and one timeline period, every attendee draws a consumption
value from a noisy model:

    base      = profile multiplier (alcoholic or not)
              × 1.3 if the profile prefers the item's category
              × period.consumption_factor
              × environmental factor
              × period.duration_percentage / 100
    z         ~ N(0, 1)                      (Box–Muller from two uniforms)
    present   ~ Bernoulli(attendance_probability)
    serving   = present × max(min_consumption, base + z × base × noise_cv)

and the period total is the sum over all attendees of all profiles.

Trials are vectorised: one call returns the period total for every trial,
shape ``(trials,)``.  Each profile consumes ``(3, trials, count)`` uniforms
from the random source, drawn in blocks of at most ``MAX_BLOCK_ELEMENTS``.
"""

from __future__ import annotations

import numpy as np

from party_simulator.config.catalog import ALCOHOLIC_CATEGORIES
from party_simulator.config.event import TimePeriod
from party_simulator.config.profiles import DrinkerProfile, PREFERENCE_BOOST
from party_simulator.config.scenario import SamplingConfig
from party_simulator.engine.random_source import RandomSource

MAX_BLOCK_ELEMENTS = 1 << 22
"""Uniforms per random draw (32 MiB of float64)."""


def box_muller(u1: np.ndarray, u2: np.ndarray) -> np.ndarray:
    """Standard normal variates from two independent uniforms.

    ``u1`` must lie in ``(0, 1]`` (``log(0)`` is undefined).
    """
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)


def category_boost(profile: DrinkerProfile, category: str) -> float:
    if category == "beer" and profile.prefers_beer:
        return PREFERENCE_BOOST
    if category == "spirits" and profile.prefers_spirits:
        return PREFERENCE_BOOST
    if category == "wine" and profile.prefers_wine:
        return PREFERENCE_BOOST
    return 1.0


def period_base_rate(
    profile: DrinkerProfile,
    category: str,
    period: TimePeriod,
    environmental_factor: float,
) -> float:
    """Deterministic per-person consumption for one profile in one period."""
    base_multiplier = (
        profile.alcoholic_multiplier
        if category in ALCOHOLIC_CATEGORIES
        else profile.non_alcoholic_multiplier
    )
    return (
        base_multiplier
        * category_boost(profile, category)
        * period.consumption_factor
        * environmental_factor
        * (period.duration_percentage / 100)
    )


def sample_period_consumption(
    allocation: dict[str, int],
    profiles: list[DrinkerProfile],
    category: str,
    period: TimePeriod,
    environmental_factor: float,
    rng: RandomSource,
    trials: int,
    sampling: SamplingConfig | None = None,
    max_block_elements: int = MAX_BLOCK_ELEMENTS,
) -> np.ndarray:
    """Sample the period total for one item across all trials.

    Parameters
    ----------
    allocation : dict[str, int]
        Profile name → attendee count (from ``allocate_attendees``).
    profiles : list[DrinkerProfile]
        Normalized profiles, looked up by name.
    category : str
        Item category; selects the multiplier and preference boost.
    period : TimePeriod
        Timeline phase being sampled.
    environmental_factor : float
        Output of ``compute_environmental_factor``.
    rng : RandomSource
        Uniform source.
    trials : int
        Number of independent trials to sample at once.
    sampling : SamplingConfig | None
        Noise model; defaults to the drinks model.
    max_block_elements : int
        Upper bound on uniforms requested per draw.  Larger populations are
        sampled in consecutive blocks, so memory stays flat in
        ``trials × attendees``.

    Returns
    -------
    np.ndarray
        Shape ``(trials,)`` of non-negative period totals.
    """
    sampling = sampling or SamplingConfig()
    totals = np.zeros(trials, dtype=np.float64)

    for profile in profiles:
        count = allocation.get(profile.name, 0)
        if count <= 0:
            continue

        base = period_base_rate(profile, category, period, environmental_factor)
        std_dev = base * sampling.noise_cv

        for start, n_trials, n_people in _blocks(trials, count, max_block_elements):
            u = rng.uniform((3, n_trials, n_people))
            # 1 − U maps [0, 1) onto (0, 1] so the log in Box–Muller stays finite.
            z = box_muller(1.0 - u[0], u[1])
            present = (u[2] < sampling.attendance_probability).astype(np.float64)

            consumption = present * np.maximum(sampling.min_consumption, base + z * std_dev)
            totals[start:start + n_trials] += consumption.sum(axis=1)

    return totals


def _blocks(trials: int, count: int, max_elements: int):
    """Split a ``(3, trials, count)`` draw into blocks of at most ``max_elements``.

    Yields ``(first_trial, n_trials, n_attendees)``; large head counts are
    split along the attendee axis too.
    """
    per_row = min(count, max(1, max_elements // 3))
    rows = max(1, max_elements // (3 * per_row))
    for start in range(0, trials, rows):
        n_trials = min(rows, trials - start)
        for first in range(0, count, per_row):
            yield start, n_trials, min(per_row, count - first)
