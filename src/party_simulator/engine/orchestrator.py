"""Trial orchestrator — the Monte-Carlo run end to end.

Pipeline for one run:
  validate → normalize profiles → environmental factor → allocate attendees
  → sample every (item, period) across all trials → propagate complementary
  demand → analyze

The allocation is computed once and shared by every trial, item and period
(a consistent population per trial); every (item, period, profile) block
draws its own independent uniforms.  Propagation starts only after all
sampling has finished, so results never depend on item order.

Entry points:
  - ``run_simulation(scenario, rng)`` / ``simulate`` — one sequential run
  - ``run_simulation_sharded(scenario, shards)`` — trials split across a
    thread pool with independent child seeds, arrays concatenated
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from party_simulator.config.scenario import Scenario
from party_simulator.engine.analysis import analyze_results
from party_simulator.engine.environment import compute_environmental_factor
from party_simulator.engine.population import allocate_attendees, normalize_profiles
from party_simulator.engine.random_source import NumpyRandomSource, RandomSource
from party_simulator.engine.relationships import propagate_complementary_demand
from party_simulator.engine.sampler import sample_period_consumption
from party_simulator.engine.validation import validate_scenario
from party_simulator.models.results import ItemSimulationResult, TrialData

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Raw sampling
# ═══════════════════════════════════════════════════════════════════════════

def run_trials(
    scenario: Scenario,
    rng: RandomSource,
    trials: int | None = None,
) -> dict[str, TrialData]:
    """Sample raw (unpropagated) consumption for every item.

    Parameters
    ----------
    scenario : Scenario
        A validated scenario.
    rng : RandomSource
        Uniform source driving every draw.
    trials : int | None
        Number of trials; defaults to ``scenario.simulation.simulation_count``.

    Returns
    -------
    dict[str, TrialData]
        Item id → totals of shape ``(trials,)`` plus one subtotal array per
        period, in timeline order.
    """
    sim = scenario.simulation
    n_trials = sim.simulation_count if trials is None else trials

    profiles = normalize_profiles(scenario.profiles)
    env_factor = compute_environmental_factor(scenario.event)
    allocation = allocate_attendees(sim.attendees, profiles)

    logger.debug(
        "Sampling %d trials: %d items × %d periods, env factor %.3f, allocation %s",
        n_trials, len(scenario.items), len(scenario.time_periods), env_factor, allocation,
    )

    results: dict[str, TrialData] = {}
    for item in scenario.items:
        data = TrialData(totals=np.zeros(n_trials, dtype=np.float64))
        for period in scenario.time_periods:
            period_totals = sample_period_consumption(
                allocation, profiles, item.category, period,
                env_factor, rng, n_trials, sim.sampling,
            )
            data.periods[period.name] = period_totals
            data.totals += period_totals
        results[item.id] = data

    return results


def _finish(scenario: Scenario, raw: dict[str, TrialData]) -> dict[str, ItemSimulationResult]:
    """Propagation barrier + analysis, shared by both entry points."""
    sim = scenario.simulation
    adjusted = propagate_complementary_demand(
        raw, scenario.items, scenario.relationships, sim.relationship_rules,
    )
    return analyze_results(adjusted, scenario.items, scenario.time_periods, sim.confidence_level)


# ═══════════════════════════════════════════════════════════════════════════
# Public entry points
# ═══════════════════════════════════════════════════════════════════════════

def run_simulation(
    scenario: Scenario,
    rng: RandomSource | None = None,
) -> dict[str, ItemSimulationResult]:
    """Run the full Monte-Carlo pipeline and return one result per item.

    ``rng`` defaults to a numpy source seeded from
    ``scenario.simulation.random_seed`` (``None`` → fresh entropy).

    Raises
    ------
    SimulationError
        Any configuration problem, detected before sampling starts.
    """
    validate_scenario(scenario)
    if rng is None:
        rng = NumpyRandomSource(scenario.simulation.random_seed)

    raw = run_trials(scenario, rng)
    results = _finish(scenario, raw)

    logger.info(
        "Simulated %d items over %d trials at %.0f%% confidence",
        len(results), scenario.simulation.simulation_count,
        scenario.simulation.confidence_level,
    )
    return results


simulate = run_simulation


def run_simulation_sharded(
    scenario: Scenario,
    shards: int = 4,
    max_workers: int | None = None,
) -> dict[str, ItemSimulationResult]:
    """Split the trials across threads and merge by concatenation.

    Trials are independent, so sharding changes only which random stream
    feeds which trial, never the distribution.  Each shard gets a child of
    ``SeedSequence(random_seed)``, so a seeded sharded run is reproducible
    for a fixed shard count.
    """
    validate_scenario(scenario)
    sim = scenario.simulation

    shards = max(1, min(shards, sim.simulation_count))
    base, extra = divmod(sim.simulation_count, shards)
    counts = [base + (1 if i < extra else 0) for i in range(shards)]
    children = np.random.SeedSequence(sim.random_seed).spawn(shards)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        parts = list(pool.map(
            lambda args: run_trials(scenario, NumpyRandomSource(args[0]), args[1]),
            zip(children, counts),
        ))

    merged: dict[str, TrialData] = {}
    for item in scenario.items:
        chunks = [part[item.id] for part in parts]
        merged[item.id] = TrialData(
            totals=np.concatenate([c.totals for c in chunks]),
            periods={
                period.name: np.concatenate([c.periods[period.name] for c in chunks])
                for period in scenario.time_periods
            },
        )

    logger.debug("Merged %d shards (%s trials each)", shards, counts)
    return _finish(scenario, merged)
