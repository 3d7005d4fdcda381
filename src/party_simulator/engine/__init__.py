"""Engine — Monte-Carlo consumption simulation and planning helpers."""

from party_simulator.engine.population import allocate_attendees, normalize_profiles
from party_simulator.engine.environment import compute_environmental_factor
from party_simulator.engine.random_source import NumpyRandomSource, RandomSource
from party_simulator.engine.sampler import box_muller, period_base_rate, sample_period_consumption
from party_simulator.engine.relationships import RULES, RelationshipRule, propagate_complementary_demand
from party_simulator.engine.analysis import analyze_item, analyze_results
from party_simulator.engine.validation import validate_scenario
from party_simulator.engine.orchestrator import (
    run_simulation,
    run_simulation_sharded,
    run_trials,
    simulate,
)
from party_simulator.engine.food import build_food_scenario, run_food_simulation
from party_simulator.engine.planning import recommended_simulation_count, summarize_by_category
from party_simulator.engine.suggestions import (
    auto_suggest_relationships,
    find_ratio_shortfalls,
    optimal_quantities,
    suggest_complementary_items,
)

__all__ = [
    "allocate_attendees",
    "normalize_profiles",
    "compute_environmental_factor",
    "NumpyRandomSource",
    "RandomSource",
    "box_muller",
    "period_base_rate",
    "sample_period_consumption",
    "RULES",
    "RelationshipRule",
    "propagate_complementary_demand",
    "analyze_item",
    "analyze_results",
    "validate_scenario",
    "run_simulation",
    "run_simulation_sharded",
    "run_trials",
    "simulate",
    # Food special case
    "build_food_scenario",
    "run_food_simulation",
    # Planning helpers
    "recommended_simulation_count",
    "summarize_by_category",
    "auto_suggest_relationships",
    "find_ratio_shortfalls",
    "optimal_quantities",
    "suggest_complementary_items",
]
