"""Statistical analyzer — trial arrays → purchase recommendation.

The recommendation is a rank-based percentile: the element at index
``floor(confidence/100 × n)`` of the sorted trial totals, with no
interpolation.  Stockout risk is reported as ``100 − confidence`` (a property
of the chosen percentile), not as an empirical exceedance rate.
"""

from __future__ import annotations

import math

import numpy as np

from party_simulator.config.catalog import PurchasableItem
from party_simulator.config.event import TimePeriod
from party_simulator.errors import DivisionByZeroError, EmptyDatasetError
from party_simulator.models.results import (
    DistributionBin,
    ItemSimulationResult,
    TimelinePoint,
    TrialData,
)

MIN_BINS = 10
MAX_BINS = 15
SERVINGS_PER_BIN = 5


def percentile_index(confidence_level: float, n: int) -> int:
    """Rank of the recommended trial in an ascending array of length ``n``.

    Confidence 100 would index one past the end; it maps to the maximum.
    """
    return min(n - 1, math.floor(confidence_level / 100 * n))


def median_of_sorted(data: np.ndarray) -> float:
    n = len(data)
    mid = n // 2
    if n % 2 == 0:
        return float((data[mid - 1] + data[mid]) / 2)
    return float(data[mid])


def build_distribution(sorted_data: np.ndarray, recommended: float) -> list[DistributionBin]:
    """Histogram of trial totals with 10–15 evenly spaced bins.

    Bins span ``floor(min)`` to ``ceil(max)``; the last bin also collects the
    maximum.  When every trial lands on the same integer the range is widened
    to one serving so bins have non-zero width.
    """
    if len(sorted_data) == 0:
        return []

    lo = math.floor(sorted_data[0])
    hi = math.ceil(sorted_data[-1])
    if hi == lo:
        hi = lo + 1

    bin_count = min(MAX_BINS, max(MIN_BINS, math.ceil((hi - lo) / SERVINGS_PER_BIN)))
    bin_size = (hi - lo) / bin_count

    indices = np.minimum(
        bin_count - 1,
        np.floor((sorted_data - lo) / bin_size).astype(np.int64),
    )
    counts = np.bincount(indices, minlength=bin_count)

    bins: list[DistributionBin] = []
    for i in range(bin_count):
        bin_min = lo + i * bin_size
        bin_max = lo + (i + 1) * bin_size
        bins.append(DistributionBin(
            min=bin_min,
            max=bin_max,
            count=int(counts[i]),
            contains_recommendation=bin_min <= recommended < bin_max,
        ))
    return bins


def build_timeline(
    periods: dict[str, np.ndarray],
    time_periods: list[TimePeriod],
    recommended: float,
) -> list[TimelinePoint]:
    """Mean consumption per period, in timeline order, as a share of the recommendation."""
    timeline: list[TimelinePoint] = []
    for period in time_periods:
        data = periods.get(period.name)
        if data is None or len(data) == 0:
            continue
        mean_servings = float(data.mean())
        timeline.append(TimelinePoint(
            period_name=period.name,
            mean_servings=mean_servings,
            percentage_of_total=mean_servings / recommended * 100 if recommended > 0 else 0.0,
        ))
    return timeline


def analyze_item(
    item: PurchasableItem,
    data: TrialData,
    time_periods: list[TimePeriod],
    confidence_level: float,
) -> ItemSimulationResult:
    """Summarize one item's adjusted trial totals.

    Raises
    ------
    EmptyDatasetError
        No trials were recorded.
    DivisionByZeroError
        ``item.servings_per_unit <= 0``.
    """
    n = len(data.totals)
    if n == 0:
        raise EmptyDatasetError(f"No trials recorded for item '{item.id}'")
    if item.servings_per_unit <= 0:
        raise DivisionByZeroError(
            f"Item '{item.id}' has servings_per_unit={item.servings_per_unit}; must be > 0"
        )

    sorted_totals = np.sort(data.totals)

    recommended = float(sorted_totals[percentile_index(confidence_level, n)])
    recommended_units = math.ceil(recommended / item.servings_per_unit)

    return ItemSimulationResult(
        item_id=item.id,
        mean=float(sorted_totals.mean()),
        median=median_of_sorted(sorted_totals),
        min=float(sorted_totals[0]),
        max=float(sorted_totals[-1]),
        recommended_servings=recommended,
        recommended_units=recommended_units,
        total_cost=recommended_units * item.unit_cost,
        stockout_risk=100 - confidence_level,
        distribution=build_distribution(sorted_totals, recommended),
        timeline=build_timeline(data.periods, time_periods, recommended),
    )


def analyze_results(
    trials: dict[str, TrialData],
    items: list[PurchasableItem],
    time_periods: list[TimePeriod],
    confidence_level: float,
) -> dict[str, ItemSimulationResult]:
    """Analyze every item, keyed by item id in catalog order."""
    return {
        item.id: analyze_item(item, trials[item.id], time_periods, confidence_level)
        for item in items
    }
