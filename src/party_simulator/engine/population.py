"""Profile normalization and attendee allocation.

Both functions are deterministic.  Rounding is half-up (``2.5 → 3``), not
Python's banker's rounding, so that the same inputs always split attendees
the same way regardless of which side of an even integer a share lands on.
"""

from __future__ import annotations

import logging
import math

from party_simulator.config.profiles import DrinkerProfile
from party_simulator.errors import InvalidProfileConfigurationError

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _largest_remainder(exact: list[float]) -> list[int]:
    """Integer shares summing to 100: floor each, then hand out the leftover
    points to the largest fractional parts (earlier profiles win ties)."""
    floors = [math.floor(x) for x in exact]
    leftover = 100 - sum(floors)
    by_fraction = sorted(range(len(exact)), key=lambda i: exact[i] - floors[i], reverse=True)
    for i in by_fraction[:leftover]:
        floors[i] += 1
    return floors


def normalize_profiles(profiles: list[DrinkerProfile]) -> list[DrinkerProfile]:
    """Rescale profile shares so they sum to exactly 100.

    Shares that already total 100 are returned unchanged (as copies).
    Otherwise every profile but the last is scaled by ``100 / total`` and
    rounded; the last profile absorbs the rounding drift so the result is
    exact.  A single profile always ends up with 100.  If the others round up
    past 100, every share is re-split by largest remainder so none goes
    negative.

    Raises
    ------
    InvalidProfileConfigurationError
        Empty list, a negative share, or shares summing to zero.
    """
    if not profiles:
        raise InvalidProfileConfigurationError("At least one profile is required")

    negative = [p.name for p in profiles if p.share_percent < 0]
    if negative:
        raise InvalidProfileConfigurationError(
            f"Profile shares must be non-negative (got negative share for {negative})"
        )

    total = sum(p.share_percent for p in profiles)
    if total <= 0:
        raise InvalidProfileConfigurationError("Profile shares sum to zero")

    if total == 100:
        return [p.model_copy() for p in profiles]

    scaled = [round_half_up(p.share_percent * 100 / total) for p in profiles[:-1]]
    scaled.append(100 - sum(scaled))
    if scaled[-1] < 0:
        scaled = _largest_remainder([p.share_percent * 100 / total for p in profiles])

    return [
        p.model_copy(update={"share_percent": float(share)})
        for p, share in zip(profiles, scaled)
    ]


def allocate_attendees(attendees: int, profiles: list[DrinkerProfile]) -> dict[str, int]:
    """Split ``attendees`` across profiles proportionally to their shares.

    Parameters
    ----------
    attendees : int
        Non-negative head count.
    profiles : list[DrinkerProfile]
        Normalized profiles (shares sum to 100).

    Returns
    -------
    dict[str, int]
        Profile name → head count, in profile order.  Every profile but the
        last gets ``round(share/100 × attendees)``; the last gets the
        remainder.  If rounding overshoots, the last profile is clamped to
        0 and the total exceeds ``attendees`` by the overshoot.
    """
    allocation: dict[str, int] = {}
    remaining = attendees

    for profile in profiles[:-1]:
        count = round_half_up(profile.share_percent / 100 * attendees)
        allocation[profile.name] = count
        remaining -= count

    if profiles:
        if remaining < 0:
            logger.warning(
                "Attendee allocation overshot by %d; clamping '%s' to 0",
                -remaining, profiles[-1].name,
            )
            remaining = 0
        allocation[profiles[-1].name] = remaining

    return allocation
