"""Injectable uniform random source.

The sampler only ever asks for uniform draws in ``[0, 1)`` and builds its
normal variates itself (Box–Muller), so anything that satisfies
:class:`RandomSource` can drive a run: the numpy-backed default, or a
scripted sequence in tests.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np


class RandomSource(Protocol):
    """Produces uniform floats in ``[0, 1)``."""

    def uniform(self, size: tuple[int, ...]) -> np.ndarray:
        ...


class NumpyRandomSource:
    """Default source backed by ``numpy.random.Generator`` (PCG64).

    Parameters
    ----------
    seed : int | numpy.random.SeedSequence | None
        ``None`` draws fresh OS entropy (non-reproducible runs).
    """

    def __init__(self, seed: int | np.random.SeedSequence | None = None):
        self._rng = np.random.default_rng(seed)

    def uniform(self, size: tuple[int, ...]) -> np.ndarray:
        return self._rng.random(size)
