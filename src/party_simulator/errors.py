"""Explicit failure kinds raised by the simulation engine.

Every error derives from :class:`SimulationError` (itself a ``ValueError``) so
hosts can catch the whole family in one place.  The engine validates a
``Scenario`` once before sampling and fails the whole run on the first
violation; it never returns partial or NaN-laden results.
"""

from __future__ import annotations


class SimulationError(ValueError):
    """Base class for all engine failures."""


class InvalidProfileConfigurationError(SimulationError):
    """Profile shares are missing, negative, or sum to zero."""


class EmptyItemSetError(SimulationError):
    """No purchasable items were supplied."""


class EmptyTimelineSetError(SimulationError):
    """No time periods were supplied."""


class InvalidTimelineError(SimulationError):
    """Period durations do not sum to 100 or period names repeat."""


class DivisionByZeroError(SimulationError):
    """An item has ``servings_per_unit <= 0``."""


class InvalidConfidenceLevelError(SimulationError):
    """Confidence level outside (0, 100]."""


class InvalidSimulationCountError(SimulationError):
    """Simulation count is not a positive integer."""


class InvalidAttendeeCountError(SimulationError):
    """Attendee count below one."""


class DuplicateIdentifierError(SimulationError):
    """Two items share the same ``id``."""


class EmptyDatasetError(SimulationError):
    """Statistics requested over zero trials."""
