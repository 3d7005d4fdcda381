"""Party consumption simulator — Monte Carlo purchase planning for events."""

__version__ = "1.0.0"
