"""Blended goal-total probability cards and odds-band decisions."""

__version__ = "0.1.0"
