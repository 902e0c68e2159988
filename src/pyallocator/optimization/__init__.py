"""Optimisation helpers."""

from .optimizer import adjustment_factor, optimize
from .weights import rescale_to_percentages, round_half_up

__all__ = [
    "adjustment_factor",
    "optimize",
    "rescale_to_percentages",
    "round_half_up",
]
