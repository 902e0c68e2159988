"""Helpers for post-processing candidate allocation weights."""

from __future__ import annotations

import math
from typing import Mapping, TypeVar

K = TypeVar("K")

ATOL: float = 1e-12


def round_half_up(value: float) -> int:
    """Round to the nearest integer, sending exact halves upwards."""

    return int(math.floor(value + 0.5))


def rescale_to_percentages(
    weights: Mapping[K, float],
    *,
    correct_rounding: bool = False,
) -> dict[K, int]:
    """Scale *weights* so they total 100 and round each to a whole percent.

    Args:
        weights: Mapping of asset identifiers to non-negative raw weights.
        correct_rounding: When ``True`` any residual left by rounding is
            added to the largest weight so the result sums to exactly 100.
            When ``False`` the rounded values may total 99 or 101.

    Returns:
        New dictionary of integer percentages in the input order.

    Raises:
        ValueError: If the input contains NaNs/Infs, negatives or no positive
            weight.
    """

    total_weight = 0.0
    for key, raw in weights.items():
        weight = float(raw)
        if math.isnan(weight) or math.isinf(weight):
            raise ValueError(f"Non-finite weight encountered for {key!r}.")
        if weight < 0.0:
            raise ValueError(f"Negative weight encountered for {key!r}.")
        total_weight += weight

    if total_weight <= ATOL:
        raise ValueError("At least one weight must be positive.")

    scale = 100.0 / total_weight
    rounded = {key: round_half_up(float(weight) * scale) for key, weight in weights.items()}

    residual = 100 - sum(rounded.values())
    if correct_rounding and residual:
        largest_key = max(rounded, key=rounded.__getitem__)
        rounded[largest_key] += residual

    return rounded


__all__ = ["rescale_to_percentages", "round_half_up"]
