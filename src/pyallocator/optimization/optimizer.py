"""Heuristic allocation optimizer.

The optimizer scales a risk profile's baseline stock and bond weights by how
far the investor's desired return sits from the profile's target return,
clamps the results to fixed bands and renormalises the four weights to whole
percentages. It is a deterministic closed-form adjustment rather than a
mean-variance solver.
"""

from __future__ import annotations

import logging
from typing import Optional

from pyallocator.config import get_settings
from pyallocator.models import Allocation
from pyallocator.reference import AssetClass, ReferenceData, RiskTolerance, get_reference_data

from .weights import rescale_to_percentages

logger = logging.getLogger(__name__)

STOCK_BOUNDS: tuple[float, float] = (20.0, 90.0)
BOND_BOUNDS: tuple[float, float] = (10.0, 70.0)
ALTERNATIVE_BOUNDS: tuple[float, float] = (0.0, 20.0)

# Range the input controls offer; values outside it are still accepted.
DESIRED_RETURN_RANGE: tuple[float, float] = (3.0, 15.0)


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    lower, upper = bounds
    return min(upper, max(lower, value))


def adjustment_factor(
    risk_tolerance: RiskTolerance | str,
    desired_return_pct: float,
    *,
    reference: Optional[ReferenceData] = None,
) -> float:
    """Return the ratio of the desired return to the profile's target return."""

    reference = reference or get_reference_data()
    profile = reference.profile_for(risk_tolerance)
    return (desired_return_pct / 100.0) / profile.target_return


def optimize(
    risk_tolerance: RiskTolerance | str,
    desired_return_pct: float,
    *,
    reference: Optional[ReferenceData] = None,
    correct_rounding: Optional[bool] = None,
) -> Allocation:
    """Derive a recommended allocation for a risk tolerance and return goal.

    Args:
        risk_tolerance: ``"low"``, ``"medium"`` or ``"high"`` (or the enum).
        desired_return_pct: Desired annual return in percent, nominally 3-15.
        reference: Optional reference tables; defaults to the configured ones.
        correct_rounding: Override for the configured rounding behaviour. When
            false the rounded weights may total 99 or 101.

    Returns:
        A new :class:`~pyallocator.models.Allocation` of whole percentages.

    Raises:
        ValueError: If *risk_tolerance* is not a recognised category.

    Example:
        >>> from pyallocator.optimization import optimize
        >>> optimize("medium", 8).as_dict()
        {'stocks': 60, 'bonds': 30, 'alternatives': 8, 'cash': 2}
    """

    reference = reference or get_reference_data()
    tolerance = RiskTolerance.parse(risk_tolerance)
    profile = reference.profile_for(tolerance)
    if correct_rounding is None:
        correct_rounding = get_settings().correct_rounding

    low, high = DESIRED_RETURN_RANGE
    if not low <= desired_return_pct <= high:
        logger.debug(
            "Desired return %.2f%% outside the nominal %.0f-%.0f%% range",
            desired_return_pct,
            low,
            high,
        )

    factor = adjustment_factor(tolerance, desired_return_pct, reference=reference)
    raw_stocks = profile.stocks * factor
    raw_bonds = profile.bonds * (2 - factor)
    alternatives = _clamp(profile.alternatives, ALTERNATIVE_BOUNDS)

    # Cash absorbs whatever the unclamped stock and bond weights leave over.
    candidates = {
        AssetClass.STOCKS: _clamp(raw_stocks, STOCK_BOUNDS),
        AssetClass.BONDS: _clamp(raw_bonds, BOND_BOUNDS),
        AssetClass.ALTERNATIVES: alternatives,
        AssetClass.CASH: max(0.0, 100.0 - (raw_stocks + raw_bonds + profile.alternatives)),
    }

    weights = rescale_to_percentages(candidates, correct_rounding=correct_rounding)
    allocation = Allocation(**{asset.value: weight for asset, weight in weights.items()})
    logger.debug(
        "Optimised %s profile for %.2f%% (factor %.4f): %s",
        tolerance.value,
        desired_return_pct,
        factor,
        allocation.as_dict(),
    )
    return allocation


__all__ = [
    "ALTERNATIVE_BOUNDS",
    "BOND_BOUNDS",
    "DESIRED_RETURN_RANGE",
    "STOCK_BOUNDS",
    "adjustment_factor",
    "optimize",
]
