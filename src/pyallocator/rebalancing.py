"""Rebalancing actions between a current and a target allocation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping

from pyallocator.models import Allocation, Direction, RebalanceAction
from pyallocator.reference import AssetClass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImplementationPhase:
    """Step of the suggested rollout for a rebalance."""

    name: str
    window: str
    description: str


IMPLEMENTATION_PHASES: tuple[ImplementationPhase, ...] = (
    ImplementationPhase(
        "Phase 1: Immediate",
        "0-30 days",
        "Reduce overweight positions and increase cash for reallocation",
    ),
    ImplementationPhase(
        "Phase 2: Short-term",
        "1-3 months",
        "Gradually build positions in underweight asset classes",
    ),
    ImplementationPhase(
        "Phase 3: Ongoing",
        "quarterly",
        "Quarterly rebalancing to maintain target allocation",
    ),
)


def derive_actions(current: Allocation, optimized: Allocation) -> Dict[AssetClass, RebalanceAction]:
    """Return the move needed for every asset class to reach *optimized*.

    Example:
        >>> from pyallocator.models import Allocation
        >>> from pyallocator.rebalancing import derive_actions
        >>> actions = derive_actions(Allocation(60, 30, 5, 5), Allocation(70, 20, 8, 2))
        >>> actions[AssetClass.STOCKS].label
        'Increase 10.0%'
    """

    actions: Dict[AssetClass, RebalanceAction] = {}
    for asset in AssetClass:
        before = current[asset]
        after = optimized[asset]
        delta = after - before
        if delta > 0:
            direction = Direction.INCREASE
        elif delta < 0:
            direction = Direction.DECREASE
        else:
            direction = Direction.MAINTAIN
        actions[asset] = RebalanceAction(
            asset_class=asset,
            direction=direction,
            magnitude=abs(delta),
            current=before,
            target=after,
        )

    logger.debug(
        "Rebalance actions: %s",
        {asset.value: action.label for asset, action in actions.items()},
    )
    return actions


def _ranked(actions: Mapping[AssetClass, RebalanceAction], direction: Direction) -> list[AssetClass]:
    selected = [action for action in actions.values() if action.direction is direction]
    selected.sort(key=lambda action: action.magnitude, reverse=True)
    return [action.asset_class for action in selected]


def overweight(actions: Mapping[AssetClass, RebalanceAction]) -> list[AssetClass]:
    """Asset classes to trim, largest reduction first."""

    return _ranked(actions, Direction.DECREASE)


def underweight(actions: Mapping[AssetClass, RebalanceAction]) -> list[AssetClass]:
    """Asset classes to add to, largest increase first."""

    return _ranked(actions, Direction.INCREASE)


__all__ = [
    "IMPLEMENTATION_PHASES",
    "ImplementationPhase",
    "derive_actions",
    "overweight",
    "underweight",
]
