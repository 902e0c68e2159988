"""Data models for pyallocator."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Mapping, Sequence

import pandas as pd

from pyallocator.reference import AssetClass

# Four half-up-rounded integer weights can drift at most two points from 100.
SUM_TOLERANCE: float = 2.0


class InvalidAllocationError(ValueError):
    """Raised when allocation weights are malformed or do not add up to 100."""


@dataclass(frozen=True)
class Allocation:
    """Percentage split of funds across the four asset classes.

    Attributes are percentages (``60`` means 60%). Instances validate on
    construction and never change afterwards.

    Example:
        >>> from pyallocator.models import Allocation
        >>> allocation = Allocation(stocks=60, bonds=30, alternatives=5, cash=5)
        >>> allocation["stocks"]
        60
    """

    stocks: float
    bonds: float
    alternatives: float
    cash: float

    def __post_init__(self) -> None:
        for asset in AssetClass:
            value = getattr(self, asset.value)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidAllocationError(f"Weight for {asset.value!r} must be numeric, got {value!r}.")
            if math.isnan(value) or math.isinf(value):
                raise InvalidAllocationError(f"Non-finite weight encountered for {asset.value!r}.")
            if value < 0:
                raise InvalidAllocationError(f"Weight for {asset.value!r} must be non-negative, got {value}.")

        total = self.total
        if abs(total - 100.0) > SUM_TOLERANCE:
            raise InvalidAllocationError(f"Allocation weights must sum to 100, got {total:g}.")

    @classmethod
    def from_mapping(cls, weights: Mapping[AssetClass | str, float]) -> "Allocation":
        """Build an allocation from a mapping keyed by asset class or its name."""

        resolved: dict[AssetClass, float] = {}
        for key, value in weights.items():
            try:
                asset = AssetClass.parse(key)
            except ValueError as exc:
                raise InvalidAllocationError(str(exc)) from exc
            if asset in resolved:
                raise InvalidAllocationError(f"Duplicate weight supplied for {asset.value!r}.")
            resolved[asset] = value

        missing = [asset.value for asset in AssetClass if asset not in resolved]
        if missing:
            raise InvalidAllocationError(f"Missing weights for: {', '.join(missing)}")

        return cls(**{asset.value: value for asset, value in resolved.items()})

    def __getitem__(self, asset: AssetClass | str) -> float:
        return getattr(self, AssetClass.parse(asset).value)

    @property
    def total(self) -> float:
        return math.fsum(getattr(self, asset.value) for asset in AssetClass)

    def as_dict(self) -> Dict[str, float]:
        """Return the weights keyed by asset class name."""

        return {asset.value: getattr(self, asset.value) for asset in AssetClass}

    def non_zero(self) -> Dict[str, float]:
        """Return weights greater than zero."""

        return {name: weight for name, weight in self.as_dict().items() if weight > 0}

    def as_series(self) -> pd.Series:
        """Return the weights as a pandas Series."""

        return pd.Series(self.as_dict(), name="weight", dtype=float)


@dataclass(frozen=True)
class PortfolioMetrics:
    """Expected return, risk and Sharpe ratio of an allocation.

    ``sharpe_ratio`` is signed infinity when risk is zero and the excess
    return is not; see :func:`pyallocator.metrics.sharpe_ratio`.
    """

    expected_return: float
    risk: float
    sharpe_ratio: float

    @property
    def is_sharpe_finite(self) -> bool:
        return math.isfinite(self.sharpe_ratio)

    def as_dict(self) -> Dict[str, float]:
        return {
            "expected_return": self.expected_return,
            "risk": self.risk,
            "sharpe_ratio": self.sharpe_ratio,
        }

    @property
    def summary(self) -> str:
        """Return a human-readable summary of key metrics."""

        return (
            f"expected {self.expected_return:.1%}, "
            f"risk {self.risk:.1%}, "
            f"sharpe {self.sharpe_ratio:.2f}"
        )


@dataclass(frozen=True)
class ProjectionPoint:
    """Projected current and optimized portfolio values at a given year."""

    year: int
    current_value: int
    optimized_value: int


@dataclass(frozen=True)
class ProjectionSeries(Sequence[ProjectionPoint]):
    """Materialised year-by-year growth projection starting at year zero."""

    points: tuple[ProjectionPoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, index):  # type: ignore[override]
        return self.points[index]

    def __iter__(self) -> Iterator[ProjectionPoint]:
        return iter(self.points)

    @property
    def horizon_years(self) -> int:
        return len(self.points) - 1

    def final_point(self) -> ProjectionPoint:
        return self.points[-1]

    def as_frame(self) -> pd.DataFrame:
        """Return the projection as a DataFrame indexed by year."""

        frame = pd.DataFrame(
            {
                "year": [point.year for point in self.points],
                "current": [point.current_value for point in self.points],
                "optimized": [point.optimized_value for point in self.points],
            }
        )
        return frame.set_index("year")


class Direction(str, Enum):
    """Rebalancing direction for a single asset class."""

    INCREASE = "increase"
    DECREASE = "decrease"
    MAINTAIN = "maintain"


@dataclass(frozen=True)
class RebalanceAction:
    """Move required to bring one asset class from its current to its target weight."""

    asset_class: AssetClass
    direction: Direction
    magnitude: float
    current: float
    target: float

    @property
    def label(self) -> str:
        return f"{self.direction.value.capitalize()} {self.magnitude:.1f}%"


__all__ = [
    "Allocation",
    "Direction",
    "InvalidAllocationError",
    "PortfolioMetrics",
    "ProjectionPoint",
    "ProjectionSeries",
    "RebalanceAction",
    "SUM_TOLERANCE",
]
