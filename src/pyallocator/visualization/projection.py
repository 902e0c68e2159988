"""Compound growth projections for current and optimized allocations."""

from __future__ import annotations

import logging
import math
import numbers
from typing import TYPE_CHECKING, Optional

import numpy as np

from pyallocator.models import ProjectionPoint, ProjectionSeries

from .utils import require_matplotlib

if TYPE_CHECKING:  # pragma: no cover - type checking aide
    import matplotlib.pyplot as plt

logger = logging.getLogger(__name__)


def _compound(initial_amount: float, rate: float, years: np.ndarray) -> list[int]:
    with np.errstate(over="ignore"):
        values = initial_amount * np.power(1.0 + rate, years)
    if not np.isfinite(values).all():
        raise ValueError("Projected values exceed the representable range")
    # Python ints keep arbitrarily large rounded values exact.
    return [int(math.floor(value + 0.5)) for value in values.tolist()]


def project_growth(
    initial_amount: float,
    horizon_years: int,
    current_annual_return: float,
    optimized_annual_return: float,
) -> ProjectionSeries:
    """Project the value of an investment under two annual return rates.

    Parameters
    ----------
    initial_amount:
        Amount invested at year zero. Must be greater than zero.
    horizon_years:
        Number of whole years to project; the series holds ``horizon_years + 1``
        points with year zero equal to *initial_amount*.
    current_annual_return, optimized_annual_return:
        Annual compound rates expressed as decimals (0.10 for 10%).

    Values are compounded annually with no contributions, fees or inflation
    and rounded to whole currency units.

    Raises ValueError for invalid inputs or when a projected value is too
    large to represent as a float.
    """

    if initial_amount <= 0:
        raise ValueError("initial_amount must be positive")
    if isinstance(horizon_years, bool) or not isinstance(horizon_years, numbers.Integral):
        raise ValueError("horizon_years must be an integer")
    if horizon_years < 0:
        raise ValueError("horizon_years must be non-negative")
    for label, rate in (("current_annual_return", current_annual_return), ("optimized_annual_return", optimized_annual_return)):
        if rate <= -1:
            raise ValueError(f"{label} must be greater than -100%")

    years = np.arange(int(horizon_years) + 1, dtype=float)
    current = _compound(initial_amount, current_annual_return, years)
    optimized = _compound(initial_amount, optimized_annual_return, years)

    points = tuple(
        ProjectionPoint(year=year, current_value=current_value, optimized_value=optimized_value)
        for year, current_value, optimized_value in zip(range(int(horizon_years) + 1), current, optimized)
    )
    logger.debug(
        "Projected %s over %d years: %d -> %d (current), %d (optimized)",
        initial_amount,
        horizon_years,
        points[0].current_value,
        points[-1].current_value,
        points[-1].optimized_value,
    )
    return ProjectionSeries(points=points)


def plot_projection(
    series: ProjectionSeries,
    *,
    ax: Optional["plt.Axes"] = None,
    show: bool = False,
    title: Optional[str] = None,
):
    """Plot current and optimized portfolio values over the projection horizon."""

    plt = require_matplotlib()
    if ax is None:
        _, ax = plt.subplots()

    years = [point.year for point in series]
    ax.plot(
        years,
        [point.current_value for point in series],
        label="Current Portfolio",
        linewidth=2,
    )
    ax.plot(
        years,
        [point.optimized_value for point in series],
        label="Optimized Portfolio",
        linewidth=2,
    )

    ax.set_xlabel("Year", fontweight="bold")
    ax.set_ylabel("Portfolio Value ($)", fontweight="bold")

    if title is None:
        title = "Growth Projection"
    ax.set_title(title, fontweight="bold")

    ax.legend()
    ax.grid(True)

    if show:
        plt.show()

    return ax


__all__ = ["plot_projection", "project_growth"]
