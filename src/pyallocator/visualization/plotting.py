"""Plotting helpers for allocation comparisons."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import pandas as pd

from pyallocator.models import Allocation

from .utils import require_matplotlib

if TYPE_CHECKING:  # pragma: no cover
    from matplotlib.axes import Axes


def allocation_frame(current: Allocation, optimized: Allocation) -> pd.DataFrame:
    """Return both allocations side by side, one row per asset class."""

    frame = pd.DataFrame(
        {
            "Current": current.as_series(),
            "Optimized": optimized.as_series(),
        }
    )
    frame.index = [str(name).capitalize() for name in frame.index]
    frame.index.name = "Asset Class"
    return frame


def plot_allocation_comparison(
    current: Allocation,
    optimized: Allocation,
    ax: Optional["Axes"] = None,
    *,
    show: bool = False,
) -> "Axes":
    """Plot the current and optimized allocations as grouped bars."""

    plt = require_matplotlib()

    # Lazily import seaborn to avoid hard dependency during package import.
    import seaborn as sns

    sns.set_style("whitegrid")

    frame = allocation_frame(current, optimized)
    axis = ax or plt.gca()
    frame.plot(kind="bar", ax=axis, rot=0)

    axis.set_xlabel("Asset Class")
    axis.set_ylabel("Allocation (%)")
    axis.set_title("Current vs Optimized Allocation")
    axis.legend()

    if show:
        plt.show()

    return axis


__all__ = ["allocation_frame", "plot_allocation_comparison"]
