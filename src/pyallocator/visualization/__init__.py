"""Growth projection and visualisation helpers for pyallocator."""

from .plotting import allocation_frame, plot_allocation_comparison
from .projection import plot_projection, project_growth
from .utils import require_matplotlib

__all__ = [
    "allocation_frame",
    "plot_allocation_comparison",
    "plot_projection",
    "project_growth",
    "require_matplotlib",
]
