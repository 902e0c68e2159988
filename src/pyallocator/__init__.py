"""Public interface for pyallocator with minimal import side effects.

This module exposes the most common entry points while deferring heavier
imports (pandas, numpy) until the corresponding attribute is accessed.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

from .config import AllocatorSettings, build_settings, get_settings

_CONFIG_EXPORTS: tuple[str, ...] = (
    "AllocatorSettings",
    "build_settings",
    "get_settings",
)

_EXPORT_MAP: dict[str, tuple[str, str]] = {
    # Reference data
    "AssetClass": ("pyallocator.reference", "AssetClass"),
    "RiskTolerance": ("pyallocator.reference", "RiskTolerance"),
    "RiskProfile": ("pyallocator.reference", "RiskProfile"),
    "AssetClassStats": ("pyallocator.reference", "AssetClassStats"),
    "ReferenceData": ("pyallocator.reference", "ReferenceData"),
    "load_reference_data": ("pyallocator.reference", "load_reference_data"),
    # Data models
    "Allocation": ("pyallocator.models", "Allocation"),
    "InvalidAllocationError": ("pyallocator.models", "InvalidAllocationError"),
    "PortfolioMetrics": ("pyallocator.models", "PortfolioMetrics"),
    "ProjectionPoint": ("pyallocator.models", "ProjectionPoint"),
    "ProjectionSeries": ("pyallocator.models", "ProjectionSeries"),
    "RebalanceAction": ("pyallocator.models", "RebalanceAction"),
    # Engine
    "optimize": ("pyallocator.optimization", "optimize"),
    "compute_metrics": ("pyallocator.metrics", "compute_metrics"),
    "project_growth": ("pyallocator.visualization", "project_growth"),
    "derive_actions": ("pyallocator.rebalancing", "derive_actions"),
    # Workflows
    "AllocationReport": ("pyallocator.workflows", "AllocationReport"),
    "analyse_allocation": ("pyallocator.workflows", "analyse_allocation"),
}

__all__ = (*_CONFIG_EXPORTS, *_EXPORT_MAP)


def __getattr__(name: str) -> Any:  # pragma: no cover - thin dynamic dispatch
    """Resolve lazily exported attributes on first access and cache them."""

    try:
        module_name, attr_name = _EXPORT_MAP[name]
    except KeyError as error:
        available = ", ".join(sorted(__all__))
        message = (
            f"module 'pyallocator' has no attribute {name!r}. "
            f"Available exports: {available}"
        )
        raise AttributeError(message) from error

    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:  # pragma: no cover - proxy to improve discoverability
    """Surface lazily loaded attributes during interactive exploration tools."""

    return sorted({*globals(), *__all__})


if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from pyallocator.metrics import compute_metrics  # noqa: F401
    from pyallocator.models import (  # noqa: F401
        Allocation,
        InvalidAllocationError,
        PortfolioMetrics,
        ProjectionPoint,
        ProjectionSeries,
        RebalanceAction,
    )
    from pyallocator.optimization import optimize  # noqa: F401
    from pyallocator.rebalancing import derive_actions  # noqa: F401
    from pyallocator.reference import (  # noqa: F401
        AssetClass,
        AssetClassStats,
        ReferenceData,
        RiskProfile,
        RiskTolerance,
        load_reference_data,
    )
    from pyallocator.visualization import project_growth  # noqa: F401
    from pyallocator.workflows import AllocationReport, analyse_allocation  # noqa: F401
