"""High-level workflow combining optimisation, metrics, projection and rebalancing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

import pandas as pd

from pyallocator.metrics import compute_metrics
from pyallocator.models import Allocation, PortfolioMetrics, ProjectionSeries, RebalanceAction
from pyallocator.optimization import optimize
from pyallocator.rebalancing import derive_actions
from pyallocator.reference import (
    AssetClass,
    Instrument,
    ReferenceData,
    RiskTolerance,
    get_reference_data,
    instruments_for,
)
from pyallocator.visualization import project_growth

logger = logging.getLogger(__name__)

DEFAULT_CURRENT_ALLOCATION = Allocation(stocks=60, bonds=30, alternatives=5, cash=5)


@dataclass(frozen=True)
class AllocationReport:
    """Everything derived from one set of investor inputs.

    Attributes:
        risk_tolerance: Risk category the recommendation was derived for.
        desired_return_pct: Requested annual return in percent.
        current: The investor's existing allocation.
        optimized: Recommended allocation.
        current_metrics: Metrics of the existing allocation.
        optimized_metrics: Metrics of the recommended allocation.
        projection: Growth of the investment under both expected returns.
        actions: Per-asset-class moves from *current* to *optimized*.
        recommendations: Example instruments for each asset class held in
            the recommended allocation.
        exceeds_risk_ceiling: Whether the recommended risk is above the
            profile's ``max_risk``.
    """

    risk_tolerance: RiskTolerance
    desired_return_pct: float
    current: Allocation
    optimized: Allocation
    current_metrics: PortfolioMetrics
    optimized_metrics: PortfolioMetrics
    projection: ProjectionSeries
    actions: Mapping[AssetClass, RebalanceAction]
    recommendations: Mapping[AssetClass, tuple[Instrument, ...]]
    exceeds_risk_ceiling: bool

    @property
    def summary(self) -> str:
        """Return a one-line comparison of the key metrics."""

        return (
            f"{self.risk_tolerance.value} @ {self.desired_return_pct:g}%: "
            f"current {self.current_metrics.summary}; "
            f"optimized {self.optimized_metrics.summary}"
        )

    def comparison_frame(self) -> pd.DataFrame:
        """Tabulate weights and metrics of both allocations side by side."""

        rows: dict[str, dict[str, float]] = {}
        for asset in AssetClass:
            rows[asset.value] = {"current": self.current[asset], "optimized": self.optimized[asset]}
        for name, value in self.current_metrics.as_dict().items():
            rows[name] = {"current": value, "optimized": self.optimized_metrics.as_dict()[name]}
        return pd.DataFrame.from_dict(rows, orient="index")


def _as_allocation(current: Allocation | Mapping[str, float]) -> Allocation:
    if isinstance(current, Allocation):
        return current
    return Allocation.from_mapping(current)


def analyse_allocation(
    risk_tolerance: RiskTolerance | str = RiskTolerance.MEDIUM,
    desired_return_pct: float = 8,
    current: Allocation | Mapping[str, float] = DEFAULT_CURRENT_ALLOCATION,
    *,
    horizon_years: int = 10,
    investment_amount: float = 100_000,
    reference: Optional[ReferenceData] = None,
    correct_rounding: Optional[bool] = None,
) -> AllocationReport:
    """Run the full recommendation pipeline for one set of inputs.

    Args:
        risk_tolerance: Risk category selecting the baseline profile.
        desired_return_pct: Desired annual return in percent.
        current: Existing allocation, either an :class:`Allocation` or a
            mapping of asset class name to percentage.
        horizon_years: Number of years to project growth over.
        investment_amount: Amount invested at year zero.
        reference: Optional reference tables; defaults to the configured ones.
        correct_rounding: Optional override for the optimizer's rounding mode.

    Returns:
        An :class:`AllocationReport` built fresh from the inputs.

    Raises:
        InvalidAllocationError: If *current* is malformed.
        ValueError: For an unknown risk tolerance or invalid projection inputs.

    Example:
        >>> from pyallocator.workflows import analyse_allocation
        >>> report = analyse_allocation("medium", 8)
        >>> report.optimized.as_dict()
        {'stocks': 60, 'bonds': 30, 'alternatives': 8, 'cash': 2}
    """

    reference = reference or get_reference_data()
    tolerance = RiskTolerance.parse(risk_tolerance)
    current_allocation = _as_allocation(current)

    optimized = optimize(
        tolerance,
        desired_return_pct,
        reference=reference,
        correct_rounding=correct_rounding,
    )
    current_metrics = compute_metrics(current_allocation, reference=reference)
    optimized_metrics = compute_metrics(optimized, reference=reference)
    projection = project_growth(
        investment_amount,
        horizon_years,
        current_metrics.expected_return,
        optimized_metrics.expected_return,
    )
    actions = derive_actions(current_allocation, optimized)
    recommendations = {
        asset: instruments_for(asset)
        for asset in AssetClass
        if optimized[asset] > 0 and instruments_for(asset)
    }

    profile = reference.profile_for(tolerance)
    exceeds = optimized_metrics.risk > profile.max_risk
    if exceeds:
        logger.info(
            "Optimised risk %.2f%% exceeds the %s profile ceiling of %.2f%%",
            optimized_metrics.risk * 100,
            tolerance.value,
            profile.max_risk * 100,
        )

    report = AllocationReport(
        risk_tolerance=tolerance,
        desired_return_pct=desired_return_pct,
        current=current_allocation,
        optimized=optimized,
        current_metrics=current_metrics,
        optimized_metrics=optimized_metrics,
        projection=projection,
        actions=MappingProxyType(actions),
        recommendations=MappingProxyType(recommendations),
        exceeds_risk_ceiling=exceeds,
    )
    logger.debug("Allocation report: %s", report.summary)
    return report


__all__ = ["AllocationReport", "DEFAULT_CURRENT_ALLOCATION", "analyse_allocation"]
