"""Portfolio metrics for asset-class allocations.

Expected return is the weight-averaged asset-class return. Risk combines the
weighted asset-class volatilities as ``sqrt(sum((w * sigma) ** 2))``, which
ignores cross-asset covariance. The Sharpe ratio is measured against a fixed
risk-free rate taken from the reference data.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

import numpy as np

from pyallocator.models import Allocation, PortfolioMetrics
from pyallocator.reference import AssetClass, ReferenceData, get_reference_data

logger = logging.getLogger(__name__)


def _weight_vectors(
    allocation: Allocation,
    reference: ReferenceData,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return aligned arrays of fractional weights, returns and risks."""

    assets = list(AssetClass)
    weights = np.array([allocation[asset] for asset in assets], dtype=float) / 100.0
    returns = np.array([reference.stats_for(asset).expected_return for asset in assets], dtype=float)
    risks = np.array([reference.stats_for(asset).risk for asset in assets], dtype=float)
    return weights, returns, risks


def portfolio_return(allocation: Allocation, *, reference: Optional[ReferenceData] = None) -> float:
    """Return the weighted expected annual return as a decimal fraction.

    Example:
        >>> from pyallocator.models import Allocation
        >>> from pyallocator.metrics import portfolio_return
        >>> round(portfolio_return(Allocation(100, 0, 0, 0)), 4)
        0.1
    """

    weights, returns, _ = _weight_vectors(allocation, reference or get_reference_data())
    return float(np.sum(weights * returns))


def portfolio_risk(allocation: Allocation, *, reference: Optional[ReferenceData] = None) -> float:
    """Return the combined volatility of *allocation* as a decimal fraction."""

    weights, _, risks = _weight_vectors(allocation, reference or get_reference_data())
    return float(np.sqrt(np.sum(np.square(weights * risks))))


def sharpe_ratio(expected_return: float, risk: float, *, risk_free_rate: float) -> float:
    """Calculate the Sharpe ratio of a return/risk pair.

    Args:
        expected_return: Annual expected return as a decimal.
        risk: Annual volatility as a decimal.
        risk_free_rate: Annual risk-free rate as a decimal.

    Returns:
        ``(expected_return - risk_free_rate) / risk``. With zero risk the
        result is ``inf`` or ``-inf`` following the sign of the excess return,
        and ``0.0`` when the excess return is zero as well.
    """

    excess = expected_return - risk_free_rate
    if math.isclose(risk, 0.0, abs_tol=1e-15):
        if excess == 0:
            return 0.0
        logger.debug("Zero risk with excess return %.4f; Sharpe ratio is unbounded", excess)
        return math.copysign(math.inf, excess)
    return excess / risk


def compute_metrics(allocation: Allocation, *, reference: Optional[ReferenceData] = None) -> PortfolioMetrics:
    """Compute expected return, risk and Sharpe ratio for *allocation*.

    Example:
        >>> from pyallocator.models import Allocation
        >>> from pyallocator.metrics import compute_metrics
        >>> round(compute_metrics(Allocation(100, 0, 0, 0)).sharpe_ratio, 6)
        0.5
    """

    reference = reference or get_reference_data()
    expected = portfolio_return(allocation, reference=reference)
    risk = portfolio_risk(allocation, reference=reference)
    sharpe = sharpe_ratio(expected, risk, risk_free_rate=reference.risk_free_rate)
    return PortfolioMetrics(expected_return=expected, risk=risk, sharpe_ratio=sharpe)


__all__ = [
    "compute_metrics",
    "portfolio_return",
    "portfolio_risk",
    "sharpe_ratio",
]
