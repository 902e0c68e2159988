"""Tests for the end-to-end allocation workflow."""

from __future__ import annotations

import pandas as pd
import pytest

from pyallocator.models import Allocation, Direction, InvalidAllocationError
from pyallocator.reference import AssetClass, RiskTolerance
from pyallocator.workflows import AllocationReport, analyse_allocation


def test_default_inputs_produce_full_report():
    report = analyse_allocation()

    assert isinstance(report, AllocationReport)
    assert report.risk_tolerance is RiskTolerance.MEDIUM
    assert report.current == Allocation(60, 30, 5, 5)
    assert report.optimized == Allocation(60, 30, 8, 2)
    assert len(report.projection) == 11
    assert report.projection[0].current_value == 100000
    assert report.actions[AssetClass.STOCKS].direction is Direction.MAINTAIN
    assert report.actions[AssetClass.ALTERNATIVES].direction is Direction.INCREASE
    assert report.exceeds_risk_ceiling is False


def test_projection_uses_metric_returns():
    report = analyse_allocation("medium", 8, {"stocks": 100, "bonds": 0, "alternatives": 0, "cash": 0}, horizon_years=2)

    assert [point.current_value for point in report.projection] == [100000, 110000, 121000]
    assert report.optimized_metrics.expected_return == pytest.approx(0.078)
    assert report.projection[1].optimized_value == 107800


def test_recommendations_skip_cash_and_empty_classes():
    report = analyse_allocation("high", 15)

    assert report.optimized[AssetClass.CASH] == 0
    assert set(report.recommendations) == {AssetClass.STOCKS, AssetClass.BONDS, AssetClass.ALTERNATIVES}
    assert report.recommendations[AssetClass.STOCKS][0].symbol == "VTI"


def test_risk_ceiling_flag():
    report = analyse_allocation("low", 15)

    assert report.optimized == Allocation(53, 6, 3, 38)
    assert report.optimized_metrics.risk > 0.08
    assert report.exceeds_risk_ceiling is True


def test_correct_rounding_override_is_forwarded():
    assert analyse_allocation("high", 15).optimized.total == 101
    assert analyse_allocation("high", 15, correct_rounding=True).optimized.total == 100


def test_invalid_current_allocation_fails_fast():
    with pytest.raises(InvalidAllocationError):
        analyse_allocation("medium", 8, {"stocks": 90, "bonds": 30, "alternatives": 5, "cash": 5})


def test_comparison_frame_and_summary():
    report = analyse_allocation()
    frame = report.comparison_frame()

    assert isinstance(frame, pd.DataFrame)
    assert list(frame.columns) == ["current", "optimized"]
    assert frame.loc["alternatives", "optimized"] == 8
    assert frame.loc["expected_return", "current"] == pytest.approx(0.0765)
    assert report.summary.startswith("medium @ 8%")


def test_repeated_runs_are_identical():
    first = analyse_allocation("low", 6, horizon_years=5, investment_amount=25000)
    second = analyse_allocation("low", 6, horizon_years=5, investment_amount=25000)
    assert first == second


def test_report_maps_are_read_only():
    report = analyse_allocation()

    with pytest.raises(TypeError):
        report.actions[AssetClass.CASH] = report.actions[AssetClass.STOCKS]
    with pytest.raises(TypeError):
        report.recommendations[AssetClass.CASH] = ()
