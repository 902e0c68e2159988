"""Tests for the heuristic allocation optimizer."""

from __future__ import annotations

import pytest

from pyallocator.models import Allocation
from pyallocator.optimization import adjustment_factor, optimize
from pyallocator.reference import DEFAULT_REFERENCE, RiskTolerance, load_reference_data

ALL_COMBINATIONS = [
    (tolerance, desired)
    for tolerance in RiskTolerance
    for desired in range(3, 16)
]


def test_medium_at_target_return_reproduces_baseline():
    assert optimize("medium", 8).as_dict() == {"stocks": 60, "bonds": 30, "alternatives": 8, "cash": 2}


def test_adjustment_factor_is_ratio_to_target():
    assert adjustment_factor("medium", 8) == pytest.approx(1.0)
    assert adjustment_factor("low", 10) == pytest.approx(2.0)
    assert adjustment_factor(RiskTolerance.HIGH, 6) == pytest.approx(0.5)


@pytest.mark.parametrize(("tolerance", "desired"), ALL_COMBINATIONS)
def test_weights_are_non_negative_integers_near_100(tolerance, desired):
    allocation = optimize(tolerance, desired)

    values = list(allocation.as_dict().values())
    assert all(isinstance(value, int) and value >= 0 for value in values)
    assert 99 <= sum(values) <= 101


@pytest.mark.parametrize(("tolerance", "desired"), ALL_COMBINATIONS)
def test_stock_weight_stays_within_band(tolerance, desired):
    stocks = optimize(tolerance, desired)["stocks"]
    assert 20 <= stocks <= 90


def test_rounding_drift_is_preserved_without_correction():
    allocation = optimize("high", 15, correct_rounding=False)

    assert allocation.as_dict() == {"stocks": 85, "bonds": 11, "alternatives": 5, "cash": 0}
    assert allocation.total == 101


def test_rounding_correction_adjusts_largest_weight():
    allocation = optimize("high", 15, correct_rounding=True)

    assert allocation.as_dict() == {"stocks": 84, "bonds": 11, "alternatives": 5, "cash": 0}
    assert allocation.total == 100


@pytest.mark.parametrize(("tolerance", "desired"), ALL_COMBINATIONS)
def test_corrected_allocations_sum_to_exactly_100(tolerance, desired):
    assert optimize(tolerance, desired, correct_rounding=True).total == 100


def test_rounding_correction_follows_settings(monkeypatch):
    monkeypatch.setenv("PYALLOCATOR_CORRECT_ROUNDING", "1")
    assert optimize("high", 15).total == 100


def test_cash_uses_unclamped_stock_and_bond_weights():
    # Stocks clamp up to 20 and bonds clamp down to 70, but cash sees 18 + 84 + 5.
    assert optimize("low", 3).as_dict() == {"stocks": 21, "bonds": 74, "alternatives": 5, "cash": 0}


def test_alternatives_are_not_scaled():
    # Stock and bond weights move while alternatives keep the baseline 8 before renormalising.
    assert optimize("medium", 12).as_dict() == {"stocks": 80, "bonds": 13, "alternatives": 7, "cash": 0}


def test_out_of_range_desired_return_is_accepted():
    for desired in (0, 40):
        allocation = optimize("medium", desired)
        assert 99 <= allocation.total <= 101
    assert optimize("medium", 40)["stocks"] == 83


def test_optimize_is_idempotent():
    assert optimize("low", 7) == optimize("low", 7)


def test_unknown_risk_tolerance_raises():
    with pytest.raises(ValueError):
        optimize("extreme", 8)


def test_optimize_honours_custom_reference(write_reference):
    reference = load_reference_data(write_reference({"risk_profiles": {"medium": {"target_return": 0.10}}}))

    assert optimize("medium", 10, reference=reference) == Allocation(60, 30, 8, 2)
    assert optimize("medium", 10, reference=DEFAULT_REFERENCE) != Allocation(60, 30, 8, 2)
