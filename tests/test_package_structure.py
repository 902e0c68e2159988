"""Smoke tests for the pyallocator package layout."""

import importlib

import pytest

pytest.importorskip("pandas")


@pytest.mark.parametrize(
    "module_name",
    [
        "pyallocator",
        "pyallocator.cli",
        "pyallocator.metrics",
        "pyallocator.models",
        "pyallocator.optimization.optimizer",
        "pyallocator.rebalancing",
        "pyallocator.reference",
        "pyallocator.visualization.plotting",
        "pyallocator.workflows",
    ],
)
def test_modules_importable(module_name: str) -> None:
    """Ensure the key package modules can be imported."""

    importlib.import_module(module_name)
