"""Shared pytest fixtures for deterministic allocation data."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pyallocator import config, reference
from pyallocator.models import Allocation


@pytest.fixture(autouse=True)
def clear_cached_state(monkeypatch):
    """Isolate tests from developer environment overrides and cached settings."""

    for var in (
        "PYALLOCATOR_DATA_DIR",
        "PYALLOCATOR_LOG_DIR",
        "PYALLOCATOR_LOG_LEVEL",
        "PYALLOCATOR_REFERENCE_PATH",
        "PYALLOCATOR_CORRECT_ROUNDING",
    ):
        monkeypatch.delenv(var, raising=False)
    config.get_settings.cache_clear()
    reference.get_reference_data.cache_clear()
    yield
    config.get_settings.cache_clear()
    reference.get_reference_data.cache_clear()


@pytest.fixture()
def current_allocation() -> Allocation:
    """Return the default allocation an investor starts from."""

    return Allocation(stocks=60, bonds=30, alternatives=5, cash=5)


@pytest.fixture()
def write_reference(tmp_path: Path):
    """Factory fixture writing a reference-data JSON document under tmp_path."""

    def _factory(payload: object, name: str = "reference.json") -> Path:
        target = tmp_path / name
        if isinstance(payload, str):
            target.write_text(payload, encoding="utf-8")
        else:
            target.write_text(json.dumps(payload), encoding="utf-8")
        return target

    return _factory
