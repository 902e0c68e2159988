"""Static reference tables used by the allocation engine.

The tables hold the per-asset-class return/risk assumptions, the three
baseline risk profiles and the risk-free rate. Built-in defaults can be
partially overridden with a JSON document so the assumptions stay tunable
without code changes. A separate instrument catalogue describes example
funds for each bucket; the engine never reads it for computation.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from enum import Enum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, MutableMapping

from pyallocator.config import get_settings

logger = logging.getLogger(__name__)


class AssetClass(str, Enum):
    """Closed set of asset classes an allocation is spread across."""

    STOCKS = "stocks"
    BONDS = "bonds"
    ALTERNATIVES = "alternatives"
    CASH = "cash"

    @classmethod
    def parse(cls, value: "AssetClass | str") -> "AssetClass":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown asset class {value!r}; expected one of: {valid}") from exc


class RiskTolerance(str, Enum):
    """Investor-selected risk category."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: "RiskTolerance | str") -> "RiskTolerance":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown risk tolerance {value!r}; expected one of: {valid}") from exc


@dataclass(frozen=True)
class AssetClassStats:
    """Expected annual return and volatility of an asset class."""

    expected_return: float
    risk: float


@dataclass(frozen=True)
class RiskProfile:
    """Baseline allocation (in percent) with its return target and risk ceiling."""

    name: RiskTolerance
    stocks: float
    bonds: float
    alternatives: float
    cash: float
    max_risk: float
    target_return: float

    def baseline(self) -> dict[AssetClass, float]:
        """Return the baseline weights keyed by asset class."""

        return {asset: getattr(self, asset.value) for asset in AssetClass}


@dataclass(frozen=True)
class Instrument:
    """Example fund used to implement an asset-class allocation."""

    symbol: str
    name: str
    risk: float
    expected_return: float
    category: str


@dataclass(frozen=True)
class ReferenceData:
    """Immutable bundle of the assumptions consumed by the engine."""

    asset_stats: Mapping[AssetClass, AssetClassStats]
    risk_profiles: Mapping[RiskTolerance, RiskProfile]
    risk_free_rate: float

    def stats_for(self, asset: AssetClass | str) -> AssetClassStats:
        return self.asset_stats[AssetClass.parse(asset)]

    def profile_for(self, tolerance: RiskTolerance | str) -> RiskProfile:
        return self.risk_profiles[RiskTolerance.parse(tolerance)]


RISK_FREE_RATE: float = 0.02

ASSET_CLASS_STATS: dict[AssetClass, AssetClassStats] = {
    AssetClass.STOCKS: AssetClassStats(expected_return=0.10, risk=0.16),
    AssetClass.BONDS: AssetClassStats(expected_return=0.04, risk=0.04),
    AssetClass.ALTERNATIVES: AssetClassStats(expected_return=0.07, risk=0.12),
    AssetClass.CASH: AssetClassStats(expected_return=0.02, risk=0.01),
}

RISK_PROFILES: dict[RiskTolerance, RiskProfile] = {
    RiskTolerance.LOW: RiskProfile(RiskTolerance.LOW, 30, 60, 5, 5, max_risk=0.08, target_return=0.05),
    RiskTolerance.MEDIUM: RiskProfile(RiskTolerance.MEDIUM, 60, 30, 8, 2, max_risk=0.12, target_return=0.08),
    RiskTolerance.HIGH: RiskProfile(RiskTolerance.HIGH, 80, 15, 5, 0, max_risk=0.18, target_return=0.12),
}

INSTRUMENT_CATALOGUE: dict[AssetClass, tuple[Instrument, ...]] = {
    AssetClass.STOCKS: (
        Instrument("VTI", "Total Stock Market ETF", 0.15, 0.10, "US Equity"),
        Instrument("VXUS", "International Stocks ETF", 0.18, 0.09, "International"),
        Instrument("QQQ", "Nasdaq 100 ETF", 0.22, 0.12, "Growth"),
        Instrument("VTV", "Value Stocks ETF", 0.16, 0.09, "Value"),
    ),
    AssetClass.BONDS: (
        Instrument("BND", "Total Bond Market ETF", 0.04, 0.04, "Government"),
        Instrument("VTEB", "Tax-Exempt Bond ETF", 0.05, 0.035, "Municipal"),
        Instrument("SCHZ", "Treasury ETF", 0.03, 0.035, "Treasury"),
    ),
    AssetClass.ALTERNATIVES: (
        Instrument("VNQ", "Real Estate ETF", 0.19, 0.08, "REITs"),
        Instrument("IAU", "Gold ETF", 0.16, 0.05, "Commodities"),
        Instrument("DBC", "Commodities ETF", 0.20, 0.06, "Commodities"),
    ),
    AssetClass.CASH: (),
}

DEFAULT_REFERENCE = ReferenceData(
    asset_stats=MappingProxyType(ASSET_CLASS_STATS),
    risk_profiles=MappingProxyType(RISK_PROFILES),
    risk_free_rate=RISK_FREE_RATE,
)


def instruments_for(asset: AssetClass | str) -> tuple[Instrument, ...]:
    """Return the catalogue entries for *asset* (empty for cash)."""

    return INSTRUMENT_CATALOGUE[AssetClass.parse(asset)]


def _as_float(value: Any, label: str, source: Path) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{label} must be numeric in reference data: {source}")
    return float(value)


def _merge_stats(payload: Any, source: Path) -> dict[AssetClass, AssetClassStats]:
    merged = dict(ASSET_CLASS_STATS)
    if not isinstance(payload, MutableMapping):
        raise ValueError(f"'asset_classes' must be an object: {source}")
    for key, row in payload.items():
        asset = AssetClass.parse(key)
        if not isinstance(row, MutableMapping):
            raise ValueError(f"Asset class {key!r} must map to an object: {source}")
        current = merged[asset]
        merged[asset] = AssetClassStats(
            expected_return=_as_float(row.get("expected_return", current.expected_return), f"{key}.expected_return", source),
            risk=_as_float(row.get("risk", current.risk), f"{key}.risk", source),
        )
    return merged


def _merge_profiles(payload: Any, source: Path) -> dict[RiskTolerance, RiskProfile]:
    merged = dict(RISK_PROFILES)
    if not isinstance(payload, MutableMapping):
        raise ValueError(f"'risk_profiles' must be an object: {source}")
    for key, row in payload.items():
        tolerance = RiskTolerance.parse(key)
        if not isinstance(row, MutableMapping):
            raise ValueError(f"Risk profile {key!r} must map to an object: {source}")
        updates = {
            field_name: _as_float(value, f"{key}.{field_name}", source)
            for field_name, value in row.items()
            if field_name in {"stocks", "bonds", "alternatives", "cash", "max_risk", "target_return"}
        }
        unknown = set(row) - set(updates)
        if unknown:
            raise ValueError(f"Unknown fields for risk profile {key!r}: {sorted(unknown)} ({source})")
        profile = replace(merged[tolerance], **updates)
        if profile.target_return <= 0:
            raise ValueError(f"{key}.target_return must be positive: {source}")
        merged[tolerance] = profile
    return merged


def load_reference_data(path: Path | str | None = None) -> ReferenceData:
    """Load reference assumptions, overlaying a JSON document on the defaults.

    The document may contain any of ``risk_free_rate``, ``asset_classes`` and
    ``risk_profiles``; rows or fields it omits keep their built-in values.
    When *path* is omitted the configured ``reference_path`` is used. A missing
    file yields :data:`DEFAULT_REFERENCE`.

    Raises:
        ValueError: If the document cannot be parsed or holds invalid rows.
    """

    settings = get_settings()
    candidate = Path(path or settings.reference_path).expanduser()
    if not candidate.exists():
        logger.debug("Reference data not found at %s; using defaults", candidate)
        return DEFAULT_REFERENCE

    try:
        payload = json.loads(candidate.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Unable to parse reference data: {candidate}") from exc

    if not isinstance(payload, MutableMapping):
        raise ValueError(f"Reference data must be an object: {candidate}")

    stats = _merge_stats(payload.get("asset_classes", {}), candidate)
    profiles = _merge_profiles(payload.get("risk_profiles", {}), candidate)
    risk_free = _as_float(payload.get("risk_free_rate", RISK_FREE_RATE), "risk_free_rate", candidate)

    logger.info("Loaded reference data overrides from %s", candidate)
    return ReferenceData(
        asset_stats=MappingProxyType(stats),
        risk_profiles=MappingProxyType(profiles),
        risk_free_rate=risk_free,
    )


@lru_cache(maxsize=1)
def get_reference_data() -> ReferenceData:
    """Return the cached reference data for the configured location."""

    return load_reference_data()


__all__ = [
    "ASSET_CLASS_STATS",
    "AssetClass",
    "AssetClassStats",
    "DEFAULT_REFERENCE",
    "INSTRUMENT_CATALOGUE",
    "Instrument",
    "RISK_FREE_RATE",
    "RISK_PROFILES",
    "ReferenceData",
    "RiskProfile",
    "RiskTolerance",
    "get_reference_data",
    "instruments_for",
    "load_reference_data",
]
