"""Central configuration utilities for pyallocator."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional

_DEFAULT_DATA_DIR = Path("data")
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AllocatorSettings:
    """Application-level settings with directory layout and behaviour toggles."""

    data_dir: Path = field(default_factory=lambda: _DEFAULT_DATA_DIR)
    export_dir: Path = field(init=False)
    log_dir: Path = field(default_factory=lambda: Path("logs"))
    log_level: str = "INFO"
    reference_path: Optional[Path] = None
    correct_rounding: bool = False

    def __post_init__(self) -> None:  # pragma: no cover - dataclass hook
        object.__setattr__(self, "data_dir", self.data_dir.resolve())
        object.__setattr__(self, "export_dir", self.data_dir / "exports")
        if self.reference_path is None:
            object.__setattr__(self, "reference_path", self.data_dir / "reference.json")

    def ensure_directories(self) -> None:
        """Create core directories if needed."""

        for directory in (self.data_dir, self.export_dir, self.log_dir):
            directory.mkdir(parents=True, exist_ok=True)


def _path_from_env(var_name: str, default: Optional[Path]) -> Optional[Path]:
    override = os.getenv(var_name)
    if not override:
        return default
    return Path(override).expanduser()


def _flag_from_env(var_name: str, default: bool) -> bool:
    override = os.getenv(var_name)
    if override is None or not override.strip():
        return default
    return override.strip().lower() in _TRUTHY


def build_settings(base_dir: Optional[Path] = None) -> AllocatorSettings:
    """Construct settings, honouring environment overrides where provided."""

    if base_dir is None:
        data_dir = _path_from_env("PYALLOCATOR_DATA_DIR", _DEFAULT_DATA_DIR)
    else:
        data_dir = base_dir

    log_dir = _path_from_env("PYALLOCATOR_LOG_DIR", Path("logs"))
    log_level = os.getenv("PYALLOCATOR_LOG_LEVEL", "INFO")
    reference_path = _path_from_env("PYALLOCATOR_REFERENCE_PATH", None)
    correct_rounding = _flag_from_env("PYALLOCATOR_CORRECT_ROUNDING", False)

    return AllocatorSettings(
        data_dir=data_dir,
        log_dir=log_dir,
        log_level=log_level,
        reference_path=reference_path,
        correct_rounding=correct_rounding,
    )


@lru_cache(maxsize=1)
def get_settings() -> AllocatorSettings:
    """Return a cached settings instance."""

    return build_settings()


__all__ = ["AllocatorSettings", "build_settings", "get_settings"]
