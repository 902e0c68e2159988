"""Tests for logging configuration helpers."""

from __future__ import annotations

import logging

from pyallocator import logging_utils


def test_configure_logging_uses_target_directory(tmp_path, monkeypatch):
    records: dict[str, object] = {}

    def fake_basicConfig(**kwargs):
        records.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basicConfig)

    log_path = logging_utils.configure_logging(log_dir=tmp_path, level="debug")

    assert log_path.parent == tmp_path
    assert log_path.name.startswith("pyallocator_")
    assert log_path.suffix == ".log"
    assert records.get("level") == "DEBUG"
    assert records.get("filename") == str(log_path)


def test_configure_logging_defaults_to_settings_level(tmp_path, monkeypatch):
    records: dict[str, object] = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: records.update(kwargs))
    monkeypatch.setenv("PYALLOCATOR_LOG_LEVEL", "warning")

    logging_utils.configure_logging(log_dir=tmp_path)

    assert records.get("level") == "WARNING"


def test_configure_logging_replaces_previous_handlers(tmp_path, monkeypatch):
    records: dict[str, object] = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: records.update(kwargs))

    logging_utils.configure_logging(log_dir=tmp_path / "runs", level="info")

    assert (tmp_path / "runs").is_dir()
    assert records.get("force") is True
    assert records.get("format") == logging_utils.LOG_FORMAT
