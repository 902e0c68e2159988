"""Tests for the pyallocator CLI."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from pyallocator import cli


def test_analyse_prints_comparison(capsys):
    exit_code = cli.main(["analyse", "--risk", "medium", "--return", "8", "--horizon", "2"])

    assert exit_code == 0
    output = capsys.readouterr().out
    assert "Risk tolerance: medium, desired return 8%" in output
    assert "Increase 3.0%" in output
    assert "Sharpe ratio:" in output
    assert "Value after 2 years:" in output


def test_analyse_rejects_invalid_current_allocation(capsys):
    exit_code = cli.main(["analyse", "--current", "90", "30", "5", "5"])

    assert exit_code == 1
    assert "Invalid current allocation" in capsys.readouterr().out


def test_analyse_warns_when_risk_ceiling_exceeded(capsys):
    assert cli.main(["analyse", "--risk", "low", "--return", "15"]) == 0
    assert "exceeds the profile's risk ceiling" in capsys.readouterr().out


def test_analyse_exports_projection_csv(tmp_path, capsys):
    output = tmp_path / "out" / "projection.csv"

    exit_code = cli.main(["analyse", "--horizon", "3", "--output", str(output)])

    assert exit_code == 0
    frame = pd.read_csv(output, index_col="year")
    assert list(frame.index) == [0, 1, 2, 3]
    assert frame.loc[0, "current"] == 100000
    assert "Projection saved" in capsys.readouterr().out


def test_analyse_configures_logging_when_requested(monkeypatch, tmp_path):
    seen: dict[str, Path] = {}
    monkeypatch.setattr(cli, "configure_logging", lambda path: seen.setdefault("path", path))

    assert cli.main(["analyse", "--log-dir", str(tmp_path)]) == 0
    assert seen["path"] == tmp_path


def test_project_subcommand_uses_plot(monkeypatch, tmp_path, capsys):
    saved: dict[str, Path] = {}

    def fake_plot(series):
        class _Axes:
            def __init__(self) -> None:
                self.figure = self

            def savefig(self, path):
                saved["path"] = Path(path)

            def clf(self):
                saved["cleared"] = True

        saved["points"] = len(series)
        return _Axes()

    monkeypatch.setattr(cli, "plot_projection", fake_plot)
    plot_path = tmp_path / "growth.png"

    exit_code = cli.main(
        [
            "project",
            "--amount",
            "100000",
            "--horizon",
            "2",
            "--current-rate",
            "0.10",
            "--optimized-rate",
            "0.10",
            "--plot",
            str(plot_path),
        ]
    )

    assert exit_code == 0
    assert saved["path"] == plot_path
    assert saved["points"] == 3
    assert saved["cleared"] is True
    output = capsys.readouterr().out
    assert "$121,000" in output
    assert "Plot saved" in output


def test_project_subcommand_reports_invalid_input(capsys):
    exit_code = cli.main(["project", "--amount", "0", "--current-rate", "0.05", "--optimized-rate", "0.06"])

    assert exit_code == 1
    assert "Unable to project growth" in capsys.readouterr().out


def test_profiles_subcommand_lists_reference_data(capsys):
    assert cli.main(["profiles"]) == 0

    output = capsys.readouterr().out
    assert "medium" in output
    assert "60/30/8/2" in output
    assert "Risk-free rate: 2.0%" in output


def test_profiles_subcommand_reports_malformed_reference(monkeypatch, tmp_path, capsys):
    reference_path = tmp_path / "reference.json"
    reference_path.write_text("{not json", encoding="utf-8")
    monkeypatch.setenv("PYALLOCATOR_REFERENCE_PATH", str(reference_path))

    exit_code = cli.main(["profiles"])

    assert exit_code == 1
    assert "Unable to load reference data" in capsys.readouterr().out
