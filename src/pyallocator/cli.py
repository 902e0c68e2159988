"""Command line interface for pyallocator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from pyallocator.logging_utils import configure_logging
from pyallocator.models import InvalidAllocationError, ProjectionSeries
from pyallocator.reference import AssetClass, RiskTolerance, get_reference_data
from pyallocator.visualization import plot_projection, project_growth
from pyallocator.visualization import utils as viz_utils
from pyallocator.workflows import AllocationReport, analyse_allocation


def _print_projection_totals(series: ProjectionSeries) -> None:
    final = series.final_point()
    print(f"Value after {final.year} years:")
    print(f"  Current portfolio:   ${final.current_value:,}")
    print(f"  Optimized portfolio: ${final.optimized_value:,}")


def _print_report(report: AllocationReport) -> None:
    """Print the metric comparison and rebalancing actions."""

    print(f"Risk tolerance: {report.risk_tolerance.value}, desired return {report.desired_return_pct:g}%")
    print("Allocation (current -> optimized):")
    for asset in AssetClass:
        action = report.actions[asset]
        print(f"  {asset.value:<13}{action.current:>6g}% -> {action.target:>6g}%  {action.label}")

    current, optimized = report.current_metrics, report.optimized_metrics
    print(f"Expected return: {current.expected_return:.1%} -> {optimized.expected_return:.1%}")
    print(f"Risk level:      {current.risk:.1%} -> {optimized.risk:.1%}")
    print(f"Sharpe ratio:    {current.sharpe_ratio:.2f} -> {optimized.sharpe_ratio:.2f}")
    if report.exceeds_risk_ceiling:
        print("Warning: optimized risk exceeds the profile's risk ceiling.")
    _print_projection_totals(report.projection)


def _export_projection(args: argparse.Namespace, series: ProjectionSeries) -> None:
    if args.output:
        output_path = Path(args.output).expanduser()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        series.as_frame().to_csv(output_path)
        print(f"Projection saved to {output_path}")

    if args.plot:
        ax = plot_projection(series)
        plot_path = Path(args.plot).expanduser()
        plot_path.parent.mkdir(parents=True, exist_ok=True)
        ax.figure.savefig(plot_path)
        print(f"Plot saved to {plot_path}")
        if args.show:
            viz_utils.require_matplotlib().show()
        else:
            ax.figure.clf()


def _handle_analyse(args: argparse.Namespace) -> int:
    if args.log_dir:
        configure_logging(Path(args.log_dir))

    current = dict(zip((asset.value for asset in AssetClass), args.current))
    try:
        report = analyse_allocation(
            args.risk,
            args.desired_return,
            current,
            horizon_years=args.horizon,
            investment_amount=args.amount,
            correct_rounding=True if args.correct_rounding else None,
        )
    except InvalidAllocationError as exc:
        print(f"Invalid current allocation: {exc}")
        return 1
    except ValueError as exc:
        print(f"Unable to analyse allocation: {exc}")
        return 1

    _print_report(report)
    _export_projection(args, report.projection)
    return 0


def _handle_project(args: argparse.Namespace) -> int:
    try:
        series = project_growth(args.amount, args.horizon, args.current_rate, args.optimized_rate)
    except ValueError as exc:
        print(f"Unable to project growth: {exc}")
        return 1

    _print_projection_totals(series)
    _export_projection(args, series)
    return 0


def _handle_profiles(_args: argparse.Namespace) -> int:
    try:
        reference = get_reference_data()
    except ValueError as exc:
        print(f"Unable to load reference data: {exc}")
        return 1

    print("Risk profiles:")
    for tolerance in RiskTolerance:
        profile = reference.profile_for(tolerance)
        weights = "/".join(f"{value:g}" for value in profile.baseline().values())
        print(
            f"  {tolerance.value:<7}{weights:<14}"
            f"target {profile.target_return:.1%}, max risk {profile.max_risk:.1%}"
        )
    print("Asset classes:")
    for asset in AssetClass:
        stats = reference.stats_for(asset)
        print(f"  {asset.value:<13}return {stats.expected_return:.1%}, risk {stats.risk:.1%}")
    print(f"Risk-free rate: {reference.risk_free_rate:.1%}")
    return 0


def _add_export_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--output", help="Optional path to save the projection as CSV.")
    parser.add_argument("--plot", help="Optional path to save the growth chart.")
    parser.add_argument("--show", action="store_true", help="Display the chart interactively.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyallocator",
        description="Asset allocation recommendations, metrics and growth projections.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # analyse
    analyse = subparsers.add_parser(
        "analyse",
        help="Recommend an allocation and compare it with the current one.",
    )
    analyse.add_argument(
        "--risk",
        choices=[tolerance.value for tolerance in RiskTolerance],
        default=RiskTolerance.MEDIUM.value,
        help="Risk tolerance (default: medium).",
    )
    analyse.add_argument(
        "--return",
        dest="desired_return",
        type=float,
        default=8.0,
        help="Desired annual return in percent, nominally 3-15 (default: 8).",
    )
    analyse.add_argument("--horizon", type=int, default=10, help="Projection horizon in years (default: 10).")
    analyse.add_argument("--amount", type=float, default=100000.0, help="Investment amount (default: 100000).")
    analyse.add_argument(
        "--current",
        nargs=4,
        type=float,
        default=[60.0, 30.0, 5.0, 5.0],
        metavar=("STOCKS", "BONDS", "ALTERNATIVES", "CASH"),
        help="Current allocation percentages (default: 60 30 5 5).",
    )
    analyse.add_argument(
        "--correct-rounding",
        action="store_true",
        help="Force the recommended allocation to sum to exactly 100.",
    )
    analyse.add_argument("--log-dir", type=Path, help="Optional logging directory.")
    _add_export_arguments(analyse)

    # project
    project = subparsers.add_parser(
        "project",
        help="Project growth of an investment under two annual return rates.",
    )
    project.add_argument("--amount", type=float, default=100000.0, help="Initial investment (default: 100000).")
    project.add_argument("--horizon", type=int, default=10, help="Number of years (default: 10).")
    project.add_argument("--current-rate", type=float, required=True, help="Current annual return as a decimal.")
    project.add_argument("--optimized-rate", type=float, required=True, help="Optimized annual return as a decimal.")
    _add_export_arguments(project)

    # profiles
    subparsers.add_parser("profiles", help="List the reference risk profiles and asset statistics.")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point used by ``python -m pyallocator.cli`` and console scripts."""

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "analyse":
        return _handle_analyse(args)
    if args.command == "project":
        return _handle_project(args)
    if args.command == "profiles":
        return _handle_profiles(args)

    parser.print_help()
    return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
