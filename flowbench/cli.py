"""Command-line interface for flowbench."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from flowbench.algorithms.types import Algorithm
from flowbench.benchmark import BenchmarkRecord, BenchmarkReport, run_benchmark
from flowbench.config import BenchmarkConfig, load_config
from flowbench.logging import get_logger, set_global_log_level

logger = get_logger(__name__)

_ALGORITHM_CHOICES = [a.value for a in Algorithm]


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = []
    for col_idx in range(len(headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _record_row(record: BenchmarkRecord) -> List[str]:
    return [
        Algorithm.parse(record.algorithm).label,
        f"{record.flow:,}",
        f"{record.time_ms:.3f} ms",
        f"{record.assignments:,}",
        f"{record.comparisons:,}",
    ]


def _print_report(report: BenchmarkReport) -> None:
    """Print one table per benchmarked graph."""
    headers = ["Algorithm", "Max Flow", "Time", "Assignments", "Comparisons"]
    for case in report.cases():
        records = report.for_case(case)
        first = records[0]
        print(
            f"\n📊 Graph {case}: {first.vertices} vertices, {first.edges} edges"
            f" ({first.density})"
        )
        print(_format_table(headers, [_record_row(r) for r in records]))

    if report.flows_agree():
        print("\n✅ All algorithms agree on every graph")
    else:
        print("\n⚠️  Algorithms disagree on at least one graph (see log)")


def _emit_results(
    report: BenchmarkReport, results: Optional[Path], stdout: bool
) -> None:
    json_str = json.dumps(report.to_dict(), indent=2, default=str)
    if results is not None:
        results.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Writing results to: {results}")
        results.write_text(json_str)
        print(f"✅ Results written to: {results}")
    if stdout:
        print(json_str)


def _build_config(
    config_path: Optional[Path],
    seed: Optional[int],
    algorithms: Optional[List[str]],
    no_fixed: bool,
    fixed_only: bool = False,
) -> BenchmarkConfig:
    config = load_config(config_path) if config_path else BenchmarkConfig()
    if seed is not None:
        config.seed = seed
    if algorithms:
        config.algorithms = [Algorithm.parse(a) for a in algorithms]
    if no_fixed:
        config.include_fixed = False
    if fixed_only:
        config.cases = []
    return config


def _run(
    config_path: Optional[Path],
    seed: Optional[int],
    algorithms: Optional[List[str]],
    no_fixed: bool,
    results: Optional[Path],
    stdout: bool,
    fixed_only: bool = False,
) -> None:
    """Run the benchmark and report it.

    Args:
        config_path: Optional YAML config; defaults apply when None.
        seed: Master seed overriding the config's.
        algorithms: Algorithm names overriding the config's.
        no_fixed: Skip the fixed reference graph.
        results: Optional JSON output path.
        stdout: Print the JSON results to stdout.
        fixed_only: Skip the random cases and run only the fixed graph.

    Exits with status 1 on a missing or invalid config and 2 when the
    algorithms disagree on any graph.
    """
    start = perf_counter()
    try:
        config = _build_config(
            config_path, seed, algorithms, no_fixed, fixed_only=fixed_only
        )
        report = run_benchmark(config)
        if not stdout:
            _print_report(report)
        _emit_results(report, results, stdout)
    except FileNotFoundError:
        logger.error(f"Config file not found: {config_path}")
        print(f"❌ ERROR: Config file not found: {config_path}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Failed to run benchmark: {e}")
        print(f"❌ ERROR: Failed to run benchmark: {e}")
        sys.exit(1)

    logger.info(f"Benchmark completed in {_format_duration(perf_counter() - start)}")
    if not report.flows_agree():
        sys.exit(2)


def _add_algorithms_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=_ALGORITHM_CHOICES,
        default=None,
        help="Algorithms to run (default: all three)",
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``flowbench`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="flowbench",
        description="Compare max-flow algorithms by flow, time and operation counts.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,fixed}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser(
        "run", help="Benchmark the fixed graph and random graphs"
    )
    run_parser.add_argument(
        "--config", "-c", type=Path, default=None, help="Path to benchmark YAML"
    )
    run_parser.add_argument(
        "--seed", "-s", type=int, default=None, help="Master seed for random graphs"
    )
    _add_algorithms_arg(run_parser)
    run_parser.add_argument(
        "--no-fixed",
        action="store_true",
        help="Skip the fixed reference graph",
    )
    run_parser.add_argument(
        "--results",
        "-r",
        type=Path,
        default=None,
        help="Export results to this JSON file",
    )
    run_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print results as JSON to stdout instead of tables",
    )

    fixed_parser = subparsers.add_parser(
        "fixed", help="Run all algorithms on the fixed reference graph only"
    )
    _add_algorithms_arg(fixed_parser)
    fixed_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print results as JSON to stdout instead of a table",
    )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "run":
        _run(
            config_path=args.config,
            seed=args.seed,
            algorithms=args.algorithms,
            no_fixed=args.no_fixed,
            results=args.results,
            stdout=args.stdout,
        )
    elif args.command == "fixed":
        _run(
            config_path=None,
            seed=None,
            algorithms=args.algorithms,
            no_fixed=False,
            results=None,
            stdout=args.stdout,
            fixed_only=True,
        )


if __name__ == "__main__":
    main()
