"""
Command-line interface for the procbench collector benchmark.

Usage:
    procbench                              compare the configured collectors
    procbench compare [A] [B] [options]    compare two collectors, B vs A
    procbench run NAME [options]           benchmark a single collector

Options mirror the configuration file and override it for the current run.
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..benchmark import build_summary, compare, run_benchmark
from ..collectors import COLLECTOR_NAMES
from ..config import get_config, set_config_path
from ..models.config import AppConfig, BenchmarkConfig, CollectorConfig, CollectorOptions
from ..procfs import BootTimeError
from ..validation import (
    ValidationError,
    handle_cli_error,
    validate_enum_choice,
    validate_positive_float,
    validate_positive_integer,
)
from .report import format_comparison, format_csv, format_summary

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procbench",
        description="Benchmark procfs process-metrics collection strategies.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config.toml. Defaults to conf/config.toml in the repository.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-n", "--iterations", type=int, help="Measured iterations per collector.")
    common.add_argument("-i", "--interval-ms", type=float, help="Interval between iterations in ms.")
    common.add_argument("--top-n", type=int, help="Only collect metrics for the N busiest processes.")
    common.add_argument("--vms", action="store_true", help="Include virtual memory size.")
    common.add_argument("--threads", action="store_true", help="Include thread counts.")
    common.add_argument("--io", action="store_true", help="Include bytes read from storage.")
    common.add_argument("--csv", action="store_true", help="Also print raw iteration samples as CSV.")

    subparsers = parser.add_subparsers(dest="command")

    compare_parser = subparsers.add_parser(
        "compare", parents=[common], help="Compare two collectors (B vs A)."
    )
    compare_parser.add_argument(
        "collectors",
        nargs="*",
        help=f"Baseline and candidate collector names. Available: {COLLECTOR_NAMES}",
    )

    run_parser = subparsers.add_parser(
        "run", parents=[common], help="Benchmark a single collector."
    )
    run_parser.add_argument("collector", help=f"Collector name. Available: {COLLECTOR_NAMES}")

    return parser


def apply_overrides(app_config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """
    Merge command-line overrides into the loaded configuration.

    Raises:
        ValidationError: If an override is out of range
    """
    benchmark: BenchmarkConfig = app_config.benchmark
    collector: CollectorConfig = app_config.collector

    overrides = {}
    if getattr(args, "iterations", None) is not None:
        overrides["iterations"] = validate_positive_integer(
            args.iterations, min_value=0, field_name="--iterations"
        )
    if getattr(args, "interval_ms", None) is not None:
        interval_ms = validate_positive_float(
            args.interval_ms, min_value=0.0, field_name="--interval-ms"
        )
        overrides["interval_seconds"] = interval_ms / 1000.0
    if getattr(args, "top_n", None) is not None:
        top_n = validate_positive_integer(args.top_n, min_value=0, field_name="--top-n")
        overrides["top_n"] = top_n if top_n > 0 else None
    if overrides:
        benchmark = dataclasses.replace(benchmark, **overrides)

    options = collector.options
    if getattr(args, "vms", False) or getattr(args, "threads", False) or getattr(args, "io", False):
        options = CollectorOptions(
            include_vms=options.include_vms or args.vms,
            include_threads=options.include_threads or args.threads,
            include_read_bytes=options.include_read_bytes or args.io,
        )
        collector = dataclasses.replace(collector, options=options)

    return AppConfig(benchmark=benchmark, collector=collector)


def _resolve_compare_pair(names: List[str], configured: List[str]) -> List[str]:
    if not names:
        names = list(configured)
    if len(names) == 1:
        raise ValidationError(
            "compare needs two collectors (baseline and candidate)",
            field_name="collectors",
            value=names,
        )
    pair = names[:2]
    for name in pair:
        validate_enum_choice(name, COLLECTOR_NAMES, field_name="collectors")
    return pair


def run_single(name: str, app_config: AppConfig, csv: bool) -> None:
    results = run_benchmark(name, app_config.collector, app_config.benchmark)
    if csv:
        print(format_csv(name, results))
    print(format_summary(build_summary(name, results)))


def run_compare(names: List[str], app_config: AppConfig, csv: bool) -> None:
    summaries = []
    for name in names:
        results = run_benchmark(name, app_config.collector, app_config.benchmark)
        if csv:
            print(format_csv(name, results))
        summaries.append(build_summary(name, results))

    for summary in summaries:
        print(format_summary(summary))
    print(format_comparison(compare(summaries[0], summaries[1])))


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line entry point.

    Loads the configuration, applies command-line overrides and runs either
    a single-collector benchmark or a two-collector comparison.

    Raises:
        SystemExit: On configuration errors, invalid arguments or a failed
            collector setup.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.config is not None:
        set_config_path(args.config)

    try:
        app_config = get_config()
    except (FileNotFoundError, ValidationError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            include_traceback=True,
            logger=logger,
        )

    try:
        app_config = apply_overrides(app_config, args)
        if args.command == "run":
            name = validate_enum_choice(args.collector, COLLECTOR_NAMES, field_name="collector")
        else:
            names = _resolve_compare_pair(
                getattr(args, "collectors", []), app_config.benchmark.collectors
            )
    except ValidationError as e:
        handle_cli_error(
            error=e,
            context="argument validation",
            exit_code=1,
            include_traceback=False,
            logger=logger,
        )

    csv = getattr(args, "csv", False)
    try:
        if args.command == "run":
            run_single(name, app_config, csv)
        else:
            run_compare(names, app_config, csv)
    except BootTimeError as e:
        handle_cli_error(
            error=e,
            context="collector setup",
            exit_code=1,
            include_traceback=False,
            logger=logger,
        )


if __name__ == "__main__":
    main_cli()
