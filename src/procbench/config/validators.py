"""
Configuration validation utilities.

Turns the raw `[benchmark]` and `[collector]` tables into validated
configuration dataclasses.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..collectors.factory import COLLECTOR_NAMES
from ..models.config import AppConfig, BenchmarkConfig, CollectorConfig, CollectorOptions
from ..validation import (
    ValidationError,
    validate_bool,
    validate_enum_choice,
    validate_non_empty_string,
    validate_positive_float,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)


def validate_benchmark_config(benchmark_data: Dict[str, Any]) -> BenchmarkConfig:
    """
    Validate and create a BenchmarkConfig from the `[benchmark]` table.

    The interval is given in milliseconds in the file. A top_n of 0 disables
    the top-N variant.

    Raises:
        ValidationError: If validation fails
    """
    iterations = validate_positive_integer(
        benchmark_data.get("iterations", 50),
        min_value=0,
        field_name="benchmark.iterations",
    )

    interval_ms = validate_positive_float(
        benchmark_data.get("interval_ms", 100),
        min_value=0.0,
        max_value=60_000.0,
        field_name="benchmark.interval_ms",
    )

    top_n_value = validate_positive_integer(
        benchmark_data.get("top_n", 0),
        min_value=0,
        field_name="benchmark.top_n",
    )
    top_n: Optional[int] = top_n_value if top_n_value > 0 else None

    track_allocations = validate_bool(
        benchmark_data.get("track_allocations", True),
        field_name="benchmark.track_allocations",
    )

    collectors = benchmark_data.get("collectors", ["procfs", "procfs-parallel"])
    if not isinstance(collectors, list) or not collectors:
        raise ValidationError(
            "benchmark.collectors must be a non-empty list of collector names",
            field_name="benchmark.collectors",
            value=collectors,
        )
    for name in collectors:
        validate_enum_choice(name, COLLECTOR_NAMES, field_name="benchmark.collectors")

    return BenchmarkConfig(
        iterations=iterations,
        interval_seconds=interval_ms / 1000.0,
        top_n=top_n,
        track_allocations=track_allocations,
        collectors=list(collectors),
    )


def validate_collector_config(collector_data: Dict[str, Any]) -> CollectorConfig:
    """
    Validate and create a CollectorConfig from the `[collector]` table,
    including its `[collector.parallel]` sub-table.

    Raises:
        ValidationError: If validation fails
    """
    parallel_settings = collector_data.get("parallel", {})

    options = CollectorOptions(
        include_vms=validate_bool(
            collector_data.get("include_vms", False), field_name="collector.include_vms"
        ),
        include_threads=validate_bool(
            collector_data.get("include_threads", False), field_name="collector.include_threads"
        ),
        include_read_bytes=validate_bool(
            collector_data.get("include_read_bytes", False),
            field_name="collector.include_read_bytes",
        ),
    )

    proc_root = validate_non_empty_string(
        collector_data.get("proc_root", "/proc"), field_name="collector.proc_root"
    )
    passwd_path = validate_non_empty_string(
        collector_data.get("passwd_path", "/etc/passwd"), field_name="collector.passwd_path"
    )

    max_workers = validate_positive_integer(
        parallel_settings.get("max_workers", 8),
        min_value=1,
        max_value=256,
        field_name="collector.parallel.max_workers",
    )
    thread_name_prefix = validate_non_empty_string(
        parallel_settings.get("thread_name_prefix", "ProcWorker"),
        field_name="collector.parallel.thread_name_prefix",
    )

    return CollectorConfig(
        options=options,
        proc_root=Path(proc_root),
        passwd_path=Path(passwd_path),
        max_workers=max_workers,
        thread_name_prefix=thread_name_prefix,
    )


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """Validate the whole parsed file into an AppConfig."""
    benchmark_config = validate_benchmark_config(config_data.get("benchmark", {}))
    collector_config = validate_collector_config(config_data.get("collector", {}))

    logger.debug(
        f"Validated configuration: {benchmark_config.iterations} iterations, "
        f"collectors={benchmark_config.collectors}"
    )
    return AppConfig(benchmark=benchmark_config, collector=collector_config)
