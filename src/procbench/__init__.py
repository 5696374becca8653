"""
procbench: procfs process-metrics collection benchmark.

This package samples per-process resource usage from the Linux procfs
pseudo-filesystem and benchmarks alternative collection strategies against
each other.

The package is organized into specialized modules:
- procfs: Stat record parsing, CPU delta model and procfs readers
- collectors: Sequential, concurrent and psutil-backed collection strategies
- executor: Bounded worker pool used by the concurrent strategy
- benchmark: Timed iteration runner and statistical summaries
- config: Configuration management and validation
- models: Data structures and type definitions
- validation: Input validation and error handling
- cli: Command-line interface and report rendering

Usage:
    From command line:
        procbench compare procfs procfs-parallel --iterations 50

    Programmatically:
        from procbench import get_config, run_benchmark, build_summary
        config = get_config()
        results = run_benchmark("procfs", config.collector, config.benchmark)
        summary = build_summary("procfs", results)
"""

# Main interfaces
from .config import get_config, clear_config_cache, set_config_path
from .benchmark import BenchmarkRunner, build_summary, compare, run_benchmark, summarize
from .collectors import CollectorFactory, COLLECTOR_NAMES

# Model classes for external use
from .models import (
    AppConfig,
    BenchmarkConfig,
    CollectorConfig,
    CollectorOptions,
    CpuSnapshot,
    IterationResult,
    PerfComparison,
    PerfSummary,
    ProcessMetrics,
    StatsSummary,
)

__version__ = "0.1.0"

__all__ = [
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "BenchmarkRunner",
    "build_summary",
    "compare",
    "run_benchmark",
    "summarize",
    "CollectorFactory",
    "COLLECTOR_NAMES",
    "AppConfig",
    "BenchmarkConfig",
    "CollectorConfig",
    "CollectorOptions",
    "CpuSnapshot",
    "IterationResult",
    "PerfComparison",
    "PerfSummary",
    "ProcessMetrics",
    "StatsSummary",
]
