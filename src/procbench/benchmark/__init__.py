"""
Benchmark harness and statistics.

- BenchmarkRunner drives warm-up plus timed iterations against a collector,
  optionally restricted to the top-N busiest processes.
- The stats module summarizes runs into PerfSummary values and compares
  two strategies.
"""

from .runner import (
    AllocationTracker,
    BenchmarkRunner,
    RunnerState,
    run_benchmark,
    select_top_n,
)
from .stats import (
    build_summary,
    compare,
    percent_change,
    percentile_nearest_rank,
    summarize,
)

__all__ = [
    "AllocationTracker",
    "BenchmarkRunner",
    "RunnerState",
    "run_benchmark",
    "select_top_n",
    "build_summary",
    "compare",
    "percent_change",
    "percentile_nearest_rank",
    "summarize",
]
