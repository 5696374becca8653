"""
Data models and structures for procbench.

Configuration Models:
- Collector feature toggles and construction settings
- Benchmark run parameters

Process Models:
- CPU tick snapshots and parsed stat records
- Status file fields and enriched per-process metrics

Result Models:
- Per-iteration benchmark samples
- Statistical summaries and strategy comparisons

All models are dataclasses with type hints.
"""

from .config import AppConfig, BenchmarkConfig, CollectorConfig, CollectorOptions
from .process import CpuSnapshot, ProcessMetrics, ProcessStatRecord, StatusFields
from .results import (
    IterationResult,
    PerfComparison,
    PerfSummary,
    PhaseDelta,
    StatsSummary,
)

__all__ = [
    # Configuration
    "AppConfig",
    "BenchmarkConfig",
    "CollectorConfig",
    "CollectorOptions",
    # Process
    "CpuSnapshot",
    "ProcessMetrics",
    "ProcessStatRecord",
    "StatusFields",
    # Results
    "IterationResult",
    "PerfComparison",
    "PerfSummary",
    "PhaseDelta",
    "StatsSummary",
]
