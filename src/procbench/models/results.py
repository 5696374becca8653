"""
Benchmark result data models.

These structures hold the raw per-iteration samples produced by the
benchmark runner and the distributional summaries and strategy comparisons
derived from them.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class IterationResult:
    """One measured benchmark iteration."""

    # 1-based, strictly increasing within a run.
    iteration: int
    # Number of ProcessMetrics produced by the metrics phase.
    process_count: int
    snapshot_ms: float
    metrics_ms: float
    # Always snapshot_ms + metrics_ms.
    total_ms: float
    alloc_bytes: int


@dataclass(frozen=True)
class StatsSummary:
    """Distributional aggregate over one measurement series."""

    n: int
    mean: float
    median: float
    p95: float
    max: float


@dataclass(frozen=True)
class PerfSummary:
    """
    Aggregated view of a complete run of one collector strategy.

    Throughput is processes handled per second of measured collection time,
    derived from the average process count and the mean total latency.
    """

    name: str
    iterations: int
    avg_process_count: float
    snapshot: StatsSummary
    metrics: StatsSummary
    total: StatsSummary
    alloc: StatsSummary
    throughput: float


@dataclass(frozen=True)
class PhaseDelta:
    """Change of one measured phase from baseline A to candidate B."""

    mean_delta: float
    mean_pct: float
    p95_delta: float
    p95_pct: float


@dataclass(frozen=True)
class PerfComparison:
    """B-versus-A comparison of two PerfSummary values."""

    baseline: str
    candidate: str
    snapshot: PhaseDelta
    metrics: PhaseDelta
    total: PhaseDelta
    alloc_mean_delta: float
    alloc_mean_pct: float
    throughput_baseline: float
    throughput_candidate: float
    throughput_delta: float
    throughput_pct: float
