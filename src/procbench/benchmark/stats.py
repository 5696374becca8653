"""
Statistical summaries of benchmark runs.

Percentiles use the nearest-rank method, which always picks an existing
sample instead of interpolating: for percentile p over n sorted samples the
index is clamp(ceil(p/100 * n) - 1, 0, n - 1).
"""

import math
from typing import Iterable, Sequence

from ..models.results import (
    IterationResult,
    PerfComparison,
    PerfSummary,
    PhaseDelta,
    StatsSummary,
)


def percentile_nearest_rank(sorted_values: Sequence[float], p: float) -> float:
    """Nearest-rank percentile of an ascending sequence; 0 for an empty one."""
    n = len(sorted_values)
    if n == 0:
        return 0
    if p <= 0:
        return sorted_values[0]
    if p >= 100:
        return sorted_values[-1]

    rank = math.ceil(p / 100.0 * n)
    index = min(max(rank - 1, 0), n - 1)
    return sorted_values[index]


def summarize(values: Iterable[float]) -> StatsSummary:
    """Summarize a measurement series. An empty series yields all zeros."""
    ordered = sorted(values)
    if not ordered:
        return StatsSummary(n=0, mean=0.0, median=0.0, p95=0.0, max=0.0)

    return StatsSummary(
        n=len(ordered),
        mean=sum(ordered) / len(ordered),
        median=percentile_nearest_rank(ordered, 50),
        p95=percentile_nearest_rank(ordered, 95),
        max=ordered[-1],
    )


def build_summary(name: str, results: Sequence[IterationResult]) -> PerfSummary:
    """
    Aggregate a complete run of one collector.

    Throughput is the average process count divided by the mean total
    latency in seconds, i.e. processes collected per second of work.
    """
    n = len(results)
    avg_process_count = sum(r.process_count for r in results) / n if n else 0.0

    total = summarize(r.total_ms for r in results)
    mean_total_seconds = total.mean / 1000.0
    throughput = avg_process_count / mean_total_seconds if mean_total_seconds > 0 else 0.0

    return PerfSummary(
        name=name,
        iterations=n,
        avg_process_count=avg_process_count,
        snapshot=summarize(r.snapshot_ms for r in results),
        metrics=summarize(r.metrics_ms for r in results),
        total=total,
        alloc=summarize(r.alloc_bytes for r in results),
        throughput=throughput,
    )


def percent_change(baseline: float, candidate: float) -> float:
    """Relative change of candidate over baseline in percent; 0 if baseline is not positive."""
    if baseline > 0:
        return (candidate / baseline - 1.0) * 100.0
    return 0.0


def phase_delta(a: StatsSummary, b: StatsSummary) -> PhaseDelta:
    return PhaseDelta(
        mean_delta=b.mean - a.mean,
        mean_pct=percent_change(a.mean, b.mean),
        p95_delta=b.p95 - a.p95,
        p95_pct=percent_change(a.p95, b.p95),
    )


def compare(a: PerfSummary, b: PerfSummary) -> PerfComparison:
    """Compare candidate `b` against baseline `a`."""
    return PerfComparison(
        baseline=a.name,
        candidate=b.name,
        snapshot=phase_delta(a.snapshot, b.snapshot),
        metrics=phase_delta(a.metrics, b.metrics),
        total=phase_delta(a.total, b.total),
        alloc_mean_delta=b.alloc.mean - a.alloc.mean,
        alloc_mean_pct=percent_change(a.alloc.mean, b.alloc.mean),
        throughput_baseline=a.throughput,
        throughput_candidate=b.throughput,
        throughput_delta=b.throughput - a.throughput,
        throughput_pct=percent_change(a.throughput, b.throughput),
    )
