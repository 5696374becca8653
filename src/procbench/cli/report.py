"""
Plain-text and CSV rendering of benchmark results.
"""

import csv
import io
from typing import Sequence

from ..models.results import IterationResult, PerfComparison, PerfSummary, PhaseDelta, StatsSummary

SEPARATOR = "=" * 24

CSV_HEADER = ["iter", "procs", "snapshot_ms", "metrics_ms", "total_ms", "alloc_bytes"]


def _latency_line(label: str, stats: StatsSummary) -> str:
    return (
        f"{label:<10} mean {stats.mean:7.2f} ms | med {stats.median:6.2f} ms | "
        f"p95 {stats.p95:6.2f} ms | max {stats.max:6.2f} ms"
    )


def _delta_line(label: str, delta: PhaseDelta) -> str:
    return (
        f"{label:<10} mean {delta.mean_delta:7.2f} ms ({delta.mean_pct:6.1f}%) | "
        f"p95 {delta.p95_delta:6.2f} ms ({delta.p95_pct:6.1f}%)"
    )


def format_summary(summary: PerfSummary) -> str:
    """Render one strategy's summary block."""
    alloc = summary.alloc
    lines = [
        f"==== {summary.name} summary ====",
        f"Iterations: {summary.iterations}, Avg processes: {summary.avg_process_count:.0f}",
        "",
        _latency_line("snapshot", summary.snapshot),
        _latency_line("metrics", summary.metrics),
        _latency_line("total", summary.total),
        "",
        f"alloc      mean {alloc.mean / 1024.0:7.1f} KB | p95 {alloc.p95 / 1024.0:6.1f} KB | "
        f"max {alloc.max / 1024.0:6.1f} KB",
        f"throughput ~ {summary.throughput:.0f} processes/sec",
        SEPARATOR,
    ]
    return "\n".join(lines)


def format_comparison(comparison: PerfComparison) -> str:
    """Render the B-vs-A delta block."""
    lines = [
        "==== delta (B vs A) ====",
        f"A = {comparison.baseline}",
        f"B = {comparison.candidate}",
        "",
        _delta_line("snapshot", comparison.snapshot),
        _delta_line("metrics", comparison.metrics),
        _delta_line("total", comparison.total),
        "",
        f"alloc mean  {comparison.alloc_mean_delta / 1024.0:.1f} KB ({comparison.alloc_mean_pct:.1f}%)",
        f"tput        {comparison.throughput_delta:.0f} proc/s ({comparison.throughput_pct:.1f}%)",
        SEPARATOR,
    ]
    return "\n".join(lines)


def format_csv(collector_name: str, results: Sequence[IterationResult]) -> str:
    """Render raw iteration samples as CSV, preceded by a collector caption."""
    buffer = io.StringIO()
    buffer.write(f"Collector: {collector_name}\n")
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for r in results:
        writer.writerow(
            [
                r.iteration,
                r.process_count,
                f"{r.snapshot_ms:.3f}",
                f"{r.metrics_ms:.3f}",
                f"{r.total_ms:.3f}",
                r.alloc_bytes,
            ]
        )
    return buffer.getvalue()
