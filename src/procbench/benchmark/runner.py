"""
Benchmark runner driving timed collection iterations.

A run moves through INIT -> WARMUP -> SAMPLING -> DONE. The warm-up takes one
discarded snapshot so that the first measured iteration already has a
previous snapshot to compute CPU deltas against. Each measured iteration
times the snapshot phase and the metrics phase separately and records how
much memory the iteration allocated. Iterations never overlap; the runner
sleeps out the rest of the interval between them.
"""

import logging
import time
import tracemalloc
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..collectors import AbstractProcessCollector, CollectorFactory
from ..collectors.base import SnapshotMap
from ..models.config import BenchmarkConfig, CollectorConfig
from ..models.process import CpuSnapshot
from ..models.results import IterationResult
from ..procfs import cpu_percent
from ..validation import validate_positive_float, validate_positive_integer

logger = logging.getLogger(__name__)


class RunnerState(Enum):
    INIT = "init"
    WARMUP = "warmup"
    SAMPLING = "sampling"
    DONE = "done"


class AllocationTracker:
    """
    Per-iteration allocation counter built on tracemalloc.

    Python exposes no cumulative allocated-bytes counter, so an iteration's
    allocation is measured as the traced-memory peak reached during the
    iteration minus the traced size at its start.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._started_here = False

    def start(self) -> None:
        if self.enabled and not tracemalloc.is_tracing():
            tracemalloc.start()
            self._started_here = True

    def stop(self) -> None:
        if self._started_here:
            tracemalloc.stop()
            self._started_here = False

    def mark(self) -> int:
        if not self.enabled:
            return 0
        tracemalloc.reset_peak()
        current, _ = tracemalloc.get_traced_memory()
        return current

    def allocated_since(self, mark: int) -> int:
        if not self.enabled:
            return 0
        _, peak = tracemalloc.get_traced_memory()
        return max(0, peak - mark)


def select_top_n(
    prev: SnapshotMap, curr: SnapshotMap, n: int, core_count: int = 1
) -> Dict[int, CpuSnapshot]:
    """
    Keep the `n` pids of `curr` with the highest instantaneous CPU percent.

    Only pids present in both snapshots are ranked. The sort is stable, so
    ties keep the enumeration order of `curr`.
    """
    ranked = sorted(
        (pid for pid in curr if pid in prev),
        key=lambda pid: cpu_percent(prev[pid], curr[pid], core_count),
        reverse=True,
    )
    return {pid: curr[pid] for pid in ranked[:n]}


class BenchmarkRunner:
    """
    Runs repeated snapshot + metrics iterations against a collector.

    Attributes:
        interval_seconds: Target period between the starts of iterations.
        top_n: When set, the metrics phase only handles the N busiest pids.
        state: Current RunnerState.
    """

    def __init__(
        self,
        interval_seconds: float = 1.0,
        top_n: Optional[int] = None,
        track_allocations: bool = True,
        sleep: Callable[[float], None] = time.sleep,
        timer: Callable[[], float] = time.perf_counter,
    ):
        self.interval_seconds = validate_positive_float(
            interval_seconds, min_value=0.0, field_name="interval_seconds"
        )
        self.top_n = (
            validate_positive_integer(top_n, min_value=1, field_name="top_n")
            if top_n is not None
            else None
        )
        self.track_allocations = track_allocations
        self._sleep = sleep
        self._timer = timer
        self.state = RunnerState.INIT

    @classmethod
    def from_config(cls, config: BenchmarkConfig, **kwargs) -> "BenchmarkRunner":
        return cls(
            interval_seconds=config.interval_seconds,
            top_n=config.top_n,
            track_allocations=config.track_allocations,
            **kwargs,
        )

    def run(self, collector: AbstractProcessCollector, iterations: int) -> List[IterationResult]:
        """
        Run `iterations` measured iterations after one warm-up snapshot.

        Returns:
            Exactly `iterations` results, numbered 1..iterations.

        Raises:
            ValidationError: If iterations is negative.
        """
        iterations = validate_positive_integer(iterations, min_value=0, field_name="iterations")
        results: List[IterationResult] = []
        tracker = AllocationTracker(self.track_allocations)
        core_count = getattr(collector, "core_count", 1) or 1

        logger.info(
            f"Benchmarking '{collector.name}': {iterations} iterations, "
            f"interval {self.interval_seconds}s, top_n={self.top_n}"
        )

        tracker.start()
        try:
            self.state = RunnerState.WARMUP
            prev = collector.snapshot()
            self._sleep(self.interval_seconds)

            self.state = RunnerState.SAMPLING
            for iteration in range(1, iterations + 1):
                started = self._timer()
                mark = tracker.mark()

                t0 = self._timer()
                curr = collector.snapshot()
                t1 = self._timer()

                targets = (
                    select_top_n(prev, curr, self.top_n, core_count)
                    if self.top_n is not None
                    else curr
                )
                metrics = collector.metrics(prev, targets)
                t2 = self._timer()

                alloc_bytes = tracker.allocated_since(mark)

                snapshot_ms = (t1 - t0) * 1000.0
                metrics_ms = (t2 - t1) * 1000.0
                results.append(
                    IterationResult(
                        iteration=iteration,
                        process_count=len(metrics),
                        snapshot_ms=snapshot_ms,
                        metrics_ms=metrics_ms,
                        total_ms=snapshot_ms + metrics_ms,
                        alloc_bytes=alloc_bytes,
                    )
                )
                logger.debug(
                    f"[{collector.name}] iteration {iteration}: {len(metrics)} processes, "
                    f"snapshot {snapshot_ms:.2f} ms, metrics {metrics_ms:.2f} ms"
                )

                prev = curr

                if iteration < iterations:
                    remaining = self.interval_seconds - (self._timer() - started)
                    if remaining > 0:
                        self._sleep(remaining)
        finally:
            tracker.stop()

        self.state = RunnerState.DONE
        logger.info(f"Finished benchmarking '{collector.name}' ({len(results)} iterations)")
        return results


def run_benchmark(
    collector_name: str,
    collector_config: CollectorConfig,
    benchmark_config: BenchmarkConfig,
    **runner_kwargs,
) -> List[IterationResult]:
    """
    Build the named collector, benchmark it and release it.

    Constructing the collector loads its boot time and user caches once,
    before the warm-up begins.
    """
    runner = BenchmarkRunner.from_config(benchmark_config, **runner_kwargs)
    collector = CollectorFactory(collector_config).create_collector(collector_name)
    with collector:
        return runner.run(collector, benchmark_config.iterations)
