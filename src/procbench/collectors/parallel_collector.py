"""
Concurrent procfs collector.

Same per-process work as the sequential collector, fanned out in batches on
a bounded managed thread pool. Workers only read shared state that is
immutable after construction (boot time, user cache, options). Their
results come back through futures and are merged on the calling thread, so
the accumulator is never written concurrently.
"""

import logging
from concurrent.futures import Future, as_completed
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

from ..executor import ManagedThreadPoolExecutor, ThreadPoolConfig
from ..models.process import CpuSnapshot, ProcessMetrics
from ..procfs import list_pids
from .base import AbstractProcessCollector, SnapshotMap

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _batches(items: Sequence[int], size: int) -> List[Sequence[int]]:
    return [items[i:i + size] for i in range(0, len(items), size)]


class ParallelProcFsCollector(AbstractProcessCollector):
    """
    Reads procfs with a fixed-size worker pool.

    Attributes:
        pool: The managed thread pool, started at construction and shut
              down by close().
        batch_size: Number of pids handled by one submitted task.
    """

    name = "procfs-parallel"

    def __init__(
        self,
        *args,
        max_workers: int = 8,
        thread_name_prefix: str = "ProcWorker",
        batch_size: int = 16,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.batch_size = max(1, batch_size)
        self.pool = ManagedThreadPoolExecutor(
            ThreadPoolConfig(
                max_workers=max_workers,
                thread_name_prefix=thread_name_prefix,
            )
        )
        self.pool.start()

    def close(self) -> None:
        self.pool.shutdown(wait=True)

    def _fan_out(
        self, pids: Sequence[int], work: Callable[[int], Optional[T]]
    ) -> List[T]:
        """Run `work` for every pid on the pool and gather the non-None results."""

        def run_batch(batch: Sequence[int]) -> List[T]:
            out: List[T] = []
            for pid in batch:
                item = work(pid)
                if item is not None:
                    out.append(item)
            return out

        futures: List[Future] = [
            self.pool.submit(run_batch, batch)
            for batch in _batches(pids, self.batch_size)
        ]
        gathered: List[T] = []
        for future in as_completed(futures):
            gathered.extend(future.result())
        return gathered

    def snapshot(self) -> Dict[int, CpuSnapshot]:
        timestamp = self.clock()
        pids = list_pids(self.proc_root)
        snapshots = self._fan_out(pids, lambda pid: self._read_cpu_snapshot(pid, timestamp))
        return {snap.pid: snap for snap in snapshots}

    def metrics(self, prev: SnapshotMap, curr: SnapshotMap) -> List[ProcessMetrics]:
        pids = self.shared_pids(prev, curr)
        return self._fan_out(
            pids, lambda pid: self._collect_process(pid, prev[pid], curr[pid])
        )
