"""
Sequential procfs collector.

Enumerates the proc root and reads one process at a time on the calling
thread. This is the baseline strategy the others are compared against.
"""

import logging
from typing import Dict, List

from ..models.process import CpuSnapshot, ProcessMetrics
from ..procfs import list_pids
from .base import AbstractProcessCollector, SnapshotMap

logger = logging.getLogger(__name__)


class ProcFsCollector(AbstractProcessCollector):
    """Reads procfs sequentially, one pid after another."""

    name = "procfs"

    def snapshot(self) -> Dict[int, CpuSnapshot]:
        timestamp = self.clock()
        result: Dict[int, CpuSnapshot] = {}

        for pid in list_pids(self.proc_root):
            snap = self._read_cpu_snapshot(pid, timestamp)
            if snap is not None:
                result[pid] = snap

        return result

    def metrics(self, prev: SnapshotMap, curr: SnapshotMap) -> List[ProcessMetrics]:
        result: List[ProcessMetrics] = []

        for pid in self.shared_pids(prev, curr):
            process = self._collect_process(pid, prev[pid], curr[pid])
            if process is not None:
                result.append(process)

        return result
