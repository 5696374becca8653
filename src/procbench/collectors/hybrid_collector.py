"""
Hybrid collector using psutil for the CPU snapshot.

The snapshot pass goes through psutil.process_iter() and converts the
reported user+system CPU seconds into clock ticks, so CPU percent is
computed exactly as for the procfs strategies. The metrics pass is the
sequential procfs pass, except that the process name comes from psutil.
"""

import logging
from typing import Dict

import psutil

from ..models.process import CpuSnapshot, ProcessStatRecord
from ..procfs import CLOCK_TICKS_PER_SECOND
from .procfs_collector import ProcFsCollector

logger = logging.getLogger(__name__)


class HybridCollector(ProcFsCollector):
    """psutil for enumeration and CPU times, procfs for the detailed record."""

    name = "hybrid"

    def snapshot(self) -> Dict[int, CpuSnapshot]:
        timestamp = self.clock()
        result: Dict[int, CpuSnapshot] = {}

        for proc in psutil.process_iter(attrs=["pid", "cpu_times"]):
            # Access denied and zombie processes come back with None attributes
            cpu_times = proc.info.get("cpu_times")
            if cpu_times is None:
                continue
            pid = proc.info["pid"]
            ticks = int((cpu_times.user + cpu_times.system) * CLOCK_TICKS_PER_SECOND)
            result[pid] = CpuSnapshot(pid=pid, cpu_time_ticks=ticks, timestamp=timestamp)

        return result

    def _process_name(self, pid: int, stat: ProcessStatRecord) -> str:
        try:
            return psutil.Process(pid).name()
        except psutil.Error:
            return stat.process_name
