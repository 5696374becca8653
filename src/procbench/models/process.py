"""
Per-process data models.

These structures carry what is read from procfs through the collectors:
the cheap CPU counter snapshot taken every pass, the parsed stat record,
the fields picked out of the status file, and the enriched per-process
observation handed back to the benchmark runner.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class CpuSnapshot:
    """
    Cumulative CPU ticks of one process at a point in time.

    All snapshots taken in one collection pass share the same timestamp,
    which is a monotonic clock reading in seconds.
    """

    pid: int
    # utime + stime, in clock ticks
    cpu_time_ticks: int
    timestamp: float


@dataclass(frozen=True)
class ProcessStatRecord:
    """The fields of `/proc/<pid>/stat` the collectors rely on."""

    process_name: str
    # Single character state code ('R', 'S', 'D', 'Z', ...)
    state: str
    user_cpu_ticks: int
    kernel_cpu_ticks: int
    # Ticks since boot at which the process started.
    start_time_ticks: int
    virtual_memory_bytes: int
    resident_set_pages: int

    @property
    def total_cpu_ticks(self) -> int:
        return self.user_cpu_ticks + self.kernel_cpu_ticks


@dataclass(frozen=True)
class StatusFields:
    """Optional fields extracted from `/proc/<pid>/status`."""

    uid: Optional[int] = None
    threads: Optional[int] = None
    vm_rss_bytes: Optional[int] = None
    vm_size_bytes: Optional[int] = None


@dataclass(frozen=True)
class ProcessMetrics:
    """
    Fully enriched observation of one process for one iteration.

    Optional fields are None either because the matching collector option
    was disabled or because the underlying file could not be read.
    """

    pid: int
    process_name: str
    cmdline: Optional[str]
    user: str
    start_time: datetime
    cpu_percent: float
    rss_bytes: int
    vms_bytes: Optional[int]
    thread_count: Optional[int]
    state: str
    read_bytes: Optional[int]
