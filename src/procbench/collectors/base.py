"""
Defines the abstract collector contract and the per-process work shared by
all procfs-backed strategies.

Every collector offers two operations:

- snapshot(): a cheap pass reading only cumulative CPU ticks per process.
- metrics(prev, curr): an expensive pass producing a full ProcessMetrics
  for each pid present in both snapshots.

Processes are inherently racy against exit, so the per-process helpers in
this module return None for a process that vanished, is not accessible or
has a malformed record. Callers skip those pids; nothing is raised.
"""

import logging
import os
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional

from ..executor import get_available_core_count
from ..models.config import CollectorOptions
from ..models.process import CpuSnapshot, ProcessMetrics, ProcessStatRecord
from ..procfs import (
    BootTime,
    BootTimeError,
    UserNameCache,
    cpu_percent,
    parse_stat_line,
    read_cmdline,
    read_read_bytes,
    read_status,
    read_text,
)
from ..validation import ErrorSeverity, handle_collector_error

logger = logging.getLogger(__name__)

UNKNOWN_USER = "unknown"

SnapshotMap = Mapping[int, CpuSnapshot]


class AbstractProcessCollector(ABC):
    """
    Abstract base class for process collectors.

    Construction eagerly loads the boot time and the uid-to-name cache
    exactly once. Both are immutable afterwards and shared by reference
    with every collection call, including calls running on worker threads.
    """

    name: str = "abstract"

    def __init__(
        self,
        options: Optional[CollectorOptions] = None,
        proc_root: Path = Path("/proc"),
        passwd_path: Path = Path("/etc/passwd"),
        core_count: Optional[int] = None,
        page_size: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initializes the collector.

        Args:
            options: Toggles for the optional per-process fields.
            proc_root: Mount point of procfs.
            passwd_path: User database used for uid resolution.
            core_count: Logical CPU count used to normalize CPU percent.
                        Defaults to the number of logical CPUs.
            page_size: Page size in bytes for the RSS fallback.
                       Defaults to the system page size.
            clock: Monotonic clock timestamping snapshots, in seconds.

        Raises:
            BootTimeError: If the boot time cannot be read.
        """
        self.options = options or CollectorOptions()
        self.proc_root = Path(proc_root)
        self.clock = clock

        try:
            self.boot_time = BootTime.read(self.proc_root)
        except BootTimeError as e:
            handle_collector_error(
                error=e,
                collector_name=self.name,
                severity=ErrorSeverity.CRITICAL,
                reraise=True,
                logger=logger,
            )
        self.users = UserNameCache.load(Path(passwd_path))
        self.core_count = core_count or get_available_core_count()
        self.page_size = page_size or os.sysconf("SC_PAGE_SIZE")

        logger.info(
            f"Initializing {self.__class__.__name__} ('{self.name}') with proc_root: "
            f"'{self.proc_root}', cores: {self.core_count}, options: {self.options}"
        )

    @abstractmethod
    def snapshot(self) -> Dict[int, CpuSnapshot]:
        """
        Capture cumulative CPU ticks for every visible process.

        Returns:
            Mapping of pid to CpuSnapshot. Processes that disappeared or
            could not be read during the scan are absent.
        """

    @abstractmethod
    def metrics(self, prev: SnapshotMap, curr: SnapshotMap) -> List[ProcessMetrics]:
        """
        Build full metrics for every pid present in both snapshots.

        A pid only present in `curr` has no CPU delta yet and is skipped.
        Per-pid read failures drop that pid and never abort the batch.
        """

    def close(self) -> None:
        """Release resources held by the collector."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @staticmethod
    def shared_pids(prev: SnapshotMap, curr: SnapshotMap) -> List[int]:
        """Pids of `curr`, in its order, that also appear in `prev`."""
        return [pid for pid in curr if pid in prev]

    def _pid_dir(self, pid: int) -> Path:
        return self.proc_root / str(pid)

    def _read_cpu_snapshot(self, pid: int, timestamp: float) -> Optional[CpuSnapshot]:
        stat_text = read_text(self._pid_dir(pid) / "stat")
        if stat_text is None:
            logger.debug(f"Skipping pid {pid}: stat record not readable")
            return None
        stat = parse_stat_line(stat_text)
        if stat is None:
            logger.debug(f"Skipping pid {pid}: malformed stat record")
            return None
        return CpuSnapshot(pid=pid, cpu_time_ticks=stat.total_cpu_ticks, timestamp=timestamp)

    def _process_name(self, pid: int, stat: ProcessStatRecord) -> str:
        return stat.process_name

    def _collect_process(
        self, pid: int, prev: CpuSnapshot, curr: CpuSnapshot
    ) -> Optional[ProcessMetrics]:
        """
        Read and assemble the full record of one process.

        Returns None if the stat record is gone or malformed, including a
        start time too large to place on the calendar. Secondary files
        (status, cmdline, io) only degrade their own fields.
        """
        pid_dir = self._pid_dir(pid)

        stat_text = read_text(pid_dir / "stat")
        if stat_text is None:
            logger.debug(f"Skipping pid {pid}: stat record no longer readable")
            return None
        stat = parse_stat_line(stat_text)
        if stat is None:
            logger.debug(f"Skipping pid {pid}: malformed stat record")
            return None

        try:
            start_time = self.boot_time.start_time(stat.start_time_ticks)
        except (OverflowError, ValueError) as e:
            logger.debug(f"Skipping pid {pid}: start time out of range ({e})")
            return None

        status = read_status(pid_dir / "status")
        uid = status.uid if status is not None else None
        user = self.users.resolve(uid) if uid is not None and uid >= 0 else UNKNOWN_USER

        if status is not None and status.vm_rss_bytes is not None:
            rss_bytes = status.vm_rss_bytes
        else:
            rss_bytes = stat.resident_set_pages * self.page_size

        vms_bytes: Optional[int] = None
        if self.options.include_vms:
            if status is not None and status.vm_size_bytes is not None:
                vms_bytes = status.vm_size_bytes
            else:
                vms_bytes = stat.virtual_memory_bytes

        thread_count: Optional[int] = None
        if self.options.include_threads and status is not None:
            thread_count = status.threads

        read_bytes: Optional[int] = None
        if self.options.include_read_bytes:
            read_bytes = read_read_bytes(pid_dir / "io")

        return ProcessMetrics(
            pid=pid,
            process_name=self._process_name(pid, stat),
            cmdline=read_cmdline(pid_dir / "cmdline"),
            user=user,
            start_time=start_time,
            cpu_percent=cpu_percent(prev, curr, self.core_count),
            rss_bytes=rss_bytes,
            vms_bytes=vms_bytes,
            thread_count=thread_count,
            state=stat.state,
            read_bytes=read_bytes,
        )
