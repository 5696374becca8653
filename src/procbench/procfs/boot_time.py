"""Kernel boot time, read from the `btime` line of `/proc/stat`."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

from .cpu import CLOCK_TICKS_PER_SECOND

logger = logging.getLogger(__name__)


class BootTimeError(RuntimeError):
    """The boot time source is missing or cannot be parsed."""


@dataclass(frozen=True)
class BootTime:
    """Boot instant of the running kernel, in UTC."""

    boot_time_utc: datetime

    @classmethod
    def read(cls, proc_root: Path = Path("/proc")) -> "BootTime":
        """
        Read the boot time from `<proc_root>/stat`.

        Raises:
            BootTimeError: If the file is unreadable or has no valid btime line.
        """
        stat_path = Path(proc_root) / "stat"
        try:
            with open(stat_path, "r", encoding="ascii", errors="replace") as f:
                for line in f:
                    if not line.startswith("btime "):
                        continue
                    parts = line.split()
                    if len(parts) == 2 and parts[1].isascii() and parts[1].isdigit():
                        boot = datetime.fromtimestamp(int(parts[1]), tz=timezone.utc)
                        logger.debug(f"Boot time read from {stat_path}: {boot.isoformat()}")
                        return cls(boot)
        except OSError as e:
            raise BootTimeError(f"Cannot read boot time from {stat_path}: {e}") from e

        raise BootTimeError(f"Cannot read btime from {stat_path}")

    def start_time(self, start_time_ticks: int,
                   tick_rate: int = CLOCK_TICKS_PER_SECOND) -> datetime:
        """Absolute start time of a process started `start_time_ticks` after boot."""
        return self.boot_time_utc + timedelta(seconds=start_time_ticks / tick_rate)
