"""
Access to the Linux process information pseudo-filesystem.

This package provides:

- Parsing of the per-process stat record, including process names that
  contain spaces and parentheses
- The CPU percent delta model over cumulative tick counters
- The boot time and uid-to-name caches shared by all collectors
- Readers for the status, cmdline and io files, returning None when a
  process disappears or a file is not accessible
"""

from .boot_time import BootTime, BootTimeError
from .cpu import CLOCK_TICKS_PER_SECOND, cpu_percent, ticks_to_seconds
from .stat_parser import STAT_FIELDS, StatLineParser, parse_stat_line
from .status import (
    list_pids,
    parse_status,
    read_cmdline,
    read_read_bytes,
    read_status,
    read_text,
)
from .users import UserNameCache

__all__ = [
    "BootTime",
    "BootTimeError",
    "CLOCK_TICKS_PER_SECOND",
    "cpu_percent",
    "ticks_to_seconds",
    "STAT_FIELDS",
    "StatLineParser",
    "parse_stat_line",
    "list_pids",
    "parse_status",
    "read_cmdline",
    "read_read_bytes",
    "read_status",
    "read_text",
    "UserNameCache",
]
