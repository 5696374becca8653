"""
Configuration data models.

This module contains the configuration structures for the collectors and
the benchmark runner, plus the root object aggregating them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class CollectorOptions:
    """
    Toggles for the optional, more expensive per-process fields.

    These are cost controls: each flag enables an extra read or parse per
    process and does not change the correctness of the other fields.
    """

    include_vms: bool = False
    include_threads: bool = False
    include_read_bytes: bool = False


@dataclass
class CollectorConfig:
    """
    Configuration for collector construction, loaded from `[collector]`.
    """

    options: CollectorOptions = field(default_factory=CollectorOptions)
    # Mount point of the process information pseudo-filesystem.
    proc_root: Path = Path("/proc")
    # User database used to resolve uids to names.
    passwd_path: Path = Path("/etc/passwd")

    # [collector.parallel]
    max_workers: int = 8
    thread_name_prefix: str = "ProcWorker"


@dataclass
class BenchmarkConfig:
    """
    Configuration for benchmark runs, loaded from `[benchmark]`.
    """

    iterations: int = 50
    interval_seconds: float = 0.1
    # None disables the top-N variant.
    top_n: Optional[int] = None
    track_allocations: bool = True
    # Strategy names compared by default, first one is the baseline.
    collectors: List[str] = field(default_factory=lambda: ["procfs", "procfs-parallel"])


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    benchmark: BenchmarkConfig
    collector: CollectorConfig
