"""
Process collectors package.

This package provides the strategies benchmarked against each other:

- Abstract interface defining the snapshot/metrics contract
- Sequential procfs collector (baseline)
- Concurrent procfs collector on a bounded worker pool
- Hybrid collector using psutil for the CPU snapshot
- Factory for runtime strategy selection by name

All strategies share the per-process assembly in the base class and produce
equivalent output for the same kernel state, apart from the races inherent
in reading a live process table.
"""

from .base import AbstractProcessCollector, UNKNOWN_USER
from .procfs_collector import ProcFsCollector
from .parallel_collector import ParallelProcFsCollector
from .hybrid_collector import HybridCollector
from .factory import COLLECTOR_NAMES, CollectorFactory

__all__ = [
    "AbstractProcessCollector",
    "UNKNOWN_USER",
    "ProcFsCollector",
    "ParallelProcFsCollector",
    "HybridCollector",
    "COLLECTOR_NAMES",
    "CollectorFactory",
]
