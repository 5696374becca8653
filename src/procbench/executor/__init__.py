"""
Worker pool management for the procbench package.

Provides the bounded, managed thread pool used by the concurrent
collection strategy.
"""

from .thread_pool import (
    ManagedThreadPoolExecutor,
    ThreadPoolConfig,
    get_available_core_count,
)

__all__ = [
    "ManagedThreadPoolExecutor",
    "ThreadPoolConfig",
    "get_available_core_count",
]
