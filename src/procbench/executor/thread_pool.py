"""
Bounded worker pool for concurrent collection passes.

This module wraps ThreadPoolExecutor with lifecycle checks, task statistics
and consistent error reporting. The concurrent collector owns one pool for
its whole lifetime and fans per-process reads out on it.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Set

import psutil

from ..validation import ErrorSeverity, handle_error

logger = logging.getLogger(__name__)


def get_available_core_count() -> int:
    """Number of logical CPUs, falling back to 1 when it cannot be determined."""
    return psutil.cpu_count(logical=True) or 1


@dataclass
class ThreadPoolConfig:
    """Configuration for a managed worker pool."""

    max_workers: int = 8
    thread_name_prefix: str = "ProcWorker"
    # Cap the worker count at the number of logical CPUs.
    limit_to_cores: bool = False


class ManagedThreadPoolExecutor:
    """
    ThreadPoolExecutor with explicit start/shutdown and task statistics.

    Tracks submitted, completed and failed tasks so a collector can report
    how much per-process work a pass fanned out.
    """

    def __init__(self, config: ThreadPoolConfig):
        """
        Initialize the managed thread pool executor.

        Args:
            config: Thread pool configuration
        """
        self.config = config
        self.executor: Optional[ThreadPoolExecutor] = None
        self.active_futures: Set[Future] = set()
        self.is_shutdown = False
        self.worker_count = 0
        self._lock = threading.Lock()

        self.stats = {
            "tasks_submitted": 0,
            "tasks_completed": 0,
            "tasks_failed": 0,
        }

    def start(self) -> None:
        """
        Start the thread pool executor.

        Raises:
            RuntimeError: If already started
        """
        if self.executor is not None:
            raise RuntimeError("Thread pool already started")

        try:
            workers = max(1, self.config.max_workers)
            if self.config.limit_to_cores:
                workers = min(workers, get_available_core_count())

            self.executor = ThreadPoolExecutor(
                max_workers=workers,
                thread_name_prefix=self.config.thread_name_prefix,
            )
            self.worker_count = workers
            self.is_shutdown = False
            logger.info(
                f"Started thread pool '{self.config.thread_name_prefix}' with {workers} workers"
            )

        except Exception as e:
            handle_error(
                error=e,
                context="starting managed thread pool",
                severity=ErrorSeverity.ERROR,
                reraise=True,
                logger=logger,
            )

    def submit(self, fn: Callable, *args, **kwargs) -> Future:
        """
        Submit a task to the thread pool.

        Raises:
            RuntimeError: If executor is not started or is shutdown
        """
        if self.executor is None:
            raise RuntimeError("Thread pool not started")
        if self.is_shutdown:
            raise RuntimeError("Thread pool is shutdown")

        with self._lock:
            self.stats["tasks_submitted"] += 1

        future = self.executor.submit(fn, *args, **kwargs)
        with self._lock:
            self.active_futures.add(future)
        future.add_done_callback(self._task_completed)
        return future

    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        """
        Shutdown the thread pool executor.

        Args:
            wait: Whether to wait for completion
            cancel_futures: Whether to cancel pending futures
        """
        if self.executor is None or self.is_shutdown:
            return

        try:
            self.is_shutdown = True
            self.executor.shutdown(wait=wait, cancel_futures=cancel_futures)

            if wait:
                logger.info("Thread pool shutdown completed")
            else:
                logger.info("Thread pool shutdown initiated")

        except Exception as e:
            handle_error(
                error=e,
                context="shutting down thread pool",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger,
            )
        finally:
            self.executor = None
            with self._lock:
                self.active_futures.clear()

    def get_stats(self) -> Dict[str, Any]:
        """
        Get current thread pool statistics.

        Returns:
            Dictionary containing usage statistics
        """
        with self._lock:
            stats = self.stats.copy()
            stats["active_futures"] = len(self.active_futures)

        stats["is_shutdown"] = self.is_shutdown
        stats["worker_count"] = self.worker_count
        stats["success_rate"] = (
            stats["tasks_completed"] / max(1, stats["tasks_submitted"]) * 100
        )
        return stats

    def _task_completed(self, future: Future) -> None:
        with self._lock:
            self.active_futures.discard(future)

            if future.cancelled():
                return
            if future.exception() is not None:
                self.stats["tasks_failed"] += 1
            else:
                self.stats["tasks_completed"] += 1

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.shutdown(wait=True)
