"""
Unit tests for the managed worker pool.

Tests the pool configuration, lifecycle management, worker sizing
and task statistics.
"""

import threading
import time
from unittest.mock import patch

import pytest

from procbench.executor.thread_pool import (
    ManagedThreadPoolExecutor,
    ThreadPoolConfig,
    get_available_core_count,
)


@pytest.mark.unit
class TestThreadPoolConfig:
    """Test cases for ThreadPoolConfig."""

    def test_thread_pool_config_defaults(self):
        """Test ThreadPoolConfig default values."""
        config = ThreadPoolConfig()

        assert config.max_workers == 8
        assert config.thread_name_prefix == "ProcWorker"
        assert config.limit_to_cores is False

    def test_thread_pool_config_custom_values(self):
        """Test ThreadPoolConfig with custom values."""
        config = ThreadPoolConfig(
            max_workers=3,
            thread_name_prefix="CustomWorker",
            limit_to_cores=True,
        )

        assert config.max_workers == 3
        assert config.thread_name_prefix == "CustomWorker"
        assert config.limit_to_cores is True


@pytest.mark.unit
class TestCoreCount:
    """Test cases for logical CPU detection."""

    @patch("procbench.executor.thread_pool.psutil.cpu_count")
    def test_core_count(self, mock_cpu_count):
        mock_cpu_count.return_value = 12

        assert get_available_core_count() == 12
        mock_cpu_count.assert_called_once_with(logical=True)

    @patch("procbench.executor.thread_pool.psutil.cpu_count")
    def test_core_count_unknown(self, mock_cpu_count):
        mock_cpu_count.return_value = None

        assert get_available_core_count() == 1


@pytest.mark.unit
class TestManagedThreadPoolExecutor:
    """Test cases for ManagedThreadPoolExecutor."""

    def test_managed_thread_pool_initialization(self):
        """Test ManagedThreadPoolExecutor initialization."""
        config = ThreadPoolConfig(max_workers=2)
        executor = ManagedThreadPoolExecutor(config)

        assert executor.config == config
        assert executor.executor is None
        assert executor.is_shutdown is False
        assert executor.stats["tasks_submitted"] == 0

    def test_managed_thread_pool_start(self):
        """Test starting the managed thread pool."""
        executor = ManagedThreadPoolExecutor(ThreadPoolConfig(max_workers=2))

        executor.start()

        assert executor.executor is not None
        assert executor.is_shutdown is False
        assert executor.worker_count == 2

        # Clean up
        executor.shutdown(wait=True)

    @patch("procbench.executor.thread_pool.get_available_core_count")
    def test_managed_thread_pool_limited_to_cores(self, mock_core_count):
        """Test capping the worker count at the logical CPU count."""
        mock_core_count.return_value = 2

        executor = ManagedThreadPoolExecutor(
            ThreadPoolConfig(max_workers=16, limit_to_cores=True)
        )
        executor.start()

        assert executor.worker_count == 2

        executor.shutdown(wait=True)

    def test_managed_thread_pool_start_already_started(self):
        """Test starting an already started thread pool."""
        executor = ManagedThreadPoolExecutor(ThreadPoolConfig(max_workers=1))
        executor.start()

        # Should raise RuntimeError on second start
        with pytest.raises(RuntimeError, match="already started"):
            executor.start()

        # Clean up
        executor.shutdown(wait=True)

    def test_managed_thread_pool_submit_task(self):
        """Test submitting tasks to the thread pool."""
        executor = ManagedThreadPoolExecutor(ThreadPoolConfig(max_workers=2))
        executor.start()

        def test_function(x):
            return x * 2

        future = executor.submit(test_function, 5)
        result = future.result(timeout=1.0)
        executor.shutdown(wait=True)

        assert result == 10
        stats = executor.get_stats()
        assert stats["tasks_submitted"] == 1
        assert stats["tasks_completed"] == 1
        assert stats["tasks_failed"] == 0
        assert stats["success_rate"] == 100.0

    def test_managed_thread_pool_failed_task(self):
        """Test that a raising task is counted as failed."""
        executor = ManagedThreadPoolExecutor(ThreadPoolConfig(max_workers=1))
        executor.start()

        def failing():
            raise ValueError("boom")

        future = executor.submit(failing)
        with pytest.raises(ValueError):
            future.result(timeout=1.0)
        executor.shutdown(wait=True)

        assert executor.get_stats()["tasks_failed"] == 1

    def test_managed_thread_pool_thread_names(self):
        """Test that workers carry the configured name prefix."""
        executor = ManagedThreadPoolExecutor(
            ThreadPoolConfig(max_workers=1, thread_name_prefix="NamedWorker")
        )

        with executor:
            name = executor.submit(lambda: threading.current_thread().name).result(timeout=1.0)

        assert name.startswith("NamedWorker")

    def test_managed_thread_pool_submit_not_started(self):
        """Test submitting task to non-started thread pool."""
        executor = ManagedThreadPoolExecutor(ThreadPoolConfig(max_workers=1))

        with pytest.raises(RuntimeError, match="not started"):
            executor.submit(lambda: None)

    def test_managed_thread_pool_submit_after_shutdown(self):
        """Test submitting task after shutdown."""
        executor = ManagedThreadPoolExecutor(ThreadPoolConfig(max_workers=1))
        executor.start()
        executor.shutdown(wait=True)

        with pytest.raises(RuntimeError, match="not started"):
            executor.submit(lambda: None)

    def test_managed_thread_pool_shutdown(self):
        """Test thread pool shutdown."""
        executor = ManagedThreadPoolExecutor(ThreadPoolConfig(max_workers=1))
        executor.start()

        future = executor.submit(lambda: time.sleep(0.1))

        executor.shutdown(wait=True)

        assert executor.is_shutdown is True
        assert future.done()
        assert executor.get_stats()["active_futures"] == 0

    def test_managed_thread_pool_double_shutdown(self):
        """Test that a second shutdown is a no-op."""
        executor = ManagedThreadPoolExecutor(ThreadPoolConfig(max_workers=1))
        executor.start()

        executor.shutdown(wait=True)
        executor.shutdown(wait=True)

        assert executor.is_shutdown is True

    def test_managed_thread_pool_context_manager(self):
        """Test using ManagedThreadPoolExecutor as context manager."""
        executor = ManagedThreadPoolExecutor(ThreadPoolConfig(max_workers=1))

        with executor:
            future = executor.submit(lambda: 42)
            result = future.result()
            assert result == 42

        # Should be shutdown after context exit
        assert executor.is_shutdown is True
