"""
Pytest configuration and shared fixtures for the procbench test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the procbench project. Most collector tests run
against a fake procfs tree built under tmp_path so they do not depend on
the processes running on the test machine.
"""

import shutil
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")
    config.addinivalue_line("markers", "performance: mark test as a performance test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Fake procfs
# ============================================================================

BOOT_TIME_EPOCH = 1_700_000_000

# Kernel fields 1..52; field 25 (rsslim) is RLIM_INFINITY on most processes.
STAT_FIELD_COUNT = 52
RSSLIM_INFINITY = "18446744073709551615"


def make_stat_line(
    pid: int,
    name: str,
    state: str = "S",
    utime: Any = 0,
    stime: Any = 0,
    starttime: Any = 0,
    vsize: Any = 0,
    rss: Any = 0,
) -> str:
    """Build a full-length stat line with the given values at their kernel positions."""
    # tokens[i] holds kernel field i + 4
    tokens = ["0"] * (STAT_FIELD_COUNT - 3)
    tokens[0] = "1"  # ppid
    tokens[14 - 4] = str(utime)
    tokens[15 - 4] = str(stime)
    tokens[22 - 4] = str(starttime)
    tokens[23 - 4] = str(vsize)
    tokens[24 - 4] = str(rss)
    tokens[25 - 4] = RSSLIM_INFINITY
    return f"{pid} ({name}) {state} " + " ".join(tokens) + "\n"


class FakeProcFs:
    """A minimal procfs tree: /stat with btime plus per-pid stat/status/cmdline/io."""

    def __init__(self, root: Path, btime: Optional[int] = BOOT_TIME_EPOCH):
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)
        stat_lines = ["cpu  10 0 10 1000 0 0 0 0 0 0", "intr 0"]
        if btime is not None:
            stat_lines.append(f"btime {btime}")
        stat_lines.append("processes 100")
        (self.root / "stat").write_text("\n".join(stat_lines) + "\n")
        # Non-pid entries that must be ignored by enumeration.
        (self.root / "self").mkdir(exist_ok=True)
        (self.root / "meminfo").write_text("MemTotal: 1 kB\n")

    def add_process(
        self,
        pid: int,
        name: str = "proc",
        state: str = "S",
        utime: Any = 0,
        stime: Any = 0,
        starttime: Any = 0,
        vsize: Any = 0,
        rss: Any = 0,
        uid: Optional[int] = 1000,
        threads: Optional[int] = 1,
        vm_rss_kb: Optional[int] = None,
        vm_size_kb: Optional[int] = None,
        cmdline: Optional[bytes] = None,
        read_bytes: Optional[int] = None,
        with_status: bool = True,
        stat_line: Optional[str] = None,
    ) -> Path:
        pid_dir = self.root / str(pid)
        pid_dir.mkdir(parents=True, exist_ok=True)

        if stat_line is None:
            stat_line = make_stat_line(pid, name, state, utime, stime, starttime, vsize, rss)
        (pid_dir / "stat").write_text(stat_line)

        if with_status:
            status_lines = [f"Name:\t{name}", f"State:\t{state} (sleeping)"]
            if uid is not None:
                status_lines.append(f"Uid:\t{uid}\t{uid}\t{uid}\t{uid}")
            if vm_size_kb is not None:
                status_lines.append(f"VmSize:\t{vm_size_kb:8d} kB")
            if vm_rss_kb is not None:
                status_lines.append(f"VmRSS:\t{vm_rss_kb:8d} kB")
            if threads is not None:
                status_lines.append(f"Threads:\t{threads}")
            (pid_dir / "status").write_text("\n".join(status_lines) + "\n")

        (pid_dir / "cmdline").write_bytes(cmdline if cmdline is not None else b"")

        if read_bytes is not None:
            (pid_dir / "io").write_text(
                f"rchar: 100\nwchar: 50\nsyscr: 1\nsyscw: 1\n"
                f"read_bytes: {read_bytes}\nwrite_bytes: 0\n"
            )
        return pid_dir

    def remove_process(self, pid: int) -> None:
        shutil.rmtree(self.root / str(pid), ignore_errors=True)


PASSWD_CONTENT = (
    "root:x:0:0:root:/root:/bin/bash\n"
    "# comment line\n"
    "daemon:x:1:1:daemon:/usr/sbin:/usr/sbin/nologin\n"
    "alice:x:1000:1000:Alice,,,:/home/alice:/bin/bash\n"
    "broken-line-without-fields\n"
)


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def fake_proc(tmp_path) -> FakeProcFs:
    """An empty fake procfs tree with a valid boot time."""
    return FakeProcFs(tmp_path / "proc")


@pytest.fixture
def passwd_file(tmp_path) -> Path:
    path = tmp_path / "passwd"
    path.write_text(PASSWD_CONTENT)
    return path


@pytest.fixture
def collector_kwargs(fake_proc, passwd_file) -> Dict[str, Any]:
    """Constructor arguments pointing a collector at the fake procfs tree."""
    return {
        "proc_root": fake_proc.root,
        "passwd_path": passwd_file,
        "core_count": 1,
        "page_size": 4096,
    }


@pytest.fixture
def populated_proc(fake_proc) -> FakeProcFs:
    """A fake procfs tree with a handful of ordinary processes."""
    fake_proc.add_process(
        1, name="init", utime=500, stime=200, starttime=100, vsize=1048576, rss=10,
        uid=0, threads=1, vm_rss_kb=40, vm_size_kb=1024, cmdline=b"/sbin/init\0splash\0",
        read_bytes=8192,
    )
    fake_proc.add_process(
        42, name="(weird) proc", state="R", utime=30, stime=10, starttime=250,
        uid=1000, threads=4, vm_rss_kb=2048, vm_size_kb=8192,
        cmdline=b"python\0-m\0worker\0", read_bytes=4096,
    )
    fake_proc.add_process(
        77, name="kworker/0:1", state="I", uid=0, threads=1, vm_rss_kb=None,
        rss=3,
    )
    return fake_proc


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data(fake_proc, passwd_file) -> Dict[str, Any]:
    """Sample configuration data for testing."""
    return {
        "benchmark": {
            "iterations": 3,
            "interval_ms": 0,
            "top_n": 0,
            "track_allocations": False,
            "collectors": ["procfs", "procfs-parallel"],
        },
        "collector": {
            "include_vms": False,
            "include_threads": False,
            "include_read_bytes": False,
            "proc_root": str(fake_proc.root),
            "passwd_path": str(passwd_file),
            "parallel": {
                "max_workers": 2,
                "thread_name_prefix": "TestWorker",
            },
        },
    }


@pytest.fixture
def config_file(tmp_path, sample_config_data) -> Path:
    """Write sample_config_data to a temporary config.toml."""
    import toml

    path = tmp_path / "config.toml"
    with open(path, "w") as f:
        toml.dump(sample_config_data, f)
    return path


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield  # Run the test

    from procbench.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(original_config_path)
