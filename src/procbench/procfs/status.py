"""
Readers for procfs files.

Every reader turns an OSError (process exited, permission denied, file
absent on this kernel) into None, so callers treat absence as an ordinary
branch instead of catching exceptions at every call site.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from ..models.process import StatusFields

logger = logging.getLogger(__name__)


def list_pids(proc_root: Path) -> List[int]:
    """Return the numeric directory names under `proc_root`, in listing order."""
    pids: List[int] = []
    try:
        with os.scandir(proc_root) as entries:
            for entry in entries:
                if entry.name.isascii() and entry.name.isdigit():
                    pids.append(int(entry.name))
    except OSError as e:
        logger.warning(f"Cannot list {proc_root}: {e}")
    return pids


def read_text(path: Path) -> Optional[str]:
    """Read a whole procfs file as text, or None if it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError:
        return None


def parse_status(lines: Iterable[str]) -> StatusFields:
    """
    Extract Uid, Threads, VmRSS and VmSize from status file lines.

    VmRSS and VmSize are reported in kB and converted to bytes. Fields that
    are missing or malformed stay None.
    """
    uid: Optional[int] = None
    threads: Optional[int] = None
    vm_rss_bytes: Optional[int] = None
    vm_size_bytes: Optional[int] = None

    for line in lines:
        parts = line.split()
        if len(parts) < 2 or not (parts[1].isascii() and parts[1].isdigit()):
            continue

        key = parts[0]
        if key == "Uid:":
            # real, effective, saved, filesystem; the real uid comes first
            uid = int(parts[1])
        elif key == "Threads:":
            threads = int(parts[1])
        elif key == "VmRSS:":
            vm_rss_bytes = int(parts[1]) * 1024
        elif key == "VmSize:":
            vm_size_bytes = int(parts[1]) * 1024

    return StatusFields(
        uid=uid,
        threads=threads,
        vm_rss_bytes=vm_rss_bytes,
        vm_size_bytes=vm_size_bytes,
    )


def read_status(path: Path) -> Optional[StatusFields]:
    text = read_text(path)
    if text is None:
        return None
    return parse_status(text.splitlines())


def read_cmdline(path: Path) -> Optional[str]:
    """
    Read a NUL-separated command line and join its arguments with spaces.

    Kernel threads have an empty cmdline, which yields None.
    """
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError:
        return None
    if not raw:
        return None
    cmdline = raw.replace(b"\0", b" ").decode("utf-8", errors="replace").strip()
    return cmdline or None


def read_read_bytes(path: Path) -> Optional[int]:
    """Return the `read_bytes` counter from a process io file."""
    text = read_text(path)
    if text is None:
        return None
    for line in text.splitlines():
        if line.startswith("read_bytes:"):
            parts = line.split()
            if len(parts) == 2 and parts[1].isascii() and parts[1].isdigit():
                return int(parts[1])
            return None
    return None
