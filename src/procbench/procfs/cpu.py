"""
CPU utilization from two cumulative tick snapshots.
"""

from ..models.process import CpuSnapshot

# USER_HZ. Fixed at the conventional value instead of being queried from
# sysconf(_SC_CLK_TCK); kernels configured differently skew CPU percent by
# a constant factor.
CLOCK_TICKS_PER_SECOND = 100


def ticks_to_seconds(ticks: int, tick_rate: int = CLOCK_TICKS_PER_SECOND) -> float:
    return ticks / tick_rate


def cpu_percent(
    prev: CpuSnapshot,
    curr: CpuSnapshot,
    core_count: int,
    tick_rate: int = CLOCK_TICKS_PER_SECOND,
) -> float:
    """
    CPU percent used by a process between two snapshots.

    The result is normalized by elapsed wall time and core count, so a
    single fully busy core on a 4-core machine reads 25.0. Multi-threaded
    bursts can transiently exceed 100 * core_count; no upper clamp is applied.

    Returns 0.0 when the interval is empty or backwards, or when the tick
    counter did not advance (including the decrease caused by a reused pid).
    """
    dt = curr.timestamp - prev.timestamp
    if dt <= 0:
        return 0.0

    d_ticks = curr.cpu_time_ticks - prev.cpu_time_ticks
    if d_ticks <= 0:
        return 0.0

    percent = ticks_to_seconds(d_ticks, tick_rate) / (dt * core_count) * 100.0
    return max(percent, 0.0)
