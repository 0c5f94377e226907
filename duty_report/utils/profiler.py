"""
Profiling utilities for the Duty Report dashboard.

A context manager that records wall-clock time, resident memory and CPU usage
around a report build or an import, so both can log how long they took.

Usage:
    from duty_report.utils.profiler import profile_block

    with profile_block("report") as stats:
        build_report(records)

    print(stats.duration_seconds, stats.rss_delta_bytes)
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass, field
from typing import Any, Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    rss_start_bytes: Optional[int] = field(default=None)
    rss_end_bytes: Optional[int] = field(default=None)
    cpu_percent: Optional[float] = field(default=None)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def rss_delta_bytes(self) -> Optional[int]:
        if self.rss_start_bytes is None or self.rss_end_bytes is None:
            return None
        return self.rss_end_bytes - self.rss_start_bytes

    def as_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "duration_seconds": round(self.duration_seconds, 4),
            "rss_end_bytes": self.rss_end_bytes,
            "rss_delta_bytes": self.rss_delta_bytes,
            "cpu_percent": round(self.cpu_percent, 1) if self.cpu_percent is not None else None,
        }


def _rss(process: psutil.Process) -> Optional[int]:
    try:
        return process.memory_info().rss
    except psutil.Error:
        return None


@contextlib.contextmanager
def profile_block(label: str) -> Generator[ProfileStats, None, None]:
    """
    Profile a block of code.

    Parameters
    ----------
    label : str
        Human-friendly label for the profiled block.

    Notes
    -----
    CPU percent is measured between the priming call on entry and the call on
    exit, so it covers exactly the profiled block.
    """
    stats = ProfileStats(label=label)
    process = psutil.Process()
    process.cpu_percent(interval=None)
    stats.rss_start_bytes = _rss(process)

    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts
        stats.rss_end_bytes = _rss(process)
        try:
            stats.cpu_percent = process.cpu_percent(interval=None)
        except psutil.Error:
            stats.cpu_percent = None


__all__ = ["ProfileStats", "profile_block"]
