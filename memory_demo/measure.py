"""
Heap measurement around a block of code.

Memory is sampled after forcing a full collection, so the numbers reflect
what is still reachable rather than garbage waiting for the collector.
Two sources are reported:

- tracemalloc traced bytes: Python allocations only, precise but Python-level
- psutil RSS: whole-process resident size, noisy, allocator pages are rarely
  handed back to the OS

Both are approximate and environment-dependent.
"""

from __future__ import annotations

import gc
import logging
import os
import tracemalloc
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

import psutil

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeapSnapshot:
    """Memory usage at one point in time."""

    traced_bytes: int
    rss_bytes: int

    def to_dict(self) -> dict[str, int]:
        return {"traced_bytes": self.traced_bytes, "rss_bytes": self.rss_bytes}


@dataclass
class MemoryDelta:
    """Difference between two snapshots taken around a measured block."""

    label: str
    before: HeapSnapshot
    after: HeapSnapshot | None = None
    extra: dict[str, object] = field(default_factory=dict)

    @property
    def traced_diff(self) -> int:
        if self.after is None:
            return 0
        return self.after.traced_bytes - self.before.traced_bytes

    @property
    def rss_diff(self) -> int:
        if self.after is None:
            return 0
        return self.after.rss_bytes - self.before.rss_bytes

    def to_dict(self) -> dict[str, object]:
        """Convert to JSON-serializable dict."""
        return {
            "label": self.label,
            "before": self.before.to_dict(),
            "after": self.after.to_dict() if self.after else None,
            "traced_diff": self.traced_diff,
            "rss_diff": self.rss_diff,
            **self.extra,
        }


class MeasurementHarness:
    """Takes forced-collection heap snapshots around the variants of the demo."""

    COLLECT_PASSES = 2

    def __init__(self) -> None:
        self._process = psutil.Process(os.getpid())

    def force_collect(self) -> int:
        """Run full collections; the second pass picks up what finalizers released."""
        collected = 0
        for _ in range(self.COLLECT_PASSES):
            collected += gc.collect()
        return collected

    def snapshot(self) -> HeapSnapshot:
        traced = tracemalloc.get_traced_memory()[0] if tracemalloc.is_tracing() else 0
        rss = self._process.memory_info().rss
        return HeapSnapshot(traced_bytes=traced, rss_bytes=rss)

    @contextmanager
    def measure(self, label: str) -> Iterator[MemoryDelta]:
        """
        Measure the heap across the ``with`` block.

        The yielded ``MemoryDelta`` is filled in with the ``after`` snapshot
        when the block exits, so it must be read after the block. The second
        snapshot is taken even if the block raises.
        """
        started_tracing = not tracemalloc.is_tracing()
        if started_tracing:
            tracemalloc.start()

        try:
            self.force_collect()
            delta = MemoryDelta(label=label, before=self.snapshot())
            logger.debug("%s: before %s", label, delta.before)
            try:
                yield delta
            finally:
                self.force_collect()
                delta.after = self.snapshot()
                logger.debug("%s: after %s", label, delta.after)
        finally:
            if started_tracing:
                tracemalloc.stop()
