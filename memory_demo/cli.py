"""
Console entry point: runs both processors and prints how much memory each
one leaves behind.

Usage:
    memory-demo
    python -m memory_demo
"""

import logging
import sys
from typing import Any, List, Optional

from memory_demo.event import ProcessedEvent
from memory_demo.measure import MeasurementHarness, MemoryDelta
from memory_demo.processor import ManagedProcessor, UnmanagedProcessor

logger = logging.getLogger(__name__)

log_fmt = r"%(asctime)-15s %(levelname)s %(name)s %(funcName)s:%(lineno)d %(message)s"
datefmt = "%Y-%m-%d %H:%M:%S"

DEFAULT_CUSTOMER_COUNT = 100_000


def on_processed(sender: Any, event: ProcessedEvent) -> None:
    logger.debug("Processed notification from %s", type(sender).__name__)


class Driver:
    """Measures each processor variant in turn and reports the heap delta."""

    def __init__(
        self,
        count: int = DEFAULT_CUSTOMER_COUNT,
        harness: Optional[MeasurementHarness] = None,
    ) -> None:
        if count < 0:
            raise ValueError(f"count must be greater than or equal to 0, got: {count}")
        self.count = count
        self.harness = harness if harness is not None else MeasurementHarness()

    def run_unmanaged(self) -> MemoryDelta:
        print("[BAD] UnmanagedProcessor")

        with self.harness.measure("unmanaged") as delta:
            processor = UnmanagedProcessor()
            processor.subscribe(on_processed)
            processor.load(self.count)
            processor.process()
        # processor is still referenced here, so the second snapshot sees
        # its customers and its subscriber
        delta.extra["customers_retained"] = len(processor.customers)
        delta.extra["subscribers_retained"] = processor.subscriber_count

        self._report("BAD", delta)
        return delta

    def run_managed(self) -> MemoryDelta:
        print("[OPT] ManagedProcessor")

        with self.harness.measure("managed") as delta:
            with ManagedProcessor() as processor:
                processor.subscribe(on_processed)
                processor.load(self.count)
                processor.process()
        customers = processor.customers
        delta.extra["customers_retained"] = 0 if customers is None else len(customers)
        delta.extra["subscribers_retained"] = processor.subscriber_count

        self._report("OPT", delta)
        return delta

    def run(self) -> List[MemoryDelta]:
        print("=== Memory demo ===\n")
        results = [self.run_unmanaged()]
        print()
        results.append(self.run_managed())
        return results

    @staticmethod
    def _report(tag: str, delta: MemoryDelta) -> None:
        print(f"[{tag}] Approx memory diff: {delta.traced_diff} bytes")
        print(f"[{tag}] RSS diff: {delta.rss_diff} bytes")
        print(
            f"[{tag}] Still referenced: {delta.extra['customers_retained']} customers, "
            f"{delta.extra['subscribers_retained']} subscribers"
        )


def main() -> int:
    logging.basicConfig(format=log_fmt, level=logging.WARNING, datefmt=datefmt)

    Driver().run()

    print("\nDone. Press Enter.")
    try:
        input()
    except (EOFError, KeyboardInterrupt):
        logger.debug("No input available, exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
