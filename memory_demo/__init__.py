from memory_demo.customer import Customer
from memory_demo.event import ProcessedEvent, Subscription
from memory_demo.measure import MeasurementHarness, MemoryDelta
from memory_demo.processor import ManagedProcessor, UnmanagedProcessor

__version__ = "0.1.0"
__all__ = [
    "Customer",
    "ManagedProcessor",
    "MeasurementHarness",
    "MemoryDelta",
    "ProcessedEvent",
    "Subscription",
    "UnmanagedProcessor",
]
