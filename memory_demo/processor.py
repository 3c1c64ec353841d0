import logging
from types import TracebackType
from typing import List, Optional, Type

from memory_demo.customer import Customer, make_customers
from memory_demo.event import ManagedNotifier, Notifier, Subscriber, Subscription

logger = logging.getLogger(__name__)


class UnmanagedProcessor:
    """
    Loads and processes customers, then keeps everything.

    Neither the customer list nor the subscribers are ever released: both stay
    reachable for as long as the processor itself is reachable.
    """

    def __init__(self) -> None:
        self._customers: List[Customer] = []
        self._processed = Notifier()

    @property
    def customers(self) -> List[Customer]:
        return self._customers

    @property
    def subscriber_count(self) -> int:
        return len(self._processed)

    def subscribe(self, callback: Subscriber) -> None:
        """Register ``callback(sender, event)``. There is no matching unsubscribe."""
        self._processed.subscribe(callback)

    def load(self, count: int) -> None:
        self._customers = make_customers(count)
        logger.debug("Loaded %d customers", count)

    def process(self) -> None:
        for _customer in self._customers:
            pass
        logger.debug("Processed %d customers", len(self._customers))
        self._processed.notify(self)


class ManagedProcessor:
    """
    Same work as ``UnmanagedProcessor``, with deterministic release.

    Use it as a context manager so ``release`` runs on every exit path::

        with ManagedProcessor() as processor:
            processor.subscribe(on_processed)
            processor.load(100_000)
            processor.process()
    """

    def __init__(self) -> None:
        self._customers: Optional[List[Customer]] = []
        self._processed = ManagedNotifier()
        self._released = False

    @property
    def customers(self) -> Optional[List[Customer]]:
        """The loaded customers, or None once released."""
        return self._customers

    @property
    def subscriber_count(self) -> int:
        return len(self._processed)

    @property
    def released(self) -> bool:
        return self._released

    def subscribe(self, callback: Subscriber, weak: bool = False) -> Optional[Subscription]:
        """
        Register ``callback(sender, event)`` and return its handle.

        With ``weak=True`` only a weak reference is kept, so the subscriber's
        lifetime is not extended by this processor; the callback must then
        support weak references, otherwise TypeError is raised. Returns None
        after release.
        """
        if self._released:
            logger.warning("subscribe() on a released processor is ignored")
            return None
        return self._processed.subscribe(callback, weak=weak)

    def unsubscribe(self, subscription: Subscription) -> bool:
        return self._processed.unsubscribe(subscription)

    def load(self, count: int) -> None:
        if self._released:
            logger.warning("load() on a released processor is ignored")
            return
        self._customers = make_customers(count)
        logger.debug("Loaded %d customers", count)

    def process(self) -> None:
        if self._customers is None:
            return

        for _customer in self._customers:
            pass
        logger.debug("Processed %d customers", len(self._customers))
        self._processed.notify(self)

    def release(self) -> None:
        """Drop the customers and detach all subscribers. Safe to call repeatedly."""
        if self._customers is not None:
            self._customers.clear()
        self._customers = None
        detached = self._processed.clear()
        if not self._released:
            logger.debug("Released processor, detached %d subscribers", detached)
        self._released = True

    def __enter__(self) -> "ManagedProcessor":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.release()
