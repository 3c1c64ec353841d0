import inspect
import logging
import weakref
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessedEvent:
    """Empty signal handed to subscribers after a processing pass."""

    EMPTY: ClassVar["ProcessedEvent"]


ProcessedEvent.EMPTY = ProcessedEvent()

Subscriber = Callable[[Any, ProcessedEvent], None]


def _ensure_callable(callback: Any) -> None:
    if not callable(callback):
        raise TypeError(f"subscriber must be callable, got: {type(callback).__name__}")


class Notifier:
    """
    Subscriber store that owns its callbacks.

    There is no way to remove a callback once added: every subscriber, and
    everything it references, lives as long as the notifier does.
    """

    def __init__(self) -> None:
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> None:
        _ensure_callable(callback)
        self._subscribers.append(callback)

    def notify(self, sender: Any) -> None:
        for callback in list(self._subscribers):
            callback(sender, ProcessedEvent.EMPTY)

    def __len__(self) -> int:
        return len(self._subscribers)


class Subscription:
    """
    Handle returned by ``ManagedNotifier.subscribe``.

    Holds the callback strongly, or only weakly when created with ``weak=True``.
    Keeps a weak reference to its notifier so that a forgotten handle never
    keeps the notifier alive.
    """

    def __init__(
        self, notifier: "ManagedNotifier", callback: Subscriber, weak: bool = False
    ) -> None:
        self._notifier = weakref.ref(notifier)
        self.weak = weak
        if weak:
            try:
                # bound methods die immediately under a plain weakref
                if inspect.ismethod(callback):
                    self._callback_ref = weakref.WeakMethod(callback)
                else:
                    self._callback_ref = weakref.ref(callback)
            except TypeError:
                raise TypeError(
                    "subscriber must support weak references when weak=True, "
                    f"got: {type(callback).__name__}"
                ) from None
            self._callback: Optional[Subscriber] = None
        else:
            self._callback_ref = None
            self._callback = callback

    def resolve(self) -> Optional[Subscriber]:
        """Return the callback, or None if a weak subscriber has been collected."""
        if self._callback_ref is not None:
            return self._callback_ref()
        return self._callback

    @property
    def active(self) -> bool:
        notifier = self._notifier()
        return notifier is not None and self in notifier and self.resolve() is not None

    def cancel(self) -> None:
        notifier = self._notifier()
        if notifier is not None:
            notifier.unsubscribe(self)

    def _detach(self) -> None:
        self._callback = None
        self._callback_ref = None

    def __repr__(self) -> str:
        return f"<Subscription weak={self.weak} active={self.active}>"


class ManagedNotifier:
    """Subscriber store with an explicit removal path and optional weak subscribers."""

    def __init__(self) -> None:
        self._subscriptions: List[Subscription] = []

    def subscribe(self, callback: Subscriber, weak: bool = False) -> Subscription:
        _ensure_callable(callback)
        subscription = Subscription(self, callback, weak=weak)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove ``subscription``. Returns False if it was not registered."""
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            return False
        subscription._detach()
        return True

    def clear(self) -> int:
        """Detach every subscriber and return how many were registered."""
        count = len(self._subscriptions)
        for subscription in self._subscriptions:
            subscription._detach()
        self._subscriptions.clear()
        return count

    def notify(self, sender: Any) -> None:
        dead = []
        for subscription in list(self._subscriptions):
            callback = subscription.resolve()
            if callback is None:
                # not registered any more: detached earlier in this pass
                if subscription in self:
                    dead.append(subscription)
                continue
            callback(sender, ProcessedEvent.EMPTY)

        pruned = 0
        for subscription in dead:
            if subscription in self:
                self._subscriptions.remove(subscription)
                pruned += 1
        if pruned:
            logger.debug("Pruned %d collected weak subscribers", pruned)

    def __contains__(self, subscription: object) -> bool:
        return any(s is subscription for s in self._subscriptions)

    def __len__(self) -> int:
        return sum(1 for s in self._subscriptions if s.resolve() is not None)
