import logging

import pytest

log_fmt = r"%(asctime)-15s %(levelname)s %(name)s %(funcName)s:%(lineno)d %(message)s"
datefmt = "%Y-%m-%d %H:%M:%S"
logging.basicConfig(format=log_fmt, level=logging.DEBUG, datefmt=datefmt)


class CountingSubscriber:
    """Subscriber that records every notification it receives."""

    def __init__(self):
        self.calls = []

    def __call__(self, sender, event):
        self.calls.append((sender, event))

    @property
    def count(self):
        return len(self.calls)


class Listener:
    """Object subscribing with a bound method, used to observe lifetimes."""

    def __init__(self):
        self.payload = "x" * 1000
        self.calls = 0

    def on_processed(self, sender, event):
        self.calls += 1


@pytest.fixture
def counting_subscriber():
    return CountingSubscriber()


@pytest.fixture
def listener_cls():
    """The class, not an instance: pytest keeps fixture values alive."""
    return Listener
