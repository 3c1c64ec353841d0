from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Customer:
    """A single customer record. Immutable once constructed."""

    name: str


def make_customers(count: int) -> List[Customer]:
    """Build ``count`` customers named ``Customer 0`` .. ``Customer {count-1}``."""
    if not isinstance(count, int) or isinstance(count, bool):
        raise TypeError(f"count must be int, got: {type(count).__name__}")
    if count < 0:
        raise ValueError(f"count must be greater than or equal to 0, got: {count}")
    return [Customer(name=f"Customer {i}") for i in range(count)]
