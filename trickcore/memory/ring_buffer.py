"""Fixed-capacity buffer that evicts its oldest entry when full."""

from collections import deque
from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """Bounded FIFO history.

    Appending to a full buffer drops the oldest item.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            msg = f"Capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self._items: deque[T] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._items.maxlen or 0

    def append(self, item: T) -> None:
        self._items.append(item)

    def latest(self, count: int) -> list[T]:
        """Return up to the newest `count` items, oldest first."""
        if count <= 0:
            return []
        return list(self._items)[-count:]

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]
