from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Iterator, List, Optional, TypeVar


T = TypeVar("T")


class HistoryBuffer(Generic[T]):
    """Bounded oldest-first history of the most recent values.

    Unlike ``deque(maxlen=...)`` the buffer never drops silently: callers
    evict explicitly with ``pop_oldest`` so they can inspect what leaves.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity: int = capacity
        self._buffer: Deque[T] = deque()

    def add(self, item: T) -> None:
        if len(self._buffer) >= self._capacity:
            raise OverflowError("history buffer is full; evict before adding")
        self._buffer.append(item)

    def pop_oldest(self) -> T:
        return self._buffer.popleft()

    def oldest(self) -> Optional[T]:
        return self._buffer[0] if self._buffer else None

    def newest(self, back: int = 0) -> T:
        """Return the value ``back`` steps before the newest one."""
        return self._buffer[-1 - back]

    def size(self) -> int:
        return len(self._buffer)

    def capacity(self) -> int:
        return self._capacity

    def is_full(self) -> bool:
        return len(self._buffer) >= self._capacity

    def snapshot(self) -> List[T]:
        return list(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)

    def __iter__(self) -> Iterator[T]:
        return iter(self._buffer)
