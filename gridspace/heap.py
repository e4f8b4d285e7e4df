"""Binary min-heap used as the A* open set.

Items are ordered by a numeric priority; equal priorities come out in
insertion order. There is no decrease-key: inserting an item that is
already queued adds a second entry, and the older (worse) entry is simply
extracted later. ``find_path`` relies on its closed set to make those stale
entries harmless, identifying items through the heap's ``key_of``.

``key_fn`` maps an item to a hashable identity; logically equal items share
a key even when they are distinct objects.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, Generic, Hashable, TypeVar

T = TypeVar("T")


class MinHeap(Generic[T]):
    def __init__(self, key_fn: Callable[[T], Hashable]) -> None:
        self._key_fn = key_fn
        self._entries: list[tuple[float, int, T]] = []
        self._seq = itertools.count()

    def key_of(self, item: T) -> Hashable:
        return self._key_fn(item)

    def insert(self, item: T, priority: float) -> None:
        heapq.heappush(self._entries, (priority, next(self._seq), item))

    def extract_min(self) -> T:
        """Remove and return the lowest-priority item.

        Raises IndexError if the heap is empty.
        """
        if not self._entries:
            raise IndexError("extract_min from an empty heap")
        return heapq.heappop(self._entries)[2]

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)
