"""Identifier allocation with lowest-first reuse of freed ids."""

from __future__ import annotations

import heapq
from collections.abc import Iterable


class IdAllocator:
    """Tracks recycled identifiers and hands out the next one to use.

    Recycled ids live in a min-heap mirrored by a set, so ``allocate`` pops the
    smallest freed id in O(log n) and ``recycle`` ignores duplicates.
    """

    def __init__(self, available: Iterable[int] = ()) -> None:
        self._available = set(available)
        self._heap = sorted(self._available)

    def __len__(self) -> int:
        return len(self._available)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdAllocator):
            return NotImplemented
        return self._available == other._available

    def __repr__(self) -> str:
        return f"IdAllocator(available={self.available()!r})"

    def available(self) -> list[int]:
        """Recycled ids in ascending order."""
        return sorted(self._available)

    def allocate(self, live_count: int) -> int:
        """Return the smallest recycled id, or ``live_count + 1`` if none."""
        if self._heap:
            todo_id = heapq.heappop(self._heap)
            self._available.discard(todo_id)
            return todo_id
        return live_count + 1

    def recycle(self, todo_id: int) -> None:
        """Mark ``todo_id`` as free. The caller guarantees no live todo holds it."""
        if todo_id in self._available:
            return
        self._available.add(todo_id)
        heapq.heappush(self._heap, todo_id)

    def clear(self) -> None:
        self._available.clear()
        self._heap.clear()
