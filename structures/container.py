"""
container.py — Stack & Queue
=============================
Ordered containers of `Entry(id, value)`.

Design decisions:
  - Insertion order is the only semantic order.  `id` exists purely so
    the renderer can keep a stable identity for each box while it slides
    around; no container logic ever reads it.
  - Ids come from an `IdSource` that the owner passes in explicitly.
    Two containers may share one source (the ids then stay unique across
    both) or each get their own.
  - Popping an empty container raises InvalidInput and changes nothing.
"""

import itertools
from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Optional

from structures.errors import InvalidInput


# ---------------------------------------------------------------------------
# Entry & id generation
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Entry:
    id:    int
    value: int

    def to_dict(self) -> dict:
        return {"id": self.id, "value": self.value}


class IdSource:
    """Monotonic id counter.  Never hands out the same id twice."""

    def __init__(self, start: int = 0):
        self._counter = itertools.count(start)

    def __call__(self) -> int:
        return next(self._counter)


# ---------------------------------------------------------------------------
# Stack  (LIFO)
# ---------------------------------------------------------------------------
class Stack:
    def __init__(self, ids: Optional[IdSource] = None):
        self._ids:   IdSource    = ids or IdSource()
        self._items: List[Entry] = []

    def push(self, value: int) -> Entry:
        entry = Entry(id=self._ids(), value=value)
        self._items.append(entry)
        return entry

    def pop(self) -> Entry:
        if not self._items:
            raise InvalidInput("Stack is empty. Cannot pop.")
        return self._items.pop()

    def peek(self) -> Optional[Entry]:
        """Top entry, or None when empty."""
        return self._items[-1] if self._items else None

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> List[Entry]:
        """Bottom-to-top copy."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._items))


# ---------------------------------------------------------------------------
# Queue  (FIFO)
# ---------------------------------------------------------------------------
class Queue:
    def __init__(self, ids: Optional[IdSource] = None):
        self._ids:   IdSource     = ids or IdSource()
        self._items: Deque[Entry] = deque()

    def enqueue(self, value: int) -> Entry:
        entry = Entry(id=self._ids(), value=value)
        self._items.append(entry)
        return entry

    def dequeue(self) -> Entry:
        if not self._items:
            raise InvalidInput("Queue is empty. Cannot dequeue.")
        return self._items.popleft()

    def peek(self) -> Optional[Entry]:
        """Front entry, or None when empty."""
        return self._items[0] if self._items else None

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> List[Entry]:
        """Front-to-back copy."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._items))
