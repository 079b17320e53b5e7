"""A doubly ended list: items go in at the head and come out at the tail."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Optional

Dealloc = Optional[Callable[[Any], None]]


class LinkedListError(Exception):
    """Raised when a list operation is given invalid arguments."""


class ListEmptyError(LinkedListError, IndexError):
    """Raised when an item is requested from an empty list."""


@dataclass
class _Element:
    data: Any
    dealloc: Dealloc


class LinkedList:
    """List that adds at the head and removes from the tail (first in, first out).

    Each item may carry a release function that :meth:`flush` calls on it.
    Iteration runs from the head (newest item) to the tail (oldest item).
    """

    def __init__(self) -> None:
        # Index 0 is the head, the last index is the tail.
        self._elements: deque[_Element] = deque()

    def add(self, data: Any, dealloc: Dealloc = None) -> None:
        """Add ``data`` at the head; ``dealloc`` is called on it by :meth:`flush`."""
        if data is None:
            raise LinkedListError("data must not be None")
        if dealloc is not None and not callable(dealloc):
            raise LinkedListError("dealloc must be callable or None")
        self._elements.appendleft(_Element(data, dealloc))

    def remove(self) -> Any:
        """Remove and return the item at the tail, the oldest one added."""
        if not self._elements:
            raise ListEmptyError("list is empty")
        return self._elements.pop().data

    def is_empty(self) -> bool:
        """Return True when the list holds no items."""
        return not self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Any]:
        return (element.data for element in list(self._elements))

    def flush(self) -> None:
        """Remove every item, calling each item's release function if it has one."""
        while self._elements:
            element = self._elements.popleft()
            if element.dealloc is not None:
                element.dealloc(element.data)

    def search(
        self,
        equal: Callable[[Any, Any], bool],
        data_0: Any,
        remove_if_found: bool = False,
    ) -> Any:
        """Return the first item, from the head, for which ``equal(data_0, item)`` holds.

        Returns None when nothing matches. When ``remove_if_found`` is true the
        matching item is taken out of the list; it is handed back to the caller,
        so its release function is not called.
        """
        if equal is None or not callable(equal):
            raise LinkedListError("equal must be callable")
        if not self._elements:
            raise ListEmptyError("list is empty")
        for index, element in enumerate(self._elements):
            if equal(data_0, element.data):
                if remove_if_found:
                    del self._elements[index]
                return element.data
        return None