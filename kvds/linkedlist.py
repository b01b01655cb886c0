"""A doubly linked list of arbitrary values."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

Expected = Callable[[Any], bool]


def _check_range(start: int, stop: int, size: int) -> None:
    """Validate a ``[start, stop)`` slice of a sequence holding ``size`` values."""
    if not 0 <= start < size:
        raise IndexError(f"start out of range: {start}")
    if not start <= stop <= size:
        raise IndexError(f"stop out of range: {stop}")


def _limit_reached(removed: int, count: int) -> bool:
    """True once ``count`` removals are done; a ``count`` of zero or less never limits."""
    return count > 0 and removed >= count


class _Node:
    __slots__ = ("val", "prev", "next")

    def __init__(self, val: Any) -> None:
        self.val = val
        self.prev: _Node | None = None
        self.next: _Node | None = None


class LinkedList:
    """Doubly linked list supporting indexed access and removal by predicate."""

    def __init__(self, *args: Any) -> None:
        self._first: _Node | None = None
        self._last: _Node | None = None
        self._size = 0
        for val in args:
            self.add(val)

    def add(self, val: Any) -> None:
        """Append a value to the tail."""
        node = _Node(val)
        if self._last is None:
            self._first = node
        else:
            node.prev = self._last
            self._last.next = node
        self._last = node
        self._size += 1

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise IndexError(f"index out of bound: {index}")

    def _find(self, index: int) -> _Node:
        if index < self._size // 2:
            node = self._first
            for _ in range(index):
                node = node.next
        else:
            node = self._last
            for _ in range(self._size - 1 - index):
                node = node.prev
        return node

    def get(self, index: int) -> Any:
        self._check_index(index)
        return self._find(index).val

    def set(self, index: int, val: Any) -> None:
        self._check_index(index)
        self._find(index).val = val

    def insert(self, index: int, val: Any) -> None:
        """Insert before the element at ``index``; ``index == len`` appends."""
        if not 0 <= index <= self._size:
            raise IndexError(f"index out of bound: {index}")
        if index == self._size:
            self.add(val)
            return
        pivot = self._find(index)
        node = _Node(val)
        node.prev = pivot.prev
        node.next = pivot
        if pivot.prev is None:
            self._first = node
        else:
            pivot.prev.next = node
        pivot.prev = node
        self._size += 1

    def _remove_node(self, node: _Node) -> None:
        if node.prev is None:
            self._first = node.next
        else:
            node.prev.next = node.next
        if node.next is None:
            self._last = node.prev
        else:
            node.next.prev = node.prev
        node.prev = None
        node.next = None
        self._size -= 1

    def remove(self, index: int) -> Any:
        """Remove and return the value at ``index``."""
        self._check_index(index)
        node = self._find(index)
        self._remove_node(node)
        return node.val

    def remove_last(self) -> Any:
        """Remove and return the last value, or None if the list is empty."""
        if self._last is None:
            return None
        node = self._last
        self._remove_node(node)
        return node.val

    def _remove_matching(self, expected: Expected, count: int, reverse: bool) -> int:
        removed = 0
        node = self._last if reverse else self._first
        while node is not None and not _limit_reached(removed, count):
            neighbour = node.prev if reverse else node.next
            if expected(node.val):
                self._remove_node(node)
                removed += 1
            node = neighbour
        return removed

    def remove_all_by_val(self, expected: Expected) -> int:
        """Remove every value matching ``expected``; return how many were removed."""
        return self._remove_matching(expected, 0, reverse=False)

    def remove_by_val(self, expected: Expected, count: int) -> int:
        """Remove at most ``count`` matches scanning head to tail; ``count <= 0`` removes all."""
        return self._remove_matching(expected, count, reverse=False)

    def reverse_remove_by_val(self, expected: Expected, count: int) -> int:
        """Remove at most ``count`` matches scanning tail to head; ``count <= 0`` removes all."""
        return self._remove_matching(expected, count, reverse=True)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        node = self._first
        while node is not None:
            following = node.next
            yield node.val
            node = following

    def contains(self, expected: Expected) -> bool:
        """Whether any value satisfies ``expected``."""
        return any(expected(val) for val in self)

    def range(self, start: int, stop: int) -> list[Any]:
        """Return values with index in ``[start, stop)``."""
        _check_range(start, stop, self._size)
        result: list[Any] = []
        node = self._find(start)
        for _ in range(stop - start):
            result.append(node.val)
            node = node.next
        return result