"""A list stored as a sequence of fixed-capacity pages."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from kvds.linkedlist import Expected, _check_range, _limit_reached

# must be even so a full page splits into two equal halves
PAGE_SIZE = 1024


class QuickList:
    """List of pages; cheaper appends and range reads than a linked list."""

    def __init__(self, *args: Any) -> None:
        self._pages: list[list[Any]] = []
        self._size = 0
        for val in args:
            self.add(val)

    def add(self, val: Any) -> None:
        """Append a value to the tail."""
        self._size += 1
        if not self._pages or len(self._pages[-1]) >= PAGE_SIZE:
            self._pages.append([val])
        else:
            self._pages[-1].append(val)

    def _find(self, index: int) -> tuple[int, int]:
        """Return the page index and in-page offset of ``index``."""
        if not 0 <= index < self._size:
            raise IndexError(f"index out of bound: {index}")
        if index < self._size // 2:
            page_beg = 0
            for page_index, page in enumerate(self._pages):
                if page_beg + len(page) > index:
                    return page_index, index - page_beg
                page_beg += len(page)
        else:
            page_beg = self._size
            for page_index in reversed(range(len(self._pages))):
                page_beg -= len(self._pages[page_index])
                if page_beg <= index:
                    return page_index, index - page_beg
        raise IndexError(f"index out of bound: {index}")

    def get(self, index: int) -> Any:
        page_index, offset = self._find(index)
        return self._pages[page_index][offset]

    def set(self, index: int, val: Any) -> None:
        page_index, offset = self._find(index)
        self._pages[page_index][offset] = val

    def insert(self, index: int, val: Any) -> None:
        """Insert before the element at ``index``; ``index == len`` appends."""
        if index == self._size:
            self.add(val)
            return
        page_index, offset = self._find(index)
        page = self._pages[page_index]
        self._size += 1
        if len(page) < PAGE_SIZE:
            page.insert(offset, val)
            return
        half = PAGE_SIZE // 2
        head, tail = page[:half], page[half:]
        if offset < half:
            head.insert(offset, val)
        else:
            tail.insert(offset - half, val)
        self._pages[page_index : page_index + 1] = [head, tail]

    def _delete_at(self, page_index: int, offset: int) -> Any:
        page = self._pages[page_index]
        val = page.pop(offset)
        if not page:
            del self._pages[page_index]
        self._size -= 1
        return val

    def remove(self, index: int) -> Any:
        """Remove and return the value at ``index``."""
        return self._delete_at(*self._find(index))

    def remove_last(self) -> Any:
        """Remove and return the last value, or None if the list is empty."""
        if self._size == 0:
            return None
        return self._delete_at(len(self._pages) - 1, len(self._pages[-1]) - 1)

    def _remove_matching(self, expected: Expected, count: int, reverse: bool) -> int:
        removed = 0
        pages = reversed(self._pages) if reverse else iter(self._pages)
        for page in pages:
            if _limit_reached(removed, count):
                break
            positions = reversed(range(len(page))) if reverse else range(len(page))
            dropped: set[int] = set()
            for pos in positions:
                if _limit_reached(removed, count):
                    break
                if expected(page[pos]):
                    dropped.add(pos)
                    removed += 1
            if dropped:
                page[:] = [val for pos, val in enumerate(page) if pos not in dropped]
        self._pages = [page for page in self._pages if page]
        self._size -= removed
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
        for page in self._pages:
            yield from page

    def __reversed__(self) -> Iterator[Any]:
        for page in reversed(self._pages):
            yield from reversed(page)

    def contains(self, expected: Expected) -> bool:
        """Whether any value satisfies ``expected``."""
        return any(expected(val) for val in self)

    def range(self, start: int, stop: int) -> list[Any]:
        """Return values with index in ``[start, stop)``."""
        _check_range(start, stop, self._size)
        wanted = stop - start
        result: list[Any] = []
        page_index, offset = self._find(start) if wanted else (0, 0)
        while len(result) < wanted:
            page = self._pages[page_index]
            result.extend(page[offset : offset + wanted - len(result)])
            page_index += 1
            offset = 0
        return result