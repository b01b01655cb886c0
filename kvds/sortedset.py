"""A set of string members ordered by a floating-point score."""

from __future__ import annotations

from collections.abc import Iterator

from kvds.border import NEGATIVE_INF_BORDER, POSITIVE_INF_BORDER, ScoreBorder
from kvds.skiplist import Element, Skiplist


class SortedSet:
    """Members with scores, ordered by score and then by member."""

    def __init__(self) -> None:
        self._dict: dict[str, Element] = {}
        self._skiplist = Skiplist()

    def add(self, member: str, score: float) -> bool:
        """Set the member's score; return True if the member is new."""
        old = self._dict.get(member)
        self._dict[member] = Element(member, score)
        if old is not None:
            if old.score != score:
                self._skiplist.remove(member, old.score)
                self._skiplist.insert(member, score)
            return False
        self._skiplist.insert(member, score)
        return True

    def __len__(self) -> int:
        return len(self._dict)

    def __contains__(self, member: object) -> bool:
        return member in self._dict

    def get(self, member: str) -> Element | None:
        """Return the member's element, or None if it is absent."""
        return self._dict.get(member)

    def remove(self, member: str) -> bool:
        """Remove the member; return whether it was present."""
        element = self._dict.pop(member, None)
        if element is None:
            return False
        self._skiplist.remove(member, element.score)
        return True

    def get_rank(self, member: str, desc: bool = False) -> int:
        """Return the 0-based rank of the member, or -1 if it is absent."""
        element = self._dict.get(member)
        if element is None:
            return -1
        rank = self._skiplist.get_rank(member, element.score)
        if desc:
            return len(self._skiplist) - rank
        return rank - 1

    def iter_range(self, start: int, stop: int, desc: bool = False) -> Iterator[Element]:
        """Iterate over elements with 0-based rank in ``[start, stop)``."""
        size = len(self)
        if start < 0 or start >= size:
            raise IndexError(f"illegal start {start}")
        if stop < start or stop > size:
            raise IndexError(f"illegal end {stop}")
        return self._walk_range(start, stop, desc)

    def _walk_range(self, start: int, stop: int, desc: bool) -> Iterator[Element]:
        size = len(self)
        if desc:
            node = self._skiplist.get_by_rank(size - start) if start > 0 else self._skiplist.tail
        else:
            node = self._skiplist.get_by_rank(start + 1) if start > 0 else self._skiplist.first
        for _ in range(stop - start):
            if node is None:
                return
            yield node.element
            node = node.backward if desc else node.forward

    def range(self, start: int, stop: int, desc: bool = False) -> list[Element]:
        """Return elements with 0-based rank in ``[start, stop)``."""
        return list(self.iter_range(start, stop, desc))

    def count(self, low: ScoreBorder, high: ScoreBorder) -> int:
        """Count members whose score lies within the borders."""
        total = 0
        for element in self._skiplist:
            if not low.less(element.score):
                continue
            if not high.greater(element.score):
                break
            total += 1
        return total

    def iter_by_score(
        self,
        low: ScoreBorder,
        high: ScoreBorder,
        offset: int = 0,
        limit: int = -1,
        desc: bool = False,
    ) -> Iterator[Element]:
        """Iterate over elements within the borders, skipping ``offset``; a negative ``limit`` means all."""
        if desc:
            node = self._skiplist.get_last_in_score_range(low, high)
        else:
            node = self._skiplist.get_first_in_score_range(low, high)

        while node is not None and offset > 0:
            node = node.backward if desc else node.forward
            offset -= 1

        yielded = 0
        while node is not None and (limit < 0 or yielded < limit):
            yield node.element
            yielded += 1
            node = node.backward if desc else node.forward
            if node is None:
                break
            if not low.less(node.score) or not high.greater(node.score):
                break

    def range_by_score(
        self,
        low: ScoreBorder,
        high: ScoreBorder,
        offset: int = 0,
        limit: int = -1,
        desc: bool = False,
    ) -> list[Element]:
        """Return elements within the borders; a negative ``limit`` means no limit."""
        if limit == 0 or offset < 0:
            return []
        return list(self.iter_by_score(low, high, offset, limit, desc))

    def remove_by_score(self, low: ScoreBorder, high: ScoreBorder) -> int:
        """Remove members whose score lies within the borders; return how many."""
        removed = self._skiplist.remove_range_by_score(low, high, 0)
        for element in removed:
            del self._dict[element.member]
        return len(removed)

    def pop_min(self, count: int) -> list[Element]:
        """Remove and return up to ``count`` lowest elements; ``count <= 0`` removes all."""
        first = self._skiplist.get_first_in_score_range(NEGATIVE_INF_BORDER, POSITIVE_INF_BORDER)
        if first is None:
            return []
        border = ScoreBorder(value=first.score, exclude=False)
        removed = self._skiplist.remove_range_by_score(border, POSITIVE_INF_BORDER, count)
        for element in removed:
            del self._dict[element.member]
        return removed

    def remove_by_rank(self, start: int, stop: int) -> int:
        """Remove members with 0-based rank in ``[start, stop)``; return how many."""
        removed = self._skiplist.remove_range_by_rank(start + 1, stop + 1)
        for element in removed:
            del self._dict[element.member]
        return len(removed)