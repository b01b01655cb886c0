"""A skip list of (member, score) elements ordered by score, then member."""

from __future__ import annotations

import random
from collections.abc import Iterator
from dataclasses import dataclass

from kvds.border import ScoreBorder

MAX_LEVEL = 16


@dataclass(frozen=True)
class Element:
    """A member and its score."""

    member: str
    score: float


class _Level:
    __slots__ = ("forward", "span")

    def __init__(self) -> None:
        self.forward: _Node | None = None
        self.span = 0


class _Node:
    __slots__ = ("element", "backward", "level")

    def __init__(self, level: int, score: float, member: str) -> None:
        self.element = Element(member, score)
        self.backward: _Node | None = None
        self.level = [_Level() for _ in range(level)]

    @property
    def member(self) -> str:
        return self.element.member

    @property
    def score(self) -> float:
        return self.element.score

    @property
    def forward(self) -> _Node | None:
        return self.level[0].forward


def random_level() -> int:
    """Pick a level in ``[1, MAX_LEVEL]``; each level is about half as likely as the one below."""
    total = (1 << MAX_LEVEL) - 1
    k = random.randrange(total)
    return MAX_LEVEL - (k + 1).bit_length() + 1


def _before(node: _Node, score: float, member: str) -> bool:
    return node.score < score or (node.score == score and node.member < member)


class Skiplist:
    """Skip list with spans, giving rank lookups in logarithmic time."""

    def __init__(self) -> None:
        self._header = _Node(MAX_LEVEL, 0.0, "")
        self._tail: _Node | None = None
        self._length = 0
        self._level = 1

    @property
    def first(self) -> _Node | None:
        """The node with the lowest rank, or None if empty."""
        return self._header.level[0].forward

    @property
    def tail(self) -> _Node | None:
        """The node with the highest rank, or None if empty."""
        return self._tail

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[Element]:
        node = self.first
        while node is not None:
            yield node.element
            node = node.forward

    def insert(self, member: str, score: float) -> _Node:
        """Link a new node; the caller ensures the member is not present yet."""
        update: list[_Node] = [self._header] * MAX_LEVEL
        rank = [0] * MAX_LEVEL

        node = self._header
        for i in range(self._level - 1, -1, -1):
            rank[i] = 0 if i == self._level - 1 else rank[i + 1]
            while True:
                forward = node.level[i].forward
                if forward is None or not _before(forward, score, member):
                    break
                rank[i] += node.level[i].span
                node = forward
            update[i] = node

        level = random_level()
        if level > self._level:
            for i in range(self._level, level):
                rank[i] = 0
                update[i] = self._header
                update[i].level[i].span = self._length
            self._level = level

        node = _Node(level, score, member)
        for i in range(level):
            node.level[i].forward = update[i].level[i].forward
            update[i].level[i].forward = node
            node.level[i].span = update[i].level[i].span - (rank[0] - rank[i])
            update[i].level[i].span = (rank[0] - rank[i]) + 1

        for i in range(level, self._level):
            update[i].level[i].span += 1

        node.backward = None if update[0] is self._header else update[0]
        if node.level[0].forward is not None:
            node.level[0].forward.backward = node
        else:
            self._tail = node
        self._length += 1
        return node

    def _remove_node(self, node: _Node, update: list[_Node]) -> None:
        for i in range(self._level):
            if update[i].level[i].forward is node:
                update[i].level[i].span += node.level[i].span - 1
                update[i].level[i].forward = node.level[i].forward
            else:
                update[i].level[i].span -= 1
        if node.level[0].forward is not None:
            node.level[0].forward.backward = node.backward
        else:
            self._tail = node.backward
        while self._level > 1 and self._header.level[self._level - 1].forward is None:
            self._level -= 1
        self._length -= 1

    def remove(self, member: str, score: float) -> bool:
        """Unlink the node with this member and score; return whether it was found."""
        update: list[_Node] = [self._header] * MAX_LEVEL
        node = self._header
        for i in range(self._level - 1, -1, -1):
            while True:
                forward = node.level[i].forward
                if forward is None or not _before(forward, score, member):
                    break
                node = forward
            update[i] = node
        target = node.level[0].forward
        if target is not None and target.score == score and target.member == member:
            self._remove_node(target, update)
            return True
        return False

    def get_rank(self, member: str, score: float) -> int:
        """Return the 1-based rank of the member, or 0 if it is not present."""
        rank = 0
        node = self._header
        for i in range(self._level - 1, -1, -1):
            while True:
                forward = node.level[i].forward
                if forward is None or not (
                    forward.score < score or (forward.score == score and forward.member <= member)
                ):
                    break
                rank += node.level[i].span
                node = forward
            if node is not self._header and node.member == member:
                return rank
        return 0

    def get_by_rank(self, rank: int) -> _Node | None:
        """Return the node at the 1-based ``rank``, or None."""
        if rank < 1:
            return None
        traversed = 0
        node = self._header
        for level in range(self._level - 1, -1, -1):
            while (
                node.level[level].forward is not None
                and traversed + node.level[level].span <= rank
            ):
                traversed += node.level[level].span
                node = node.level[level].forward
            if traversed == rank:
                return node
        return None

    def has_in_range(self, low: ScoreBorder, high: ScoreBorder) -> bool:
        """Whether any element's score lies between the borders."""
        if low.value > high.value or (
            low.value == high.value and (low.exclude or high.exclude)
        ):
            return False
        if self._tail is None or not low.less(self._tail.score):
            return False
        first = self.first
        if first is None or not high.greater(first.score):
            return False
        return True

    def get_first_in_score_range(self, low: ScoreBorder, high: ScoreBorder) -> _Node | None:
        """Return the lowest-ranked node within the borders, or None."""
        if not self.has_in_range(low, high):
            return None
        node = self._header
        for level in range(self._level - 1, -1, -1):
            while (
                node.level[level].forward is not None
                and not low.less(node.level[level].forward.score)
            ):
                node = node.level[level].forward
        node = node.level[0].forward
        if node is None or not high.greater(node.score):
            return None
        return node

    def get_last_in_score_range(self, low: ScoreBorder, high: ScoreBorder) -> _Node | None:
        """Return the highest-ranked node within the borders, or None."""
        if not self.has_in_range(low, high):
            return None
        node = self._header
        for level in range(self._level - 1, -1, -1):
            while (
                node.level[level].forward is not None
                and high.greater(node.level[level].forward.score)
            ):
                node = node.level[level].forward
        if node is self._header or not low.less(node.score):
            return None
        return node

    def remove_range_by_score(
        self, low: ScoreBorder, high: ScoreBorder, limit: int = 0
    ) -> list[Element]:
        """Remove elements within the borders in ascending order; ``limit > 0`` caps the count."""
        update: list[_Node] = [self._header] * MAX_LEVEL
        removed: list[Element] = []
        node = self._header
        for i in range(self._level - 1, -1, -1):
            while node.level[i].forward is not None and not low.less(node.level[i].forward.score):
                node = node.level[i].forward
            update[i] = node

        current = node.level[0].forward
        while current is not None:
            if not high.greater(current.score):
                break
            following = current.level[0].forward
            removed.append(current.element)
            self._remove_node(current, update)
            if limit > 0 and len(removed) == limit:
                break
            current = following
        return removed

    def remove_range_by_rank(self, start: int, stop: int) -> list[Element]:
        """Remove elements with 1-based rank in ``[start, stop)``."""
        traversed = 0
        update: list[_Node] = [self._header] * MAX_LEVEL
        removed: list[Element] = []
        node = self._header
        for level in range(self._level - 1, -1, -1):
            while (
                node.level[level].forward is not None
                and traversed + node.level[level].span < start
            ):
                traversed += node.level[level].span
                node = node.level[level].forward
            update[level] = node

        traversed += 1
        current = node.level[0].forward
        while current is not None and traversed < stop:
            following = current.level[0].forward
            removed.append(current.element)
            self._remove_node(current, update)
            current = following
            traversed += 1
        return removed