"""A set of strings built on the plain dictionary."""

from __future__ import annotations

from collections.abc import Iterator

from kvds.dicts import SimpleDict


class HashSet:
    """Hash-based set of string members."""

    def __init__(self, *args: str) -> None:
        self._dict = SimpleDict()
        for member in args:
            self.add(member)

    def add(self, member: str) -> int:
        """Add a member; return 1 if it was new, else 0."""
        return self._dict.put(member, None)

    def remove(self, member: str) -> int:
        """Remove a member; return 1 if it was present, else 0."""
        return self._dict.remove(member)

    def __contains__(self, member: object) -> bool:
        return member in self._dict

    def __len__(self) -> int:
        return len(self._dict)

    def __iter__(self) -> Iterator[str]:
        return iter(self._dict)

    def to_list(self) -> list[str]:
        return self._dict.keys()

    def intersect(self, other: HashSet) -> HashSet:
        return HashSet(*(member for member in other if member in self))

    def union(self, other: HashSet) -> HashSet:
        result = HashSet(*other)
        for member in self:
            result.add(member)
        return result

    def diff(self, other: HashSet) -> HashSet:
        return HashSet(*(member for member in self if member not in other))

    def random_members(self, limit: int) -> list[str]:
        """Return ``limit`` random members, possibly repeated."""
        return self._dict.random_keys(limit)

    def random_distinct_members(self, limit: int) -> list[str]:
        """Return up to ``limit`` distinct random members."""
        return self._dict.random_distinct_keys(limit)