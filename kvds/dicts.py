"""Key-value dictionaries: a plain one and a sharded, thread-safe one."""

from __future__ import annotations

import random
import threading
from collections.abc import Iterator
from typing import Any

_PRIME32 = 16777619
_OFFSET32 = 2166136261
_MASK32 = 0xFFFFFFFF


def fnv32(key: str) -> int:
    """32-bit FNV-1 hash of the UTF-8 bytes of ``key``."""
    value = _OFFSET32
    for byte in key.encode("utf-8"):
        value = (value * _PRIME32) & _MASK32
        value ^= byte
    return value


def compute_capacity(param: int) -> int:
    """Round ``param`` up to a power of two, with a minimum of 16."""
    if param <= 16:
        return 16
    n = param - 1
    for shift in (1, 2, 4, 8, 16):
        n |= n >> shift
    return n + 1


def _check_limit(limit: int) -> None:
    if limit < 0:
        raise ValueError(f"limit must not be negative: {limit}")


class SimpleDict:
    """A dictionary with insert/update counting semantics; not thread safe."""

    def __init__(self) -> None:
        self._m: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._m.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._m

    def __len__(self) -> int:
        return len(self._m)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._m))

    def put(self, key: str, val: Any) -> int:
        """Store the value; return 1 if the key is new, else 0."""
        existed = key in self._m
        self._m[key] = val
        return 0 if existed else 1

    def put_if_absent(self, key: str, val: Any) -> int:
        if key in self._m:
            return 0
        self._m[key] = val
        return 1

    def put_if_exists(self, key: str, val: Any) -> int:
        if key in self._m:
            self._m[key] = val
            return 1
        return 0

    def remove(self, key: str) -> int:
        """Delete the key; return 1 if it was present, else 0."""
        if key in self._m:
            del self._m[key]
            return 1
        return 0

    def items(self) -> Iterator[tuple[str, Any]]:
        yield from list(self._m.items())

    def keys(self) -> list[str]:
        return list(self._m)

    def random_keys(self, limit: int) -> list[str]:
        """Return ``limit`` random keys, possibly repeated."""
        _check_limit(limit)
        keys = list(self._m)
        if not keys:
            return []
        return random.choices(keys, k=limit)

    def random_distinct_keys(self, limit: int) -> list[str]:
        """Return up to ``limit`` distinct random keys."""
        _check_limit(limit)
        keys = list(self._m)
        return random.sample(keys, min(limit, len(keys)))

    def clear(self) -> None:
        self._m = {}


class _Shard:
    __slots__ = ("m", "lock")

    def __init__(self) -> None:
        self.m: dict[str, Any] = {}
        self.lock = threading.Lock()

    def random_key(self) -> str | None:
        with self.lock:
            if not self.m:
                return None
            return random.choice(list(self.m))


class ConcurrentDict:
    """Thread-safe dictionary split into independently locked shards."""

    def __init__(self, shard_count: int = 16) -> None:
        self._shard_count = compute_capacity(shard_count)
        self._table = [_Shard() for _ in range(self._shard_count)]

    def _shard(self, key: str) -> _Shard:
        return self._table[fnv32(key) & (len(self._table) - 1)]

    def get(self, key: str, default: Any = None) -> Any:
        shard = self._shard(key)
        with shard.lock:
            return shard.m.get(key, default)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        shard = self._shard(key)
        with shard.lock:
            return key in shard.m

    def __len__(self) -> int:
        return sum(len(shard.m) for shard in self._table)

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self.items())

    def put(self, key: str, val: Any) -> int:
        """Store the value; return 1 if the key is new, else 0."""
        shard = self._shard(key)
        with shard.lock:
            existed = key in shard.m
            shard.m[key] = val
            return 0 if existed else 1

    def put_if_absent(self, key: str, val: Any) -> int:
        shard = self._shard(key)
        with shard.lock:
            if key in shard.m:
                return 0
            shard.m[key] = val
            return 1

    def put_if_exists(self, key: str, val: Any) -> int:
        shard = self._shard(key)
        with shard.lock:
            if key in shard.m:
                shard.m[key] = val
                return 1
            return 0

    def remove(self, key: str) -> int:
        """Delete the key; return 1 if it was present, else 0."""
        shard = self._shard(key)
        with shard.lock:
            if key in shard.m:
                del shard.m[key]
                return 1
            return 0

    def items(self) -> Iterator[tuple[str, Any]]:
        """Yield entries shard by shard; entries added meanwhile may be missed."""
        for shard in self._table:
            with shard.lock:
                snapshot = list(shard.m.items())
            yield from snapshot

    def keys(self) -> list[str]:
        return [key for key, _ in self.items()]

    def random_keys(self, limit: int) -> list[str]:
        """Return ``limit`` random keys, possibly repeated; all keys if ``limit`` reaches the size."""
        _check_limit(limit)
        if limit >= len(self):
            return self.keys()
        result: list[str] = []
        while len(result) < limit:
            key = random.choice(self._table).random_key()
            if key is not None:
                result.append(key)
        return result

    def random_distinct_keys(self, limit: int) -> list[str]:
        """Return ``limit`` distinct random keys; all keys if ``limit`` reaches the size."""
        _check_limit(limit)
        if limit >= len(self):
            return self.keys()
        result: set[str] = set()
        while len(result) < limit:
            key = random.choice(self._table).random_key()
            if key is not None:
                result.add(key)
        return list(result)

    def clear(self) -> None:
        self._table = [_Shard() for _ in range(self._shard_count)]