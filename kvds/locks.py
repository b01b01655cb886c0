"""Reader-writer locks and a hashed table of them, keyed by string."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from kvds.dicts import fnv32


class RWLock:
    """A reader-writer lock; a waiting writer blocks new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers > 0:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release of an unlocked write lock")
            self._writer = False
            self._cond.notify_all()

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers > 0:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("release of an unlocked read lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()


class Locks:
    """A fixed table of reader-writer locks; each key maps to one of them by hash.

    Locking several keys goes through the multi-key methods, which take the
    underlying locks in a fixed order so that callers cannot deadlock each other.
    """

    def __init__(self, table_size: int) -> None:
        if table_size <= 0:
            raise ValueError(f"table size must be positive: {table_size}")
        self._table = [RWLock() for _ in range(table_size)]

    def _index(self, key: str) -> int:
        return (len(self._table) - 1) & fnv32(key)

    def _indices(self, keys: Iterable[str], reverse: bool) -> list[int]:
        return sorted({self._index(key) for key in keys}, reverse=reverse)

    def lock(self, key: str) -> None:
        """Take the exclusive lock guarding ``key``."""
        self._table[self._index(key)].acquire_write()

    def rlock(self, key: str) -> None:
        """Take the shared lock guarding ``key``."""
        self._table[self._index(key)].acquire_read()

    def unlock(self, key: str) -> None:
        self._table[self._index(key)].release_write()

    def runlock(self, key: str) -> None:
        self._table[self._index(key)].release_read()

    def locks(self, *args: str) -> None:
        """Take exclusive locks for all given keys."""
        for index in self._indices(args, reverse=False):
            self._table[index].acquire_write()

    def rlocks(self, *args: str) -> None:
        """Take shared locks for all given keys."""
        for index in self._indices(args, reverse=False):
            self._table[index].acquire_read()

    def unlocks(self, *args: str) -> None:
        for index in self._indices(args, reverse=True):
            self._table[index].release_write()

    def runlocks(self, *args: str) -> None:
        for index in self._indices(args, reverse=True):
            self._table[index].release_read()

    def rw_locks(self, write_keys: Iterable[str], read_keys: Iterable[str]) -> None:
        """Lock write keys exclusively and read keys shared; duplicates are allowed."""
        write_keys = list(write_keys)
        write_indices = {self._index(key) for key in write_keys}
        for index in self._indices([*write_keys, *read_keys], reverse=False):
            if index in write_indices:
                self._table[index].acquire_write()
            else:
                self._table[index].acquire_read()

    def rw_unlocks(self, write_keys: Iterable[str], read_keys: Iterable[str]) -> None:
        """Release what :meth:`rw_locks` took for the same keys."""
        write_keys = list(write_keys)
        write_indices = {self._index(key) for key in write_keys}
        for index in self._indices([*write_keys, *read_keys], reverse=True):
            if index in write_indices:
                self._table[index].release_write()
            else:
                self._table[index].release_read()

    @contextmanager
    def rw_locked(self, write_keys: Iterable[str], read_keys: Iterable[str]) -> Iterator[None]:
        """Hold :meth:`rw_locks` for the duration of a ``with`` block."""
        write_keys = list(write_keys)
        read_keys = list(read_keys)
        self.rw_locks(write_keys, read_keys)
        try:
            yield
        finally:
            self.rw_unlocks(write_keys, read_keys)