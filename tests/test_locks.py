import threading

import pytest

from kvds.dicts import fnv32
from kvds.locks import Locks, RWLock


def _start(target):
    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread


def _distinct_keys(table_size):
    """Two keys that land in different slots of a table of the given size."""
    first = "key0"
    mask = table_size - 1
    for n in range(1, 1000):
        candidate = f"key{n}"
        if fnv32(candidate) & mask != fnv32(first) & mask:
            return first, candidate
    raise AssertionError("no distinct keys found")


def test_rwlock_release_write_without_acquire_raises():
    lock = RWLock()
    with pytest.raises(RuntimeError):
        lock.release_write()


def test_rwlock_release_read_without_acquire_raises():
    lock = RWLock()
    with pytest.raises(RuntimeError):
        lock.release_read()


def test_rwlock_readers_share():
    lock = RWLock()
    lock.acquire_read()
    thread = _start(lock.acquire_read)
    thread.join(2)
    assert not thread.is_alive()
    lock.release_read()
    lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_read()


def test_rwlock_writer_excludes_reader():
    lock = RWLock()
    lock.acquire_write()
    thread = _start(lock.acquire_read)
    thread.join(0.2)
    assert thread.is_alive()
    lock.release_write()
    thread.join(2)
    assert not thread.is_alive()
    lock.release_read()


def test_rwlock_reader_excludes_writer():
    lock = RWLock()
    lock.acquire_read()
    thread = _start(lock.acquire_write)
    thread.join(0.2)
    assert thread.is_alive()
    lock.release_read()
    thread.join(2)
    assert not thread.is_alive()
    lock.release_write()


def test_locks_rejects_bad_table_size():
    with pytest.raises(ValueError):
        Locks(0)


def test_lock_blocks_same_key():
    locks = Locks(16)
    locks.lock("a")
    thread = _start(lambda: locks.rlock("a"))
    thread.join(0.2)
    assert thread.is_alive()
    locks.unlock("a")
    thread.join(2)
    assert not thread.is_alive()
    locks.runlock("a")


def test_lock_does_not_block_other_slot():
    locks = Locks(16)
    first, second = _distinct_keys(16)
    locks.lock(first)
    thread = _start(lambda: locks.lock(second))
    thread.join(2)
    assert not thread.is_alive()
    locks.unlock(second)
    locks.unlock(first)


def test_rlocks_shared_between_threads():
    locks = Locks(16)
    locks.rlocks("a", "b", "c")
    thread = _start(lambda: locks.rlocks("c", "b", "a"))
    thread.join(2)
    assert not thread.is_alive()
    locks.runlocks("a", "b", "c")
    locks.runlocks("a", "b", "c")
    blocker = _start(lambda: locks.locks("a", "b", "c"))
    blocker.join(2)
    assert not blocker.is_alive()
    locks.unlocks("a", "b", "c")


def test_locks_with_duplicates_and_release():
    locks = Locks(16)
    locks.locks("a", "a", "b")
    thread = _start(lambda: locks.rlock("b"))
    thread.join(0.2)
    assert thread.is_alive()
    locks.unlocks("a", "b", "b")
    thread.join(2)
    assert not thread.is_alive()
    locks.runlock("b")


def test_rw_locks_with_overlapping_keys_write_wins():
    locks = Locks(16)
    locks.rw_locks(["a", "a"], ["a", "b"])
    reader = _start(lambda: locks.rlock("a"))
    reader.join(0.2)
    assert reader.is_alive()
    locks.rw_unlocks(["a", "a"], ["a", "b"])
    reader.join(2)
    assert not reader.is_alive()
    locks.runlock("a")


def test_rw_locks_write_key_is_exclusive_read_key_is_shared():
    locks = Locks(16)
    write_key, read_key = _distinct_keys(16)
    locks.rw_locks([write_key], [read_key])

    reader = _start(lambda: locks.rlock(read_key))
    reader.join(2)
    assert not reader.is_alive()
    locks.runlock(read_key)

    writer_reader = _start(lambda: locks.rlock(write_key))
    writer_reader.join(0.2)
    assert writer_reader.is_alive()

    locks.rw_unlocks([write_key], [read_key])
    writer_reader.join(2)
    assert not writer_reader.is_alive()
    locks.runlock(write_key)


def test_rw_locked_context_releases_on_error():
    locks = Locks(16)
    with pytest.raises(KeyError):
        with locks.rw_locked(["a"], ["b"]):
            raise KeyError("boom")
    thread = _start(lambda: locks.locks("a", "b"))
    thread.join(2)
    assert not thread.is_alive()
    locks.unlocks("a", "b")