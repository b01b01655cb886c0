# kvds

In-memory data structures for building a key-value store, in plain Python
with no third-party dependencies.

## Contents

| Module | What it provides |
| --- | --- |
| `kvds.bitmap` | `BitMap`: a growable byte-backed bitmap (least significant bit first) with `iter_bits` and `iter_bytes` |
| `kvds.dicts` | `SimpleDict` (not thread safe), the sharded, thread-safe `ConcurrentDict`, and the `fnv32` and `compute_capacity` helpers |
| `kvds.hashset` | `HashSet` of strings with `intersect`, `union`, `diff` and random sampling |
| `kvds.linkedlist` | `LinkedList`: a doubly linked list with indexed access and removal by predicate |
| `kvds.quicklist` | `QuickList`: a list stored as pages of up to 1024 values, with the same methods as `LinkedList` |
| `kvds.locks` | `RWLock` and `Locks`, a hashed table of reader-writer locks for string keys |
| `kvds.border` | `ScoreBorder` and `parse_score_border` for score bounds such as `2.5`, `(1.5`, `+inf` or `-inf` |
| `kvds.skiplist` | `Skiplist` and `Element`, ordered by score and then by member, with rank lookups |
| `kvds.sortedset` | `SortedSet`, members with scores kept in a skiplist plus a dictionary |

A few conventions hold throughout:

- `put`, `put_if_absent`, `put_if_exists` and `remove` on the dictionaries,
  and `add`/`remove` on `HashSet`, return `1` when they changed something and
  `0` otherwise.
- `ConcurrentDict(shard_count)` rounds the shard count up to a power of two,
  with a minimum of 16.
- `random_keys` / `random_members` may repeat keys; the `random_distinct_*`
  variants do not.
- `remove_by_val` and `reverse_remove_by_val` on the lists remove at most
  `count` matches; a `count` of zero or less removes every match.
- `SortedSet.get_rank` is 0-based and returns `-1` for an absent member.
  `range_by_score` takes a negative `limit` to mean no limit.
- `parse_score_border` raises `ValueError("ERR min or max is not a float")`
  for text it cannot read.

## Installation

```
pip install .
```

## Examples

```python
from kvds.bitmap import BitMap

bm = BitMap.from_bytes(b"\xff\xff")
bm.set_bit(8, 0)
assert bm.to_bytes() == b"\xff\xfe"
```

```python
from kvds.dicts import ConcurrentDict

d = ConcurrentDict(0)
assert d.put("a", 1) == 1          # newly inserted
assert d.put_if_absent("a", 2) == 0
assert d.get("a") == 1
```

```python
from kvds.quicklist import QuickList

ql = QuickList(1, 2, 3, 2)
ql.insert(0, 0)
assert ql.range(0, 3) == [0, 1, 2]
assert ql.reverse_remove_by_val(lambda v: v == 2, 1) == 1
assert list(ql) == [0, 1, 2, 3]
```

```python
from kvds.sortedset import SortedSet
from kvds.border import parse_score_border

zs = SortedSet()
for name, score in [("s1", 1), ("s2", 2), ("s3", 3)]:
    zs.add(name, score)

low, high = parse_score_border("(1"), parse_score_border("+inf")
print([e.member for e in zs.range_by_score(low, high, 0, -1, False)])  # ['s2', 's3']
print([e.member for e in zs.pop_min(1)])                                # ['s1']
```

```python
from kvds.locks import Locks

locks = Locks(1024)
with locks.rw_locked(["write-key"], ["read-key"]):
    ...  # the underlying locks are taken in a fixed order, so callers cannot deadlock
```

## What this package does not do

It provides data structures only. There is no server, no network protocol,
no command parser, no key expiry and no persistence to disk: everything lives
in the memory of the Python process that creates it.

## Running the tests

```
pip install ".[test]"
pytest
```