"""In-memory data structures for key-value stores: bitmaps, dicts, sets, lists, key locks and sorted sets."""

__version__ = "0.1.0"
__all__ = [
    "bitmap",
    "dicts",
    "hashset",
    "linkedlist",
    "quicklist",
    "locks",
    "border",
    "skiplist",
    "sortedset",
]