"""A growable bitmap stored as a byte array, least significant bit first."""

from __future__ import annotations

from collections.abc import Iterator


def _to_byte_size(bit_size: int) -> int:
    return (bit_size + 7) // 8


class BitMap:
    """Bitmap backed by a bytearray; bit ``n`` lives in byte ``n // 8`` at position ``n % 8``."""

    def __init__(self, data: bytes | bytearray | None = None) -> None:
        if data is None:
            self._data = bytearray()
        elif isinstance(data, bytearray):
            # share the caller's buffer so writes are visible to it
            self._data = data
        else:
            self._data = bytearray(data)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> BitMap:
        """Wrap existing bytes; a bytearray is shared, not copied."""
        return cls(data)

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    def bit_size(self) -> int:
        return len(self._data) * 8

    def __len__(self) -> int:
        return len(self._data)

    def _grow(self, bit_size: int) -> None:
        gap = _to_byte_size(bit_size) - len(self._data)
        if gap > 0:
            self._data.extend(bytes(gap))

    @staticmethod
    def _check_offset(offset: int) -> None:
        if offset < 0:
            raise IndexError(f"bit offset out of range: {offset}")

    def set_bit(self, offset: int, val: int) -> None:
        """Set the bit at ``offset`` when ``val`` is positive, clear it otherwise."""
        self._check_offset(offset)
        byte_index, bit_offset = divmod(offset, 8)
        mask = 1 << bit_offset
        self._grow(offset + 1)
        if val > 0:
            self._data[byte_index] |= mask
        else:
            self._data[byte_index] &= ~mask & 0xFF

    def get_bit(self, offset: int) -> int:
        """Return the bit at ``offset``; bits past the end read as 0."""
        self._check_offset(offset)
        byte_index, bit_offset = divmod(offset, 8)
        if byte_index >= len(self._data):
            return 0
        return (self._data[byte_index] >> bit_offset) & 0x01

    def iter_bits(self, begin: int = 0, end: int = 0) -> Iterator[tuple[int, int]]:
        """Yield ``(offset, bit)`` from ``begin`` up to ``end`` (exclusive); ``end == 0`` means to the end."""
        offset = begin
        byte_index, bit_offset = divmod(begin, 8)
        while byte_index < len(self._data):
            current = self._data[byte_index]
            while bit_offset < 8:
                yield offset, (current >> bit_offset) & 0x01
                bit_offset += 1
                offset += 1
                if end != 0 and offset >= end:
                    break
            byte_index += 1
            bit_offset = 0
            if end > 0 and offset >= end:
                break

    def iter_bytes(self, begin: int = 0, end: int = 0) -> Iterator[tuple[int, int]]:
        """Yield ``(index, byte)`` for bytes in ``[begin, end)``; ``end == 0`` or past the end means to the end."""
        size = len(self._data)
        if end == 0 or end > size:
            end = size
        for index in range(begin, end):
            yield index, self._data[index]