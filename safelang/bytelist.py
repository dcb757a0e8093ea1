"""A growable list of bytes stored in a tracked buffer."""

from __future__ import annotations

from typing import Iterable, Optional

from . import safe_memory
from .option import Option
from .safe_memory import HighPtr

_INITIAL_CAPACITY = 4


class ByteList:
    """Bytes kept in a tracked buffer that doubles when it fills up."""

    def __init__(self) -> None:
        self._closed = True
        self._cap = _INITIAL_CAPACITY
        self._ptr = safe_memory.allocate_buffer(self._cap)
        self._len = 0
        self._closed = False

    def __len__(self) -> int:
        return self._len

    def is_empty(self) -> bool:
        return self._len == 0

    def high_ptr(self) -> HighPtr:
        return self._ptr

    def push(self, value: int) -> None:
        """Append one byte."""
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte value out of range: {value}")
        self._reserve(1)
        safe_memory.write_byte(self._ptr, self._len, value)
        self._len += 1

    def get(self, index: int) -> Optional[int]:
        """Return the byte at ``index``, or None if it is out of range."""
        if not 0 <= index < self._len:
            return None
        return safe_memory.read_byte(self._ptr, index)

    def to_bytes(self) -> bytes:
        return safe_memory.read_bytes(self._ptr, 0, self._len)

    def close(self) -> None:
        """Release the backing buffer; further use raises MemoryViolation."""
        if not self._closed:
            self._closed = True
            safe_memory.deallocate_buffer(self._ptr)

    def __enter__(self) -> "ByteList":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            if not getattr(self, "_closed", True):
                self.close()
        except Exception:
            pass

    def __repr__(self) -> str:
        if self._closed:
            return "ByteList(<closed>)"
        return f"ByteList({list(self.to_bytes())!r})"

    def _reserve(self, additional: int) -> None:
        required = self._len + additional
        if required <= self._cap:
            return
        next_cap = self._cap
        while next_cap < required:
            next_cap *= 2
        next_ptr = safe_memory.allocate_buffer(next_cap)
        safe_memory.write_bytes(next_ptr, 0, self.to_bytes())
        safe_memory.deallocate_buffer(self._ptr)
        self._ptr = next_ptr
        self._cap = next_cap


def list_new() -> ByteList:
    return ByteList()


def list_len(values: ByteList) -> int:
    return len(values)


def list_is_empty(values: ByteList) -> bool:
    return values.is_empty()


def list_push_u8(values: ByteList, value: int) -> None:
    values.push(value)


def list_get_u8(values: ByteList, index: int) -> Option[int]:
    value = values.get(index)
    return Option.none() if value is None else Option.some(value)


def list_push_bytes(values: ByteList, other: ByteList) -> None:
    """Append every byte of ``other`` to ``values``."""
    for value in other.to_bytes():
        values.push(value)


def list_from_bytes(data: Iterable[int]) -> ByteList:
    result = ByteList()
    for value in data:
        result.push(value)
    return result