"""Tracked byte buffers addressed by high-level pointers."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from . import raw_memory
from .raw_memory import MemoryViolation, RawPtr, _next_address


@dataclass(frozen=True)
class HighPtr:
    """Handle to a tracked allocation; address 0 is the null pointer."""

    addr: int

    def is_null(self) -> bool:
        return self.addr == 0


@dataclass(frozen=True)
class ValidatedPtr:
    """A raw pointer that was checked to refer to a live raw allocation."""

    addr: int

    def is_null(self) -> bool:
        return self.addr == 0


_lock = threading.Lock()
_allocations: dict[int, bytearray] = {}


def allocation_size(ptr: HighPtr) -> Optional[int]:
    """Return the size of a live allocation, or None if there is none."""
    with _lock:
        buf = _allocations.get(ptr.addr)
    return None if buf is None else len(buf)


def _require_valid_range(ptr: HighPtr, offset: int, length: int) -> bytearray:
    if ptr.is_null():
        raise MemoryViolation("high ptr must be non-null")
    buf = _allocations.get(ptr.addr)
    if buf is None:
        raise MemoryViolation("high ptr is invalid")
    if offset < 0 or length < 0 or offset + length > len(buf):
        raise MemoryViolation("high ptr range out of bounds")
    return buf


def write_bytes(ptr: HighPtr, offset: int, data: bytes) -> None:
    """Copy ``data`` into the buffer starting at ``offset``."""
    if not data:
        return
    with _lock:
        buf = _require_valid_range(ptr, offset, len(data))
        buf[offset:offset + len(data)] = data


def read_bytes(ptr: HighPtr, offset: int, length: int) -> bytes:
    """Return ``length`` bytes of the buffer starting at ``offset``."""
    if length == 0:
        return b""
    with _lock:
        buf = _require_valid_range(ptr, offset, length)
        return bytes(buf[offset:offset + length])


def write_byte(ptr: HighPtr, offset: int, value: int) -> None:
    """Store one byte at ``offset``."""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"byte value out of range: {value}")
    with _lock:
        _require_valid_range(ptr, offset, 1)[offset] = value


def read_byte(ptr: HighPtr, offset: int) -> int:
    """Load one byte from ``offset``."""
    with _lock:
        return _require_valid_range(ptr, offset, 1)[offset]


def allocate_buffer(size: int) -> HighPtr:
    """Allocate a zeroed, tracked buffer of ``size`` bytes."""
    if size <= 0:
        raise MemoryViolation("allocate_buffer size must be > 0")
    ptr = HighPtr(_next_address(size))
    with _lock:
        _allocations[ptr.addr] = bytearray(size)
    return ptr


def deallocate_buffer(ptr: HighPtr) -> None:
    """Release a buffer returned by :func:`allocate_buffer` or :func:`into_high`."""
    if ptr.is_null():
        raise MemoryViolation("deallocate_buffer ptr must be non-null")
    with _lock:
        removed = _allocations.pop(ptr.addr, None)
    if removed is None:
        raise MemoryViolation("deallocate_buffer ptr is invalid or already deallocated")


def validate_raw(raw_ptr: RawPtr) -> ValidatedPtr:
    """Check that a raw pointer refers to a live raw allocation."""
    if raw_ptr.is_null():
        raise MemoryViolation("validate_raw ptr must be non-null")
    if raw_memory.allocation_size(raw_ptr) is None:
        raise MemoryViolation("validate_raw ptr is invalid")
    return ValidatedPtr(raw_ptr.addr)


def into_high(validated_ptr: ValidatedPtr) -> HighPtr:
    """Move a validated raw allocation under tracked ownership."""
    if validated_ptr.is_null():
        raise MemoryViolation("into_high ptr must be non-null")
    buf = raw_memory.claim_allocation(RawPtr(validated_ptr.addr))
    if buf is None:
        raise MemoryViolation("into_high ptr is invalid")
    high_ptr = HighPtr(validated_ptr.addr)
    with _lock:
        _allocations[high_ptr.addr] = buf
    return high_ptr