"""Unmanaged byte buffers addressed by raw pointers."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

_ALIGNMENT = 16
_FIRST_ADDRESS = 0x1000


class MemoryViolation(RuntimeError):
    """Raised when a buffer is used outside the rules of its allocation."""


@dataclass(frozen=True)
class RawPtr:
    """Handle to a raw allocation; address 0 is the null pointer."""

    addr: int

    def is_null(self) -> bool:
        return self.addr == 0


_address_lock = threading.Lock()
_next_free = _FIRST_ADDRESS


def _next_address(size: int) -> int:
    """Reserve a fresh, never reused address range of ``size`` bytes."""
    global _next_free
    span = max(size, 1)
    span += -span % _ALIGNMENT
    with _address_lock:
        addr = _next_free
        _next_free += span
    return addr


_lock = threading.Lock()
_allocations: dict[int, bytearray] = {}


def _check_byte(value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"byte value out of range: {value}")


def _live_buffer(ptr: RawPtr, operation: str) -> bytearray:
    if ptr.is_null():
        raise MemoryViolation(f"raw::{operation} ptr must be non-null")
    buf = _allocations.get(ptr.addr)
    if buf is None:
        raise MemoryViolation(f"raw::{operation} ptr is invalid")
    return buf


def alloc(size: int) -> RawPtr:
    """Allocate a zeroed buffer of ``size`` bytes and return its raw pointer."""
    if size <= 0:
        raise MemoryViolation("raw::alloc size must be > 0")
    ptr = RawPtr(_next_address(size))
    with _lock:
        _allocations[ptr.addr] = bytearray(size)
    return ptr


def deallocate(ptr: RawPtr) -> None:
    """Release a buffer returned by :func:`alloc`."""
    if ptr.is_null():
        raise MemoryViolation("raw::deallocate ptr must be non-null")
    with _lock:
        removed = _allocations.pop(ptr.addr, None)
    if removed is None:
        raise MemoryViolation("raw::deallocate ptr is invalid or already deallocated")


def write(ptr: RawPtr, offset: int, value: int) -> None:
    """Store one byte at ``offset`` inside a live raw buffer."""
    _check_byte(value)
    with _lock:
        buf = _live_buffer(ptr, "write")
        if not 0 <= offset < len(buf):
            raise MemoryViolation("raw::write offset out of bounds")
        buf[offset] = value


def read(ptr: RawPtr, offset: int) -> int:
    """Load one byte at ``offset`` from a live raw buffer."""
    with _lock:
        buf = _live_buffer(ptr, "read")
        if not 0 <= offset < len(buf):
            raise MemoryViolation("raw::read offset out of bounds")
        return buf[offset]


def allocation_size(ptr: RawPtr) -> Optional[int]:
    """Return the size of a live raw allocation, or None if there is none."""
    with _lock:
        buf = _allocations.get(ptr.addr)
    return None if buf is None else len(buf)


def claim_allocation(ptr: RawPtr) -> Optional[bytearray]:
    """Remove a raw allocation from tracking and hand over its buffer."""
    with _lock:
        return _allocations.pop(ptr.addr, None)