"""A byte string stored in a tracked buffer, with text helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from . import safe_memory
from .bytelist import ByteList, list_from_bytes
from .option import Option
from .safe_memory import HighPtr

_TRIM_BYTES = b" \n\r\t"


def _check_byte(value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"byte value out of range: {value}")
    return value


class SafeString:
    """UTF-8 (or arbitrary) bytes kept in a tracked, growable buffer."""

    def __init__(self, data: bytes = b"") -> None:
        self._closed = True
        data = bytes(data)
        self._cap = max(1, len(data))
        self._ptr = safe_memory.allocate_buffer(self._cap)
        safe_memory.write_bytes(self._ptr, 0, data)
        self._len = len(data)
        self._closed = False

    @classmethod
    def from_bytes(cls, data: bytes) -> "SafeString":
        return cls(data)

    @classmethod
    def from_text(cls, text: str) -> "SafeString":
        return cls(text.encode("utf-8"))

    def __len__(self) -> int:
        return self._len

    def is_empty(self) -> bool:
        return self._len == 0

    def high_ptr(self) -> HighPtr:
        return self._ptr

    def as_bytes(self) -> bytes:
        return safe_memory.read_bytes(self._ptr, 0, self._len)

    def to_str(self) -> str:
        """Decode the bytes as UTF-8, replacing invalid sequences."""
        return self.as_bytes().decode("utf-8", errors="replace")

    def __str__(self) -> str:
        return self.to_str()

    def __repr__(self) -> str:
        if self._closed:
            return "SafeString(<closed>)"
        return f"SafeString({self.as_bytes()!r})"

    def push_str(self, suffix: str) -> None:
        self.push_bytes(suffix.encode("utf-8"))

    def push_bytes(self, data: bytes) -> None:
        if not data:
            return
        self._reserve(len(data))
        safe_memory.write_bytes(self._ptr, self._len, bytes(data))
        self._len += len(data)

    def clear(self) -> None:
        """Drop the contents but keep the capacity."""
        self._len = 0

    def clear_with_capacity(self) -> None:
        """Drop the contents and shrink the buffer to one byte."""
        safe_memory.deallocate_buffer(self._ptr)
        self._ptr = safe_memory.allocate_buffer(1)
        self._len = 0
        self._cap = 1

    def pop_byte(self) -> Option[int]:
        if self._len == 0:
            return Option.none()
        value = safe_memory.read_byte(self._ptr, self._len - 1)
        self._len -= 1
        return Option.some(value)

    def remove_byte(self, index: int) -> Option[int]:
        if not 0 <= index < self._len:
            return Option.none()
        data = bytearray(self.as_bytes())
        value = data.pop(index)
        self._set_contents(bytes(data))
        return Option.some(value)

    def clone(self) -> "SafeString":
        return SafeString(self.as_bytes())

    def close(self) -> None:
        """Release the backing buffer; further use raises MemoryViolation."""
        if not self._closed:
            self._closed = True
            safe_memory.deallocate_buffer(self._ptr)

    def __enter__(self) -> "SafeString":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            if not getattr(self, "_closed", True):
                self.close()
        except Exception:
            pass

    def _reserve(self, additional: int) -> None:
        required = self._len + additional
        if required <= self._cap:
            return
        next_cap = self._cap
        while next_cap < required:
            next_cap = max(next_cap * 2, 1)
        next_ptr = safe_memory.allocate_buffer(next_cap)
        safe_memory.write_bytes(next_ptr, 0, self.as_bytes())
        safe_memory.deallocate_buffer(self._ptr)
        self._ptr = next_ptr
        self._cap = next_cap

    def _set_contents(self, data: bytes) -> None:
        self._len = min(self._len, len(data))
        self._reserve(len(data) - self._len)
        safe_memory.write_bytes(self._ptr, 0, data)
        self._len = len(data)


@dataclass
class StringSplit:
    """Result of splitting a string once around a separator."""

    left: SafeString
    right: SafeString
    found: bool


@dataclass
class StringList:
    """An ordered collection of SafeString values."""

    items: list[SafeString] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[SafeString]:
        return iter(self.items)

    def is_empty(self) -> bool:
        return not self.items

    def push(self, value: SafeString) -> None:
        self.items.append(value)

    def get(self, index: int) -> Option[SafeString]:
        """Return a copy of the item at ``index``, or None if out of range."""
        if not 0 <= index < len(self.items):
            return Option.none()
        return Option.some(self.items[index].clone())


def string_new() -> SafeString:
    return SafeString()


def string_clone(value: SafeString) -> SafeString:
    return value.clone()


def string_len(value: SafeString) -> int:
    return len(value)


def string_is_empty(value: SafeString) -> bool:
    return value.is_empty()


def string_concat(left: SafeString, right: SafeString) -> SafeString:
    return SafeString(left.as_bytes() + right.as_bytes())


def string_eq(left: SafeString, right: SafeString) -> bool:
    return left.as_bytes() == right.as_bytes()


def string_substr(value: SafeString, start: int, length: int) -> SafeString:
    """Return ``length`` bytes starting at ``start``; raise IndexError if out of range."""
    data = value.as_bytes()
    end = start + length
    if start < 0 or length < 0 or start > len(data) or end > len(data):
        raise IndexError("string_substr out of bounds")
    return SafeString(data[start:end])


def string_starts_with(value: SafeString, prefix: SafeString) -> bool:
    return value.as_bytes().startswith(prefix.as_bytes())


def string_ends_with(value: SafeString, suffix: SafeString) -> bool:
    return value.as_bytes().endswith(suffix.as_bytes())


def string_contains(value: SafeString, needle: SafeString) -> bool:
    return needle.as_bytes() in value.as_bytes()


def string_push(value: SafeString, byte: int) -> None:
    value.push_bytes(bytes([_check_byte(byte)]))


def string_push_bytes(value: SafeString, data: ByteList) -> None:
    string_append_bytes(value, data)


def string_push_str(value: SafeString, suffix: SafeString) -> None:
    value.push_bytes(suffix.as_bytes())


def string_clear(value: SafeString) -> None:
    value.clear()


def string_clear_with_capacity(value: SafeString) -> None:
    value.clear_with_capacity()


def string_append_bytes(value: SafeString, data: ByteList) -> None:
    value.push_bytes(data.to_bytes())


def string_pop(value: SafeString) -> Option[int]:
    return value.pop_byte()


def string_pop_n(value: SafeString, count: int) -> ByteList:
    """Remove up to ``count`` trailing bytes and return them in order."""
    take = min(max(count, 0), len(value))
    if take == 0:
        return ByteList()
    data = value.as_bytes()
    removed = data[len(data) - take:]
    value._len -= take
    return list_from_bytes(removed)


def string_remove(value: SafeString, index: int) -> Option[int]:
    return value.remove_byte(index)


def string_remove_range(value: SafeString, start: int, length: int) -> ByteList:
    """Cut ``length`` bytes out at ``start`` and return them."""
    end = start + length
    if start < 0 or length < 0 or start > len(value) or end > len(value):
        raise IndexError("string_remove_range out of bounds")
    if length == 0:
        return ByteList()
    data = value.as_bytes()
    removed = data[start:end]
    value._set_contents(data[:start] + data[end:])
    return list_from_bytes(removed)


def string_insert_bytes(value: SafeString, index: int, data: ByteList) -> None:
    """Insert the bytes of ``data`` before position ``index``."""
    if not 0 <= index <= len(value):
        raise IndexError("string_insert_bytes out of bounds")
    current = value.as_bytes()
    value._set_contents(current[:index] + data.to_bytes() + current[index:])


def string_replace(
    value: SafeString, needle: SafeString, replacement: SafeString
) -> SafeString:
    """Replace every non-overlapping occurrence of ``needle``."""
    needle_bytes = needle.as_bytes()
    if not needle_bytes:
        return value.clone()
    return SafeString(value.as_bytes().replace(needle_bytes, replacement.as_bytes()))


def string_trim(value: SafeString) -> SafeString:
    return SafeString(value.as_bytes().strip(_TRIM_BYTES))


def string_trim_start(value: SafeString) -> SafeString:
    return SafeString(value.as_bytes().lstrip(_TRIM_BYTES))


def string_trim_end(value: SafeString) -> SafeString:
    return SafeString(value.as_bytes().rstrip(_TRIM_BYTES))


def string_split_once(value: SafeString, needle: SafeString) -> StringSplit:
    """Split around the first occurrence of ``needle``."""
    data = value.as_bytes()
    needle_bytes = needle.as_bytes()
    pos = data.find(needle_bytes) if needle_bytes else -1
    if pos < 0:
        return StringSplit(value.clone(), SafeString(), False)
    return StringSplit(
        SafeString(data[:pos]), SafeString(data[pos + len(needle_bytes):]), True
    )


def string_split_found(split: StringSplit) -> bool:
    return split.found


def string_split_left(split: StringSplit) -> SafeString:
    return split.left.clone()


def string_split_right(split: StringSplit) -> SafeString:
    return split.right.clone()


def string_split_all(value: SafeString, needle: SafeString) -> StringList:
    """Split at every occurrence of ``needle``."""
    needle_bytes = needle.as_bytes()
    if not needle_bytes:
        return StringList([value.clone()])
    return StringList([SafeString(part) for part in value.as_bytes().split(needle_bytes)])


def string_split_n(value: SafeString, needle: SafeString, max_parts: int) -> StringList:
    """Split into at most ``max_parts`` pieces; the last holds the remainder."""
    if max_parts <= 0:
        return StringList()
    needle_bytes = needle.as_bytes()
    if not needle_bytes or max_parts == 1:
        return StringList([value.clone()])
    parts = value.as_bytes().split(needle_bytes, max_parts - 1)
    return StringList([SafeString(part) for part in parts])


def string_list_len(values: StringList) -> int:
    return len(values)


def string_list_is_empty(values: StringList) -> bool:
    return values.is_empty()


def string_list_get(values: StringList, index: int) -> Option[SafeString]:
    return values.get(index)


def string_from_list(values: ByteList) -> SafeString:
    return SafeString(values.to_bytes())


def string_to_list(value: SafeString) -> ByteList:
    return list_from_bytes(value.as_bytes())