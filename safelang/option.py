"""An optional value, with helpers specialised to bytes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class UnwrapError(RuntimeError):
    """Raised when unwrapping a value that is not there."""


@dataclass(frozen=True)
class Option(Generic[T]):
    """Either ``Some(value)`` or ``None``."""

    present: bool
    value: Any = None

    @classmethod
    def some(cls, value: T) -> "Option[T]":
        return cls(True, value)

    @classmethod
    def none(cls) -> "Option[T]":
        return cls(False)

    def is_some(self) -> bool:
        return self.present

    def is_none(self) -> bool:
        return not self.present

    def unwrap(self) -> T:
        if not self.present:
            raise UnwrapError("called unwrap on None")
        return self.value

    def __repr__(self) -> str:
        return f"Some({self.value!r})" if self.present else "None"


def _check_u8(value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"value out of u8 range: {value}")
    return value


def option_some_u8(value: int) -> Option[int]:
    return Option.some(_check_u8(value))


def option_none_u8() -> Option[int]:
    return Option.none()


def option_is_some_u8(value: Option[int]) -> bool:
    return value.is_some()


def option_unwrap_u8(value: Option[int]) -> int:
    return value.unwrap()