"""A success-or-error value, with helpers specialised to byte/int pairs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .option import UnwrapError

T = TypeVar("T")
E = TypeVar("E")

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Either ``Ok(value)`` or ``Err(error)``."""

    success: bool
    payload: Any

    @classmethod
    def ok(cls, value: T) -> "Result[T, E]":
        return cls(True, value)

    @classmethod
    def err(cls, error: E) -> "Result[T, E]":
        return cls(False, error)

    def is_ok(self) -> bool:
        return self.success

    def is_err(self) -> bool:
        return not self.success

    def unwrap(self) -> T:
        if not self.success:
            raise UnwrapError("called unwrap on Err")
        return self.payload

    def unwrap_err(self) -> E:
        if self.success:
            raise UnwrapError("called unwrap_err on Ok")
        return self.payload

    def __repr__(self) -> str:
        tag = "Ok" if self.success else "Err"
        return f"{tag}({self.payload!r})"


def result_ok_u8_i32(value: int) -> Result[int, int]:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"value out of u8 range: {value}")
    return Result.ok(value)


def result_err_u8_i32(error: int) -> Result[int, int]:
    if not _I32_MIN <= error <= _I32_MAX:
        raise ValueError(f"error out of i32 range: {error}")
    return Result.err(error)


def result_is_ok_u8_i32(value: Result[int, int]) -> bool:
    return value.is_ok()


def result_unwrap_u8_i32(value: Result[int, int]) -> int:
    return value.unwrap()


def result_unwrap_err_u8_i32(value: Result[int, int]) -> int:
    return value.unwrap_err()