import pytest

from safelang.option import (
    Option,
    UnwrapError,
    option_is_some_u8,
    option_none_u8,
    option_some_u8,
    option_unwrap_u8,
)


def test_some_unwraps_to_value():
    opt = Option.some("x")
    assert opt.is_some()
    assert not opt.is_none()
    assert opt.unwrap() == "x"


def test_none_is_none_and_unwrap_raises():
    opt = Option.none()
    assert opt.is_none()
    assert not opt.is_some()
    with pytest.raises(UnwrapError, match="called unwrap on None"):
        opt.unwrap()


def test_equality_follows_contents():
    assert Option.some(3) == Option.some(3)
    assert Option.some(3) != Option.some(4)
    assert Option.none() == Option.none()
    assert Option.some(None) != Option.none()


def test_repr_shows_variant():
    assert repr(Option.some(5)) == "Some(5)"
    assert repr(Option.none()) == "None"


def test_u8_helpers_roundtrip():
    opt = option_some_u8(7)
    assert option_is_some_u8(opt)
    assert option_unwrap_u8(opt) == 7
    assert not option_is_some_u8(option_none_u8())


def test_u8_unwrap_of_none_raises():
    with pytest.raises(UnwrapError):
        option_unwrap_u8(option_none_u8())


@pytest.mark.parametrize("bad", [-1, 256])
def test_u8_some_rejects_out_of_range(bad):
    with pytest.raises(ValueError):
        option_some_u8(bad)