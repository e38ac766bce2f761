import pytest
from hypothesis import given
from hypothesis import strategies as st

from chickadee.errors import ChickadeeError, Errno
from chickadee.numconv import from_chars, strtol, strtoul, to_chars

U64 = 2**64 - 1
bases = st.integers(min_value=2, max_value=36)


@given(st.integers(min_value=0, max_value=U64), bases)
def test_unsigned_round_trip(value, base):
    text = to_chars(value, base)
    assert from_chars(text, base) == (value, len(text))


@given(st.integers(min_value=-(2**63), max_value=2**63 - 1), bases)
def test_signed_round_trip(value, base):
    text = to_chars(value, base)
    assert from_chars(text, base, signed=True) == (value, len(text))


@given(st.integers(min_value=0, max_value=U64))
def test_to_chars_matches_python_formatting(value):
    assert to_chars(value, 16) == format(value, "x")
    assert to_chars(value, 8) == format(value, "o")
    assert to_chars(value) == str(value)


def test_to_chars_negative():
    assert to_chars(-42) == str(-42)
    assert to_chars(-(2**63)) == str(-(2**63))


def test_to_chars_size_limits():
    assert to_chars(255, 16, size=2) == format(255, "x")
    with pytest.raises(ChickadeeError) as info:
        to_chars(256, 16, size=2)
    assert info.value.errno == Errno.E_OVERFLOW
    with pytest.raises(ChickadeeError) as info:
        to_chars(0, size=0)
    assert info.value.errno == Errno.E_OVERFLOW
    with pytest.raises(ChickadeeError):
        to_chars(-5, size=1)


def test_from_chars_stops_at_non_digit():
    assert from_chars("123abc") == (123, 3)
    assert from_chars(b"77\0") == (77, 2)


def test_from_chars_invalid():
    with pytest.raises(ChickadeeError) as info:
        from_chars("")
    assert info.value.errno == Errno.E_INVAL
    with pytest.raises(ChickadeeError) as info:
        from_chars("-", signed=True)
    assert info.value.errno == Errno.E_INVAL


def test_from_chars_unsigned_range():
    assert from_chars(str(U64)) == (U64, len(str(U64)))
    with pytest.raises(ChickadeeError) as info:
        from_chars(str(U64 + 1))
    assert info.value.errno == Errno.E_RANGE


def test_from_chars_signed_range():
    low = str(-(2**63))
    assert from_chars(low, signed=True) == (-(2**63), len(low))
    with pytest.raises(ChickadeeError) as info:
        from_chars(str(2**63), signed=True)
    assert info.value.errno == Errno.E_RANGE


def test_from_chars_digit_range_quirk():
    # ':' follows '9', so it counts as a digit in bases above ten
    assert from_chars(":", 16) == (10, 1)


def test_bad_base():
    with pytest.raises(ValueError):
        from_chars("1", 1)
    with pytest.raises(ValueError):
        to_chars(1, 37)


def test_strtoul_prefixes():
    assert strtoul("  0x1f") == (int("1f", 16), len("  0x1f"))
    assert strtoul("0755") == (int("755", 8), len("0755"))
    assert strtoul("0b101") == (int("101", 2), len("0b101"))
    assert strtoul("0o17") == (int("17", 8), len("0o17"))
    assert strtoul("0x10", 16) == (16, len("0x10"))
    assert strtoul("+42") == (42, len("+42"))


def test_strtoul_negative_wraps():
    assert strtoul("-1") == (U64, len("-1"))


def test_strtoul_nothing_parsed():
    assert strtoul("xyz") == (0, 0)
    assert strtoul("   ") == (0, 0)


def test_strtoul_saturates():
    text = str(2**70)
    assert strtoul(text) == (U64, len(text))


def test_strtol_saturates():
    big = str(2**70)
    assert strtol(big) == (2**63 - 1, len(big))
    assert strtol("-" + big) == (-(2**63), len(big) + 1)
    assert strtol(str(2**63)) == (2**63 - 1, len(str(2**63)))


@given(st.integers(min_value=-(2**63) + 1, max_value=2**63 - 1))
def test_strtol_decimal_round_trip(value):
    text = str(value)
    assert strtol(text, 10) == (value, len(text))