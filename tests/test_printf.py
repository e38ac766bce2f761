import pytest
from hypothesis import given
from hypothesis import strategies as st

from chickadee.printf import COLOR_GRAY, Printer, StringPrinter, snprintf, sprintf


class RecordingPrinter(Printer):
    def __init__(self):
        super().__init__()
        self.out = []

    def putc(self, c):
        self.out.append((chr(c), self.color))


@pytest.mark.parametrize(
    "fmt, args",
    [
        ("%d", (42,)),
        ("%i", (-17,)),
        ("%5d", (42,)),
        ("%-5d|", (42,)),
        ("%05d", (-42,)),
        ("%+d", (7,)),
        ("% d", (7,)),
        ("%x", (255,)),
        ("%X", (255,)),
        ("%#x", (255,)),
        ("%#X", (255,)),
        ("%.3d", (5,)),
        ("%8.3d", (-5,)),
        ("%s", ("abc",)),
        ("%.2s", ("abc",)),
        ("%6s|", ("ab",)),
        ("%-6s|", ("ab",)),
        ("%c", (65,)),
        ("%u", (123,)),
        ("%*d", (6, 42)),
        ("%.*s", (2, "abcdef")),
        ("%lu", (2**64 - 1,)),
        ("%ld", (-(2**63),)),
        ("%hd", (5,)),
        ("a %s b %d c", ("x", 3)),
    ],
)
def test_matches_standard_formatting(fmt, args):
    assert sprintf(fmt, *args) == fmt % args


def test_pointer_format():
    assert sprintf("%p", 0) == "0x0"
    assert sprintf("%p", 0xDEADBEEF) == "%#x" % 0xDEADBEEF


def test_alt_hex_of_zero_has_no_prefix():
    assert sprintf("%#x", 0) == sprintf("%x", 0)


def test_thousands_decimal():
    assert sprintf("%'d", 1234567) == f"{1234567:,}"
    assert sprintf("%'d", 123) == "123"


def test_thousands_hex():
    assert sprintf("%'x", 0x12345678) == format(0x12345678, "_x").replace("_", "'")


def test_int_without_length_is_32_bit():
    assert sprintf("%d", 0xFFFFFFFF) == sprintf("%d", -1)
    assert sprintf("%u", -1) == str(0xFFFFFFFF)
    assert sprintf("%d", 2**32 + 5) == sprintf("%d", 5)


def test_long_keeps_64_bits():
    assert sprintf("%ld", 2**40) == str(2**40)


def test_percent_and_unknown_conversions():
    assert sprintf("%%") == "%"
    assert sprintf("%q") == "q"
    assert sprintf("100%") == "100%"


def test_char_zero_prints_nothing():
    assert sprintf("[%c]", 0) == "[]"


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        sprintf("%d")


def test_printer_is_abstract():
    with pytest.raises(TypeError):
        Printer()


def test_color_conversion_sets_color():
    p = RecordingPrinter()
    Printer.printf(p, "a%Cb", 0x0F00)
    assert p.out == [("a", COLOR_GRAY), ("b", 0x0F00)]

    sp = StringPrinter(16)
    sp.printf("a%Cb", 0x0F00)
    assert sp.getvalue() == "ab"
    assert sp.color == 0x0F00
    assert sprintf("a%Cb", 0x0F00) == "ab"


def test_snprintf_truncates_but_counts():
    full = "hello world"
    text, n = snprintf(5, "%s", full)
    assert text == full[:4]
    assert n == len(full)


def test_snprintf_zero_size():
    text, n = snprintf(0, "%d", 12345)
    assert text == ""
    assert n == len("12345")


def test_string_printer_negative_size():
    with pytest.raises(ValueError):
        StringPrinter(-1)


@given(st.integers(min_value=-(2**31), max_value=2**31 - 1))
def test_decimal_roundtrip(x):
    assert int(sprintf("%d", x)) == x


@given(st.integers(min_value=-(2**63), max_value=2**63 - 1))
def test_long_decimal_matches_str(x):
    assert sprintf("%ld", x) == str(x)


@given(st.integers(min_value=0, max_value=2**32 - 1))
def test_hex_matches_format(x):
    assert sprintf("%x", x) == format(x, "x")
    assert sprintf("%X", x) == format(x, "X")


@given(st.text(alphabet=st.characters(blacklist_characters="%\0", max_codepoint=0x7E, min_codepoint=0x20)))
def test_plain_text_passes_through(s):
    assert sprintf(s) == s


@given(st.integers(min_value=1, max_value=30), st.integers(min_value=-(2**31), max_value=2**31 - 1))
def test_snprintf_prefix_invariant(size, x):
    full = sprintf("value=%d", x)
    text, n = snprintf(size, "value=%d", x)
    assert n == len(full)
    assert text == full[: size - 1]