import pytest

from samlib.strfmt import (
    double2fixed,
    hex2str,
    int2str,
    octal2str,
    strfmt,
    strfmt_buffer,
    uint2str,
)


@pytest.mark.parametrize(
    "fmt, args",
    [
        ("%d", (42,)),
        ("%d", (-42,)),
        ("%5d", (42,)),
        ("%05d", (42,)),
        ("%x", (255,)),
        ("%08x", (48879,)),
        ("%o", (8,)),
        ("%u", (7,)),
        ("%s", ("abc",)),
        ("%6s|", ("abc",)),
        ("%-6s|", ("abc",)),
        ("%c", (65,)),
        ("%ld", (2**40,)),
        ("%lx", (2**40,)),
        ("%f", (0.5,)),
        ("%f", (2.25,)),
        ("%f", (0.125,)),
        ("%f", (-1.75,)),
        ("a %s b %d c", ("x", 3)),
        ("no conversions", ()),
    ],
)
def test_matches_printf_for_common_formats(fmt, args):
    assert strfmt(fmt, *args) == fmt % args


def test_minus_is_ignored_for_numbers():
    assert strfmt("%-5d", 42) == strfmt("%5d", 42) == "%5d" % 42


def test_unknown_conversion_is_copied():
    assert strfmt("%q") == "%q"
    assert strfmt("%%") == "%%"


def test_zero_padding_pads_before_sign():
    assert strfmt("%05d", -5) == "000-5"


def test_int_and_unsigned_wrap_to_32_bits():
    assert strfmt("%d", 2**31) == str(-(2**31))
    assert strfmt("%u", -1) == str(2**32 - 1)
    assert strfmt("%lu", -1) == str(2**64 - 1)


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        strfmt("%d %d", 1)


def test_buffer_truncates_and_reports_full_length():
    text, n = strfmt_buffer(4, "%d", 12345)
    assert text == "12345"[:3]
    assert n == len("12345")


def test_buffer_with_room():
    text, n = strfmt_buffer(64, "%s-%x", "id", 255)
    assert text == "id-ff" % () if False else text == "%s-%x" % ("id", 255)
    assert n == len(text)


def test_buffer_of_zero_size():
    assert strfmt_buffer(0, "%s", "abc") == ("", 0)


@pytest.mark.parametrize("val", [0, 1, 9, 10, 12345, 2**40])
def test_integer_helpers(val):
    assert int2str(val) == str(val)
    assert int2str(-val) == str(-val)
    assert uint2str(val) == str(val)
    assert hex2str(val) == format(val, "x")
    assert octal2str(val) == format(val, "o")


def test_uint_and_hex_treat_negative_as_64_bit():
    assert uint2str(-1) == str(2**64 - 1)
    assert hex2str(-1) == "f" * 16


def test_octal_of_negative_is_empty():
    assert octal2str(-8) == ""


def test_double2fixed_half():
    assert double2fixed(2.5) == (2, 500000)


@pytest.mark.parametrize("val", [0.5, 1.25, 3.75, 10.0])
def test_double2fixed_integer_part(val):
    integer, frac = double2fixed(val)
    assert integer == int(val)
    assert 0 <= frac <= 1000000