"""A small printf-style formatter and integer-to-text helpers.

Supports ``%s``, ``%c``, ``%d``, ``%o``, ``%u``, ``%x`` and ``%f``, with an
optional ``l`` length modifier, a field width, ``-`` for left-justified
strings and a leading ``0`` for zero-padded numbers.
"""

from __future__ import annotations

import re
from typing import Any, Iterator

TOHEX = "0123456789abcdef"

FIXED_SIZE = 20
_FIXED_MASK = (1 << FIXED_SIZE) - 1
_WIDTH_MASK = 0x0FFFFF
_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1

_SPEC = re.compile(r"%(-?)([0-9]*)(l?)(.?)", re.DOTALL)
_CONVERSIONS = frozenset("scdouxf")


def _signed(val: int, bits: int) -> int:
    val &= (1 << bits) - 1
    if val >= 1 << (bits - 1):
        val -= 1 << bits
    return val


def int2str(val: int) -> str:
    """Return the decimal text of a signed integer."""
    return str(int(val))


def uint2str(val: int) -> str:
    """Return the decimal text of an unsigned 64-bit integer."""
    return str(int(val) & _MASK64)


def hex2str(val: int) -> str:
    """Return the lower-case hex text of an unsigned 64-bit integer."""
    return format(int(val) & _MASK64, "x")


def octal2str(val: int) -> str:
    """Return the octal text of a value; negative values give an empty string."""
    val = int(val)
    if val < 0:
        return ""
    return format(val, "o")


def double2fixed(val: float) -> tuple[int, int]:
    """Split a float into its integer part and six fractional decimal digits.

    The value is first rounded to 20 fractional bits.
    """
    neg = val < 0
    if neg:
        val = -val

    fixed = int(val * (1 << FIXED_SIZE) + 0.5)
    frac = fixed & _FIXED_MASK

    result = 0
    bit_val = 5000000
    for bit in range(FIXED_SIZE - 1, -1, -1):
        if frac & (1 << bit):
            result += bit_val
        bit_val >>= 1

    integer = fixed >> FIXED_SIZE
    return (-integer if neg else integer), (result + 5) // 10


def _next_arg(args: Iterator[Any]) -> Any:
    try:
        return next(args)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def _pad_num(text: str, width: int, zero: bool) -> str:
    if width:
        return ("0" if zero else " ") * (width - len(text)) + text
    return text


def _pad_str(text: str, width: int, left: bool) -> str:
    pad = " " * (width - len(text))
    return text + pad if left else pad + text


def _char(arg: Any) -> str:
    if isinstance(arg, int):
        return chr(arg & 0xFF)
    if isinstance(arg, str) and len(arg) == 1:
        return arg
    raise TypeError("%c requires an int or a single character")


def _render(fmt: str, args: tuple[Any, ...]) -> Iterator[str]:
    it = iter(args)
    pos = 0
    end = len(fmt)
    while pos < end:
        pct = fmt.find("%", pos)
        if pct < 0:
            yield fmt[pos:]
            return
        if pct > pos:
            yield fmt[pos:pct]

        m = _SPEC.match(fmt, pct)
        minus, digits, long_flag, conv = m.groups()
        if conv not in _CONVERSIONS or not conv:
            # Unknown conversion: emit the '%' and rescan what follows it.
            yield "%"
            pos = pct + 1
            continue

        left = bool(minus)
        zero = digits.startswith("0")
        width = int(digits or "0") & _WIDTH_MASK
        bits = 64 if long_flag else 32
        mask = _MASK64 if long_flag else _MASK32

        if conv == "s":
            yield _pad_str(str(_next_arg(it)), width, left)
        elif conv == "c":
            yield _char(_next_arg(it))
        elif conv == "d":
            yield _pad_num(int2str(_signed(int(_next_arg(it)), bits)), width, zero)
        elif conv == "o":
            yield _pad_num(octal2str(_signed(int(_next_arg(it)), bits)), width, zero)
        elif conv == "u":
            yield _pad_num(uint2str(int(_next_arg(it)) & mask), width, zero)
        elif conv == "x":
            yield _pad_num(hex2str(int(_next_arg(it)) & mask), width, zero)
        else:
            integer, frac = double2fixed(float(_next_arg(it)))
            yield _pad_num(int2str(integer), width, zero)
            yield "."
            yield _pad_num(int2str(frac), width, zero)

        pos = m.end()


def strfmt(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` and return the whole result."""
    return "".join(_render(fmt, args))


def strfmt_buffer(size: int, fmt: str, *args: Any) -> tuple[str, int]:
    """Format into a buffer of ``size`` bytes, one of which is the terminator.

    Returns the (possibly truncated) text and the length the full result
    would have had.
    """
    if size < 1:
        return "", 0
    text = strfmt(fmt, *args)
    return text[: size - 1], len(text)