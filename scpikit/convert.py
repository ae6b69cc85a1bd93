"""Number conversions between values and their SCPI text forms."""

from __future__ import annotations

import math
import re
import sys
from enum import IntEnum, IntFlag
from typing import Tuple

_DIGITS = "0123456789ABCDEF"
_WHITESPACE = " \t\n\v\f\r"
_SUPPORTED_BASES = (2, 8, 10, 16)


class DtostreFlags(IntFlag):
    """Options of :func:`dtostre`."""

    UPPERCASE = 1
    ALWAYS_SIGN = 2
    PLUS_SIGN = 4


class ArrayFormat(IntEnum):
    """How an array of numbers is sent: as text or as binary block."""

    ASCII = 0
    BIGENDIAN = 1
    LITTLEENDIAN = 2


def int_to_str(value: int, base: int = 10, signed: bool = True, bits: int = 32) -> str:
    """Format an integer of the given width in base 2, 8, 10 or 16.

    Unsupported bases fall back to 10. A minus sign is written only for
    signed values in base 10; other bases show the two's complement bits.
    """
    if bits <= 0:
        raise ValueError("bit width must be positive")
    if base not in _SUPPORTED_BASES:
        base = 10
    mask = (1 << bits) - 1
    unsigned = value & mask
    if unsigned == 0:
        return "0"
    prefix = ""
    if signed and base == 10 and unsigned & (1 << (bits - 1)):
        unsigned = (1 << bits) - unsigned
        prefix = "-"
    digits = []
    while unsigned:
        unsigned, digit = divmod(unsigned, base)
        digits.append(_DIGITS[digit])
    return prefix + "".join(reversed(digits))


def _digit_value(char: str) -> int:
    if not char.isascii():
        return -1
    return "0123456789abcdefghijklmnopqrstuvwxyz".find(char.lower())


def str_to_int(
    text: str, base: int = 10, signed: bool = True, bits: int = 32
) -> Tuple[int, int]:
    """Read an integer at the start of ``text``.

    Returns the value and the number of characters used. Leading whitespace,
    a sign and, in base 16, a ``0x`` prefix are accepted. Out-of-range values
    are clamped to the limits of the type; a negative unsigned value wraps.
    Raises ValueError when no digits are found.
    """
    if not 2 <= base <= 36:
        raise ValueError("base must be between 2 and 36")
    if bits <= 0:
        raise ValueError("bit width must be positive")
    length = len(text)
    pos = 0
    while pos < length and text[pos] in _WHITESPACE:
        pos += 1
    negative = False
    if pos < length and text[pos] in "+-":
        negative = text[pos] == "-"
        pos += 1
    if (
        base == 16
        and text[pos:pos + 2].lower() == "0x"
        and pos + 2 < length
        and 0 <= _digit_value(text[pos + 2]) < 16
    ):
        pos += 2
    start = pos
    magnitude = 0
    while pos < length:
        digit = _digit_value(text[pos])
        if not 0 <= digit < base:
            break
        magnitude = magnitude * base + digit
        pos += 1
    if pos == start:
        raise ValueError(f"no digits in {text!r}")

    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        value = -magnitude if negative else magnitude
        return max(low, min(high, value)), pos
    high = (1 << bits) - 1
    if magnitude > high:
        return high, pos
    return ((-magnitude) & high if negative else magnitude), pos


_FLOAT_RE = re.compile(
    r"""[ \t\n\v\f\r]*(?P<sign>[+-]?)(?:
        (?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?\d+)?)
      | (?P<dec>(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)
      | (?P<inf>inf(?:inity)?)
      | (?P<nan>nan(?:\([0-9a-z_]*\))?)
    )""",
    re.VERBOSE | re.IGNORECASE,
)


def str_to_float(text: str) -> Tuple[float, int]:
    """Read a floating point number at the start of ``text``.

    Returns the value and the number of characters used; raises ValueError
    when the text does not start with a number.
    """
    match = _FLOAT_RE.match(text)
    if match is None:
        raise ValueError(f"no number in {text!r}")
    sign = match.group("sign")
    if match.group("hex"):
        value = float.fromhex(sign + match.group("hex"))
    elif match.group("dec"):
        value = float(sign + match.group("dec"))
    elif match.group("inf"):
        value = float(sign + "inf")
    else:
        value = math.copysign(math.nan, -1.0 if sign == "-" else 1.0)
    return value, match.end()


_ECVT_BUFFER_SIZE = 31
_MAX_PRECISION = 24


def _ecvt(arg: float, ndigits: int) -> Tuple[str, int]:
    """Return ``ndigits`` rounded decimal digits of ``arg`` and the decimal point position."""
    bufsize = _ECVT_BUFFER_SIZE
    ndigits = max(0, min(ndigits, bufsize - 2))
    buf = [0] * bufsize
    decimal_point = 0
    write = 0
    arg = abs(arg)
    _, exponent = math.frexp(arg)
    arg, integral = math.modf(arg)

    if integral != 0:
        skip = exponent * 308 // 1024 - ndigits
        read = bufsize
        while skip > 0:
            _, integral = math.modf(integral / 10)
            decimal_point += 1
            skip -= 1
        while integral != 0:
            fraction, integral = math.modf(integral / 10)
            read -= 1
            buf[read] = int((fraction + 0.03) * 10)
            decimal_point += 1
        while read < bufsize:
            buf[write] = buf[read]
            write += 1
            read += 1
    elif arg > 0:
        while arg * 10 < 1:
            arg *= 10
            decimal_point -= 1

    last = ndigits
    while write <= last and write < bufsize:
        arg, digit = math.modf(arg * 10)
        buf[write] = int(digit)
        write += 1

    buf[last] += 5
    while buf[last] > 9:
        buf[last] = 0
        if last > 0:
            last -= 1
            buf[last] += 1
        else:
            buf[last] = 1
            decimal_point += 1

    return "".join(str(d) for d in buf[:ndigits]), decimal_point


def dtostre(value: float, precision: int = 6, flags: int = 0) -> str:
    """Format a float with ``precision`` significant digits.

    Trailing zeros are removed; small and large magnitudes use an exponent
    with at least two digits.
    """
    if not 1 <= precision <= _MAX_PRECISION:
        raise ValueError(f"precision must be between 1 and {_MAX_PRECISION}")
    flags = DtostreFlags(flags)
    upper = bool(flags & DtostreFlags.UPPERCASE)

    prefix = ""
    if math.copysign(1.0, value) < 0:
        prefix = "-"
        value = -value
    elif not math.isnan(value):
        if flags & DtostreFlags.PLUS_SIGN:
            prefix = "+"
        elif flags & DtostreFlags.ALWAYS_SIGN:
            prefix = " "

    if math.isnan(value):
        return prefix + ("NAN" if upper else "nan")
    if math.isinf(value):
        return prefix + ("INF" if upper else "inf")

    digits, decimal_point = _ecvt(value, precision)
    chars = list(digits)
    if 1 < decimal_point <= precision:
        chars = chars[:decimal_point] + ["."] + chars[decimal_point:]
        exponent = 0
    elif -4 < decimal_point <= 0:
        leading = 1 - decimal_point
        chars = ["0", "."] + ["0"] * (leading - 1) + chars
        exponent = 0
    else:
        chars = chars[:1] + ["."] + chars[1:]
        exponent = decimal_point - 1

    end = precision
    stripped = False
    while chars[end] == "0":
        end -= 1
        stripped = True
    if chars[end] == ".":
        end -= 1
        stripped = True
    body = "".join(chars[:end + 1] if stripped else chars)

    if exponent:
        sign = "+" if exponent > 0 else "-"
        body += "e" + sign + str(abs(exponent)).zfill(2)
    return prefix + body


def native_format() -> ArrayFormat:
    """Byte order of this machine."""
    return ArrayFormat.BIGENDIAN if sys.byteorder == "big" else ArrayFormat.LITTLEENDIAN


def _swap(value: int, size: int) -> int:
    mask = (1 << (8 * size)) - 1
    return int.from_bytes((value & mask).to_bytes(size, "little"), "big")


def swap16(value: int) -> int:
    """Reverse the byte order of a 16 bit value."""
    return _swap(value, 2)


def swap32(value: int) -> int:
    """Reverse the byte order of a 32 bit value."""
    return _swap(value, 4)


def swap64(value: int) -> int:
    """Reverse the byte order of a 64 bit value."""
    return _swap(value, 8)