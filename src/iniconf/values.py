"""Typed values: parse a text token and hold the result.

Each :class:`Value` owns exactly one native value. :meth:`Value.set`
parses a trimmed token and replaces it; on failure it raises
:class:`ValueError` and the held value is left unchanged. ``str(value)``
renders the current value for diagnostics.

Supported kinds and their native types:

=========  ======================  ==========================================
kind       native                  accepted tokens
=========  ======================  ==========================================
bool       ``bool``                ``1 t T TRUE true True`` / ``0 f F ...``
int        ``int`` (signed 64)     ``42``, ``-7``, ``0x2a``, ``0o52``, ``052``
int64      ``int`` (signed 64)     as int
uint       ``int`` (unsigned 64)   as int, no sign
uint64     ``int`` (unsigned 64)   as uint
float64    ``float``               ``1.5``, ``-2e10``, ``inf``, ``0x1p-2``
string     ``str``                 anything, verbatim
duration   ``timedelta``           ``300ms``, ``1h30m``, ``-1.5h``
=========  ======================  ==========================================
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, ClassVar

from iniconf.durations import format_duration, parse_duration

_TRUE_TOKENS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_TOKENS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

# Digits with single underscores between them, optionally behind a base prefix.
_UNSIGNED_RE = re.compile(r"(?:0[bBoOxX]_?)?[0-9a-fA-F]+(?:_[0-9a-fA-F]+)*")
_FLOAT_SPECIALS = frozenset({"inf", "infinity", "nan"})
# Longest decimal literal that can still fit in 64 bits.
_MAX_DECIMAL_DIGITS = 20


def parse_bool(text: str) -> bool:
    """Parse the boolean spellings ``1/0``, ``t/f`` and ``true/false``."""
    if text in _TRUE_TOKENS:
        return True
    if text in _FALSE_TOKENS:
        return False
    raise ValueError("not a boolean")


def _parse_magnitude(text: str) -> int:
    """Parse an unsigned integer literal with base-prefix detection.

    ``0x``/``0o``/``0b`` select the base, a bare leading ``0`` means octal,
    anything else is decimal.
    """
    if not _UNSIGNED_RE.fullmatch(text):
        raise ValueError("not an integer")
    digits = text.replace("_", "")
    if text[0] != "0" and digits.isdecimal() and len(digits) > _MAX_DECIMAL_DIGITS:
        raise ValueError("value out of range")
    try:
        if text[:2].lower() in ("0x", "0o", "0b"):
            return int(text, 0)
        if len(text) > 1 and text[0] == "0":
            return int(text[1:].lstrip("_"), 8)
        return int(text, 10)
    except ValueError:
        raise ValueError("not an integer") from None


def parse_int(text: str, *, bits: int = 64, signed: bool = True) -> int:
    """Parse an integer literal and check it fits the given width.

    Raises:
        ValueError: The literal is malformed, signed where *signed* is
            False, or out of range.
    """
    negative = False
    digits = text
    if text[:1] in ("-", "+"):
        if not signed:
            raise ValueError("unsigned value cannot carry a sign")
        negative = text[0] == "-"
        digits = text[1:]
    result = _parse_magnitude(digits)
    if negative:
        result = -result

    if signed:
        low, high = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
    else:
        low, high = 0, 2**bits - 1
    if not low <= result <= high:
        raise ValueError("value out of range")
    return result


def parse_float(text: str) -> float:
    """Parse a decimal, exponent, hexadecimal or inf/nan float literal."""
    if not text or text != text.strip() or not text.isascii():
        raise ValueError("not a number")
    unsigned = text.lstrip("+-")
    if unsigned[:2].lower() == "0x":
        try:
            return float.fromhex(text.replace("_", ""))
        except (ValueError, OverflowError) as exc:
            raise ValueError("not a number") from exc
    try:
        result = float(text)
    except ValueError:
        raise ValueError("not a number") from None
    if math.isinf(result) and unsigned.lower() not in _FLOAT_SPECIALS:
        raise ValueError("value out of range")
    return result


class Value(ABC):
    """A typed value bound to one configuration field.

    Subclasses set :attr:`kind` and implement :meth:`parse`; the
    constructor takes the default the value starts out with.
    """

    kind: ClassVar[str]
    is_bool_flag: ClassVar[bool] = False

    def __init__(self, default: Any) -> None:
        self._value = default

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Convert *text* to the native type or raise :class:`ValueError`."""

    def set(self, text: str) -> None:
        """Parse *text* and store it; the current value survives a failure."""
        self._value = self.parse(text)

    def get(self) -> Any:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class BoolValue(Value):
    """Boolean value.

    Marked with :attr:`is_bool_flag` so a command-line layer may treat a
    bare ``name`` as ``name=true``. The file parser never does: every item
    line carries ``=``.
    """

    kind = "bool"
    is_bool_flag = True

    def __init__(self, default: bool = False) -> None:
        super().__init__(bool(default))

    def parse(self, text: str) -> bool:
        return parse_bool(text)

    def __str__(self) -> str:
        return "true" if self._value else "false"


class IntValue(Value):
    kind = "int"
    bits: ClassVar[int] = 64
    signed: ClassVar[bool] = True

    def __init__(self, default: int = 0) -> None:
        super().__init__(int(default))

    def parse(self, text: str) -> int:
        return parse_int(text, bits=self.bits, signed=self.signed)


class Int64Value(IntValue):
    kind = "int64"


class UintValue(IntValue):
    kind = "uint"
    signed = False


class Uint64Value(UintValue):
    kind = "uint64"


class Float64Value(Value):
    kind = "float64"

    def __init__(self, default: float = 0.0) -> None:
        super().__init__(float(default))

    def parse(self, text: str) -> float:
        return parse_float(text)

    def __str__(self) -> str:
        return repr(self._value)


class StringValue(Value):
    """Verbatim text; parsing never fails."""

    kind = "string"

    def __init__(self, default: str = "") -> None:
        super().__init__(str(default))

    def parse(self, text: str) -> str:
        return text


class DurationValue(Value):
    kind = "duration"

    def __init__(self, default: timedelta | str = timedelta(0)) -> None:
        if isinstance(default, str):
            default = parse_duration(default)
        super().__init__(default)

    def parse(self, text: str) -> timedelta:
        return parse_duration(text)

    def __str__(self) -> str:
        return format_duration(self._value)


VALUE_TYPES: dict[str, type[Value]] = {
    cls.kind: cls
    for cls in (
        BoolValue,
        IntValue,
        Int64Value,
        UintValue,
        Uint64Value,
        Float64Value,
        StringValue,
        DurationValue,
    )
}
