"""Compound duration tokens such as ``300ms``, ``1h30m`` or ``-1.5h``.

Grammar: an optional sign followed by one or more ``<number><unit>``
terms, where a number is digits with an optional fraction (``1``, ``1.5``,
``.5``, ``5.``). A bare ``0`` needs no unit.

Units: ``ns``, ``us`` (also ``µs`` / ``μs``), ``ms``, ``s``, ``m``, ``h``.

Arithmetic is done on integer nanoseconds and bounded to a signed 64-bit
count; the result is a :class:`~datetime.timedelta`, which keeps
microsecond resolution (sub-microsecond remainders round half to even).
"""

from __future__ import annotations

import re
from datetime import timedelta

NANOSECOND = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND = 1_000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

UNITS: dict[str, int] = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # micro sign
    "μs": MICROSECOND,  # greek small letter mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

MAX_NANOSECONDS = 2**63 - 1

_TERM_RE = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")

# Digits past this carry less than a nanosecond for every unit.
_MAX_DIGITS = 19

_US_PER_SECOND = 1_000_000
_US_PER_MINUTE = 60 * _US_PER_SECOND
_US_PER_HOUR = 60 * _US_PER_MINUTE


def parse_nanoseconds(text: str) -> int:
    """Parse a duration token into a signed nanosecond count.

    Raises:
        ValueError: The token is malformed, uses an unknown unit, or does
            not fit in a signed 64-bit nanosecond count.
    """
    s = text
    negative = False
    if s[:1] in ("-", "+"):
        negative = s[0] == "-"
        s = s[1:]
    if s == "0":
        return 0
    if not s:
        raise ValueError("not a valid duration")

    total = 0
    pos = 0
    while pos < len(s):
        match = _TERM_RE.match(s, pos)
        assert match is not None  # every group is optional
        whole, frac, unit_name = match.groups()
        if not whole and not frac:
            raise ValueError("not a valid duration")
        if not unit_name:
            raise ValueError("missing unit in duration")
        unit = UNITS.get(unit_name)
        if unit is None:
            raise ValueError(f"unknown unit {unit_name!r} in duration")

        whole = whole.lstrip("0")
        if len(whole) > _MAX_DIGITS:
            raise ValueError("duration out of range")
        total += int(whole or "0") * unit
        frac = frac[:_MAX_DIGITS] if frac else ""
        if frac:
            total += int(frac) * unit // 10 ** len(frac)
        pos = match.end()

    limit = MAX_NANOSECONDS + 1 if negative else MAX_NANOSECONDS
    if total > limit:
        raise ValueError("duration out of range")
    return -total if negative else total


def nanoseconds_to_timedelta(ns: int) -> timedelta:
    """Convert nanoseconds to a timedelta, rounding half to even."""
    us, rem = divmod(ns, MICROSECOND)
    if rem > MICROSECOND // 2 or (rem == MICROSECOND // 2 and us % 2):
        us += 1
    return timedelta(microseconds=us)


def parse_duration(text: str) -> timedelta:
    """Parse a duration token such as ``2m15s`` into a timedelta."""
    return nanoseconds_to_timedelta(parse_nanoseconds(text))


def _decimal(value: int, unit: int) -> str:
    """Render ``value / unit`` without trailing zeros (``1500, 1000 -> 1.5``)."""
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{str(frac).rjust(width, '0').rstrip('0')}"


def format_duration(value: timedelta) -> str:
    """Render a timedelta in the same compound form the parser accepts.

    Durations under one second use the largest fitting sub-second unit
    (``1.5ms``, ``250µs``); longer ones use ``h``/``m``/``s`` with the
    leading zero units omitted (``2m15s``, ``1h0m0s``). Zero is ``0s``.
    """
    us = (value.days * 86_400 + value.seconds) * _US_PER_SECOND + value.microseconds
    sign = "-" if us < 0 else ""
    us = abs(us)

    if us == 0:
        return "0s"
    if us < 1_000:
        return f"{sign}{us}µs"
    if us < _US_PER_SECOND:
        return f"{sign}{_decimal(us, 1_000)}ms"

    hours, rem = divmod(us, _US_PER_HOUR)
    minutes, rem = divmod(rem, _US_PER_MINUTE)
    parts = [sign]
    if hours:
        parts.append(f"{hours}h")
    if hours or minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{_decimal(rem, _US_PER_SECOND)}s")
    return "".join(parts)
