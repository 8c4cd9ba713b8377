"""Value parsing and coercion for option kinds."""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Any

from .registry import INT64_MAX, INT64_MIN, OptionKind

_NANOS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_UNIT_PATTERN = "ns|us|µs|μs|ms|s|m|h"
_COMPONENT_RE = re.compile(rf"([0-9]+(?:\.[0-9]*)?|\.[0-9]+)({_UNIT_PATTERN})")
_DURATION_RE = re.compile(rf"^[-+]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:{_UNIT_PATTERN}))+$")

_INT64_RE = re.compile(
    r"^[-+]?(?:0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+|0[0-7_]*|[1-9][0-9_]*)$"
)

_TRUE_VALUES = {"1", "t", "true", "yes", "on"}
_FALSE_VALUES = {"0", "f", "false", "no", "off"}


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration literal such as ``300ms``, ``-1.5h`` or ``2h45m``.

    Valid units are ns, us (or µs), ms, s, m and h. A bare ``0`` is allowed.
    Sub-microsecond precision is rounded to the nearest microsecond.

    Raises:
        ValueError: if the literal is malformed or exceeds the int64
            nanosecond range
    """
    literal = text.strip()
    if literal in ("0", "+0", "-0"):
        return timedelta(0)
    if not _DURATION_RE.match(literal):
        raise ValueError(f"invalid duration {text!r}")

    negative = literal.startswith("-")
    total_nanos = Decimal(0)
    for number, unit in _COMPONENT_RE.findall(literal):
        total_nanos += Decimal(number) * _NANOS_PER_UNIT[unit]

    limit = INT64_MAX + 1 if negative else INT64_MAX
    if total_nanos > limit:
        raise ValueError(f"invalid duration {text!r}: out of range")

    micros = (total_nanos / 1000).quantize(Decimal(1), rounding=ROUND_HALF_EVEN)
    result = timedelta(microseconds=int(micros))
    return -result if negative else result


def _format_fraction(value: int, unit: int) -> str:
    whole, remainder = divmod(value, unit)
    if not remainder:
        return str(whole)
    width = len(str(unit)) - 1
    digits = str(remainder).rjust(width, "0").rstrip("0")
    return f"{whole}.{digits}"


def format_duration(value: timedelta) -> str:
    """Render a timedelta as the shortest duration literal, e.g. ``250ms`` or ``10m0s``."""
    micros = value // timedelta(microseconds=1)
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros == 0:
        return "0s"
    if micros < 1000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_format_fraction(micros, 1000)}ms"

    hours, micros = divmod(micros, 3600 * 1_000_000)
    minutes, micros = divmod(micros, 60 * 1_000_000)
    seconds = f"{_format_fraction(micros, 1_000_000)}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}"
    if minutes:
        return f"{sign}{minutes}m{seconds}"
    return f"{sign}{seconds}"


def parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean {text!r}")


def parse_int64(text: str) -> int:
    """
    Parse a signed 64-bit integer.

    ``0x``, ``0o`` and ``0b`` prefixes select the base, and a leading ``0``
    means octal, so ``0100`` is 64. Only ASCII digits are accepted.
    """
    literal = text.strip()
    if not _INT64_RE.match(literal):
        raise ValueError(f"invalid int64 {text!r}")
    digits = literal.lstrip("+-")
    octal = len(digits) > 1 and digits[0] == "0" and digits[1] not in "xXoObB"
    value = int(literal, 8 if octal else 0)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"value {literal} out of range for int64")
    return value


def coerce(raw: Any, kind: OptionKind) -> Any:
    """
    Coerce a raw value to the given kind where possible.

    Values that cannot be converted are returned unchanged so that
    validation can report them.
    """
    if raw is None or not isinstance(raw, str):
        return raw
    try:
        if kind is OptionKind.BOOL:
            return parse_bool(raw)
        if kind is OptionKind.INT64:
            return parse_int64(raw)
        if kind is OptionKind.DURATION:
            return parse_duration(raw)
    except ValueError:
        return raw
    return raw
