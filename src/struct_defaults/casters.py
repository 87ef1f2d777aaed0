"""Built-in scalar casters — annotation text → typed value.

Every caster has the signature ``(text, tp) → value`` where *tp* is the
annotation of the target location.  The result is built through the concrete
class behind *tp*, so ``str`` / ``int`` subclasses (enums included) and
``NewType`` aliases come out with the right type.

Casters raise ``ValueError`` (or ``TypeError`` / ``OverflowError`` from the
concrete constructor) on text that does not parse; the shape handlers turn
that into a silent skip.

Exports
-------
BUILTIN_CASTERS
    Dictionary mapping each scalar ``Shape`` to its caster.

cast_duration
    Duration literal parser (``"1h30m"``, ``"300ms"``, ``"-1.5s"``).
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable

import regex

from .kinds import bit_width, is_unsigned
from .shapes import Shape, underlying_type

_SIGNED = regex.compile(r"[+-]?[0-9]+")
_UNSIGNED = regex.compile(r"[0-9]+")

_DURATION = regex.compile(r"(?P<sign>[+-]?)(?P<body>(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:ns|us|µs|μs|ms|s|m|h))+|0)")
_DURATION_PART = regex.compile(r"(?P<num>[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?P<unit>ns|us|µs|μs|ms|s|m|h)")

# unit → (timedelta keyword, scale)
_DURATION_UNITS = {
    "ns": ("microseconds", 0.001),
    "us": ("microseconds", 1),
    "µs": ("microseconds", 1),
    "μs": ("microseconds", 1),
    "ms": ("milliseconds", 1),
    "s": ("seconds", 1),
    "m": ("minutes", 1),
    "h": ("hours", 1),
}

_BOOL_TEXT = {
    "1": True, "t": True, "T": True, "TRUE": True, "true": True, "True": True,
    "0": False, "f": False, "F": False, "FALSE": False, "false": False, "False": False,
}


def _construct(tp: Any, value: Any) -> Any:
    cls = underlying_type(tp)
    return value if type(value) is cls else cls(value)


def _check_range(value: int, tp: Any) -> int:
    bits = bit_width(tp)
    if bits is None:
        return value
    if is_unsigned(tp):
        low, high = 0, (1 << bits) - 1
    else:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    if not low <= value <= high:
        raise ValueError(f"{value} out of range for {bits}-bit integer")
    return value


def cast_bool(text: str, tp: Any) -> Any:
    if text not in _BOOL_TEXT:
        raise ValueError(f"invalid boolean literal: {text!r}")
    return _BOOL_TEXT[text]


def cast_int(text: str, tp: Any) -> Any:
    if _SIGNED.fullmatch(text) is None:
        raise ValueError(f"invalid integer literal: {text!r}")
    value = _check_range(int(text), tp)
    if issubclass(underlying_type(tp), timedelta):
        # integer representation of a duration is nanoseconds
        return timedelta(microseconds=value / 1000)
    return _construct(tp, value)


def cast_uint(text: str, tp: Any) -> Any:
    if _UNSIGNED.fullmatch(text) is None:
        raise ValueError(f"invalid unsigned literal: {text!r}")
    return _construct(tp, _check_range(int(text), tp))


def cast_float(text: str, tp: Any) -> Any:
    return _construct(tp, float(text))


def cast_string(text: str, tp: Any) -> Any:
    return _construct(tp, text)


def cast_bytes(text: str, tp: Any) -> Any:
    return _construct(tp, text.encode())


def cast_duration(text: str, tp: Any = timedelta) -> timedelta:
    """Parse a duration literal: a signed sequence of ``<number><unit>`` pairs.

    Units: ``ns``, ``us`` (``µs``), ``ms``, ``s``, ``m``, ``h``.  ``"0"`` is
    the only unit-less literal accepted.  Nanoseconds are rounded to the
    microsecond resolution of ``timedelta``.

    ::

        cast_duration("1h30m")   # timedelta(seconds=5400)
        cast_duration("-1.5s")   # timedelta(seconds=-1.5)
    """
    match = _DURATION.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid duration literal: {text!r}")

    total = timedelta(0)
    for part in _DURATION_PART.finditer(match.group("body")):
        keyword, scale = _DURATION_UNITS[part.group("unit")]
        total += timedelta(**{keyword: float(part.group("num")) * scale})
    return -total if match.group("sign") == "-" else total


BUILTIN_CASTERS: dict[Shape, Callable[[str, Any], Any]] = {
    Shape.BOOL: cast_bool,
    Shape.INT: cast_int,
    Shape.UINT: cast_uint,
    Shape.FLOAT: cast_float,
    Shape.STRING: cast_string,
    Shape.BYTES: cast_bytes,
}
