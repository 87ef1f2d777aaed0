"""Nominal sized numeric types.

Python has a single unbounded ``int`` and a single ``float``.  Members that
must behave like fixed-width or unsigned numbers are annotated with one of the
``NewType`` aliases below; at runtime they are plain ``int`` / ``float``
values, but the annotation lets the engine pick the right shape and reject
annotation text that does not fit.

Exports
-------
Int8, Int16, Int32, Int64
    Signed integers (shape ``INT``) with range checking.

Uint, Uint8, Uint16, Uint32, Uint64, Byte
    Unsigned integers (shape ``UINT``).  ``Byte`` is ``Uint8``; a
    ``list[Byte]`` member is treated as a byte-sequence.

Float32, Float64
    Nominal float aliases (shape ``FLOAT``).

SIGNED_BITS, UNSIGNED_BITS
    Bit width of every sized alias.
"""

from __future__ import annotations

from typing import Any, NewType, Optional

Int8 = NewType("Int8", int)
Int16 = NewType("Int16", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)

Uint = NewType("Uint", int)
Uint8 = NewType("Uint8", int)
Uint16 = NewType("Uint16", int)
Uint32 = NewType("Uint32", int)
Uint64 = NewType("Uint64", int)
Byte = Uint8

Float32 = NewType("Float32", float)
Float64 = NewType("Float64", float)

SIGNED_BITS: dict[Any, int] = {Int8: 8, Int16: 16, Int32: 32, Int64: 64}
UNSIGNED_BITS: dict[Any, int] = {Uint: 64, Uint8: 8, Uint16: 16, Uint32: 32, Uint64: 64}


def bit_width(tp: Any) -> Optional[int]:
    """Return the width of the nearest sized alias in *tp*'s ``NewType`` chain.

    ``Port = NewType("Port", Uint16)`` → 16.  Plain ``int`` → ``None``.
    """
    while isinstance(tp, NewType):
        if tp in SIGNED_BITS:
            return SIGNED_BITS[tp]
        if tp in UNSIGNED_BITS:
            return UNSIGNED_BITS[tp]
        tp = tp.__supertype__
    return None


def is_unsigned(tp: Any) -> bool:
    while isinstance(tp, NewType):
        if tp in UNSIGNED_BITS:
            return True
        if tp in SIGNED_BITS:
            return False
        tp = tp.__supertype__
    return False
