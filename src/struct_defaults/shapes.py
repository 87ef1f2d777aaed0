"""Shape introspection — map type annotations onto the closed set of shapes.

The engine never looks at a type annotation directly.  Every decision goes
through the helpers here, which turn an annotation (plus, for polymorphic
locations, the live value) into a ``Shape`` and answer zero-value questions.

Annotation → shape::

    bool                               → BOOL
    int, timedelta, Int8..Int64        → INT
    Uint, Uint8..Uint64                → UINT
    float                              → FLOAT
    str                                → STRING
    bytes, bytearray                   → BYTES
    @dataclass class                   → STRUCT
    Optional[T]                        → POINTER
    Any, object, ABC/Protocol, A | B   → POLYMORPHIC
    list[T], MutableSequence[T]        → SEQUENCE
    dict[K, V], MutableMapping[K, V]   → MAP
    anything else (datetime, …)        → INVALID

``Annotated[...]`` is transparent and ``NewType`` follows its supertype.

Exports
-------
Shape, shape_of, inner_shape, concrete_type,
pointer_target, sequence_element, map_types,
zero_value, is_zero, member_types, underlying_type
"""

from __future__ import annotations

import collections.abc
import dataclasses
import functools
import sys
import types
from abc import ABCMeta
from datetime import timedelta
from enum import Enum
from typing import Annotated, Any, NewType, Tuple, Union, get_args, get_origin, get_type_hints

from .kinds import SIGNED_BITS, UNSIGNED_BITS

_NONE_TYPE = type(None)
_UNION_ORIGINS = (Union, types.UnionType)
_SEQUENCE_ORIGINS = (list, collections.abc.MutableSequence)
_MAP_ORIGINS = (dict, collections.abc.MutableMapping)


class Shape(Enum):
    """Coarse structural category of a value — drives first-level dispatch."""

    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    STRING = "string"
    BYTES = "bytes"
    STRUCT = "struct"
    POINTER = "pointer"
    POLYMORPHIC = "polymorphic"
    SEQUENCE = "sequence"
    MAP = "map"
    INVALID = "invalid"


# ─────────────────────────────────────────────────────────────────────────────
# Annotation unwrapping
# ─────────────────────────────────────────────────────────────────────────────


def _strip(tp: Any) -> Any:
    """Drop ``Annotated`` layers."""
    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    return tp


def underlying_type(tp: Any) -> Any:
    """Drop ``Annotated`` and ``NewType`` layers."""
    tp = _strip(tp)
    while isinstance(tp, NewType):
        tp = _strip(tp.__supertype__)
    return tp


def _optional_target(tp: Any) -> Any:
    """Return ``T`` for ``Optional[T]``, ``None`` for anything else."""
    if get_origin(tp) in _UNION_ORIGINS:
        args = get_args(tp)
        rest = [a for a in args if a is not _NONE_TYPE]
        if len(args) == 2 and len(rest) == 1:
            return rest[0]
    return None


# ─────────────────────────────────────────────────────────────────────────────
# Shape resolution
# ─────────────────────────────────────────────────────────────────────────────


def shape_of(tp: Any) -> Shape:
    """Return the direct shape of annotation *tp*."""
    tp = _strip(tp)
    if tp is Any or tp is object:
        return Shape.POLYMORPHIC

    origin = get_origin(tp)
    if origin in _UNION_ORIGINS:
        return Shape.POINTER if _optional_target(tp) is not None else Shape.POLYMORPHIC
    if origin in _SEQUENCE_ORIGINS:
        return Shape.SEQUENCE
    if origin in _MAP_ORIGINS:
        return Shape.MAP

    if isinstance(tp, NewType):
        if tp in UNSIGNED_BITS:
            return Shape.UINT
        if tp in SIGNED_BITS:
            return Shape.INT
        return shape_of(tp.__supertype__)

    if not isinstance(tp, type):
        return Shape.INVALID
    if issubclass(tp, bool):
        return Shape.BOOL
    if issubclass(tp, (int, timedelta)):
        return Shape.INT
    if issubclass(tp, float):
        return Shape.FLOAT
    if issubclass(tp, str):
        return Shape.STRING
    if issubclass(tp, (bytes, bytearray)):
        return Shape.BYTES
    if dataclasses.is_dataclass(tp):
        return Shape.STRUCT
    if issubclass(tp, list):
        return Shape.SEQUENCE
    if issubclass(tp, dict):
        return Shape.MAP
    if isinstance(tp, ABCMeta):
        return Shape.POLYMORPHIC
    return Shape.INVALID


def pointer_target(tp: Any) -> Any:
    target = _optional_target(underlying_type(tp))
    return Any if target is None else target


def sequence_element(tp: Any) -> Any:
    args = get_args(underlying_type(tp))
    return args[0] if args else Any


def map_types(tp: Any) -> Tuple[Any, Any]:
    """Return ``(key_type, value_type)`` of a map annotation."""
    args = get_args(underlying_type(tp))
    return (args[0], args[1]) if len(args) == 2 else (Any, Any)


def inner_shape(tp: Any, value: Any = None) -> Shape:
    """Return the innermost shape of a location.

    Repeatedly unwraps pointer, sequence and map layers (maps unwrap to their
    *value* type).  A polymorphic location holding a live *value* first
    resolves to that value's class; without one it stays ``POLYMORPHIC``.
    """
    shape = shape_of(tp)
    if shape is Shape.POLYMORPHIC and value is not None:
        tp = type(value)
        shape = shape_of(tp)

    while True:
        if shape is Shape.POINTER:
            tp = pointer_target(tp)
        elif shape is Shape.SEQUENCE:
            tp = sequence_element(tp)
        elif shape is Shape.MAP:
            tp = map_types(tp)[1]
        else:
            return shape
        shape = shape_of(tp)


def concrete_type(tp: Any) -> Any:
    """Return the exact nominal type behind every pointer layer of *tp*.

    ``Optional[Role]`` → ``Role`` (a ``NewType`` is kept, not resolved).
    """
    tp = _strip(tp)
    target = _optional_target(tp)
    while target is not None:
        tp = _strip(target)
        target = _optional_target(tp)
    return tp


# ─────────────────────────────────────────────────────────────────────────────
# Zero values
# ─────────────────────────────────────────────────────────────────────────────


def zero_value(tp: Any) -> Any:
    """Construct the zero value of *tp*.

    Raises ``TypeError`` when the type cannot be built without arguments
    (e.g. a dataclass with required fields).
    """
    shape = shape_of(tp)
    if shape in (Shape.POINTER, Shape.POLYMORPHIC, Shape.SEQUENCE, Shape.MAP, Shape.INVALID):
        return None
    return underlying_type(tp)()


def is_zero(value: Any, tp: Any) -> bool:
    """Report whether *value*, stored in a location annotated *tp*, is zero."""
    if value is None:
        return True
    shape = shape_of(tp)
    if shape in (Shape.POINTER, Shape.POLYMORPHIC, Shape.SEQUENCE, Shape.MAP, Shape.INVALID):
        return False
    if shape is Shape.STRUCT:
        if not dataclasses.is_dataclass(value):
            return False
        hints = member_types(type(value))
        return all(
            is_zero(getattr(value, f.name), hints.get(f.name, f.type))
            for f in dataclasses.fields(value)
        )
    if shape is Shape.BYTES:
        return len(value) == 0
    return not value


@functools.lru_cache(maxsize=None)
def member_types(cls: type) -> dict[str, Any]:
    """Resolved member annotations of dataclass *cls* (cached per class).

    When the class as a whole cannot be resolved (a forward reference to a
    name that is not reachable, e.g. a function-local class under postponed
    evaluation), each member is resolved on its own and only the members
    that still fail keep their raw ``dataclasses.Field.type``.
    """
    try:
        return get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        return {f.name: _member_type(cls, f) for f in dataclasses.fields(cls)}


def _member_type(cls: type, member: dataclasses.Field) -> Any:
    if not isinstance(member.type, str):
        return member.type

    owner = next(
        (k for k in cls.__mro__ if member.name in k.__dict__.get("__annotations__", {})),
        cls,
    )
    module = sys.modules.get(owner.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = dict(vars(owner))
    localns.setdefault(owner.__name__, owner)

    # the same evaluation get_type_hints applies to a string annotation
    try:
        return eval(member.type, globalns, localns)
    except (NameError, AttributeError, TypeError, SyntaxError):
        return member.type
