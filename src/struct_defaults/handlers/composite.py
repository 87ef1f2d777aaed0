"""Composite shape handlers — struct, pointer, polymorphic, sequence, map.

All of them recurse through ``filler.fill_field`` so that nested locations go
through the same shape/type dispatch and the same zero-value policy.

Exports
-------
StructHandler
    Walk a dataclass member by member (unless tagged with the omit key).

PointerHandler
    ``Optional[T]``: fill a fresh target for ``None``, attach it only if the
    result is non-zero; otherwise fill the existing target.

PolymorphicHandler
    ``Any`` / ABC / Protocol / Union: fill a live dataclass value in place.

SequenceHandler
    ``list[T]``: fill existing struct elements in place, or build a new list
    from a ``[...]`` literal.

MapHandler
    ``dict[K, V]``: fill existing struct values in place, or build a new dict
    from a ``{...}`` literal.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..core import FillHandler, Filler
from ..fields import Field, Holder, ItemRef
from ..kinds import UNSIGNED_BITS
from ..literal import tokenize_values, unwrap_literal
from ..shapes import (
    Shape,
    concrete_type,
    inner_shape,
    is_zero,
    map_types,
    pointer_target,
    sequence_element,
    shape_of,
    zero_value,
)

logger = logging.getLogger(__name__)

_IN_PLACE = (Shape.STRUCT, Shape.POLYMORPHIC)


def _is_byte(tp: Any) -> bool:
    return UNSIGNED_BITS.get(tp) == 8


def _enclosed_by(field: Field, tp: Any) -> bool:
    """Report whether a struct of type *tp* already encloses *field*."""
    target = concrete_type(tp)
    ancestor = field.parent
    while ancestor is not None:
        if concrete_type(ancestor.type) == target:
            return True
        ancestor = ancestor.parent
    return False


class StructHandler(FillHandler):

    def execute(self, field: Field, filler: Filler) -> None:
        if field.tag != filler.omit_key:
            filler.fill_struct(field)


class PointerHandler(FillHandler):
    """Fill through an ``Optional[T]`` location.

    A ``None`` pointer gets a zero ``T`` to fill; the filled target is only
    attached when it ended up non-zero, so a pointer whose defaults resolve to
    nothing stays ``None``.

    A ``None`` pointer to a dataclass that already encloses it (``Optional``
    self or mutual references) is left ``None``, so allocation never
    outruns the depth of the value itself.
    """

    def execute(self, field: Field, filler: Filler) -> None:
        target_type = pointer_target(field.type)
        current = field.value

        if current is None:
            if shape_of(target_type) is Shape.STRUCT and _enclosed_by(field, target_type):
                return
            try:
                target = Holder(target_type, zero_value(target_type))
            except TypeError as exc:
                logger.debug("skipping %r: cannot build zero %s: %s", field.ref, target_type, exc)
                return
        else:
            target = Holder(target_type, current)

        filler.fill_field(Field(target, field.tag, field.parent))

        if current is None:
            if not is_zero(target.value, target_type):
                field.set(target.value)
        elif target.value is not current:
            field.set(target.value)


class PolymorphicHandler(FillHandler):
    """Fill the live dataclass behind a polymorphic location.

    Never invents an implementation for ``None`` and never touches a live
    value that is not a dataclass.  The live value is filled in place, as a
    non-null pointer to its own class.
    """

    def execute(self, field: Field, filler: Filler) -> None:
        current = field.value
        if current is None or inner_shape(field.type, current) is not Shape.STRUCT:
            return

        target = Holder(Optional[type(current)], current)
        filler.fill_field(Field(target, field.tag, field.parent))
        if target.value is not current:
            field.set(target.value)


class SequenceHandler(FillHandler):
    """Fill a ``list[T]`` location.

    * ``T`` is ``Byte``                 → list of the annotation's UTF-8 bytes.
    * innermost shape struct/polymorphic → recurse into each existing element
                                          with the list's own tag.
    * otherwise                         → ``[e1,e2,...]`` literal; each element
                                          is filled from its token.
    """

    def execute(self, field: Field, filler: Filler) -> None:
        elem_type = sequence_element(field.type)

        if _is_byte(elem_type):
            if field.value is None and field.tag:
                field.set(list(field.tag.encode()))
            return

        if inner_shape(field.type) in _IN_PLACE:
            items = field.value
            if items is None:
                return
            for index in range(len(items)):
                filler.fill_field(Field(ItemRef(items, index, elem_type), field.tag, field))
            return

        body = unwrap_literal(field.tag, "[", "]")
        if body is None:
            if field.tag:
                logger.debug("skipping %r: not a sequence literal: %r", field.ref, field.tag)
            return
        if field.tag == "[]":
            field.set([])
            return

        tokens = tokenize_values(body)
        try:
            result: List[Any] = [zero_value(elem_type) for _ in tokens]
        except TypeError as exc:
            logger.debug("skipping %r: cannot build zero %s: %s", field.ref, elem_type, exc)
            return
        for index, token in enumerate(tokens):
            filler.fill_field(Field(ItemRef(result, index, elem_type), token, field))
        field.set(result)


class MapHandler(FillHandler):
    """Fill a ``dict[K, V]`` location.

    * innermost shape struct/polymorphic → each existing value is copied into
                                          a ``Holder``, filled, and written
                                          back under the same key.
    * otherwise                         → ``{k1:v1,...}`` literal into a fresh
                                          dict; later duplicate keys win.
    """

    def execute(self, field: Field, filler: Filler) -> None:
        key_type, value_type = map_types(field.type)

        if inner_shape(field.type) in _IN_PLACE:
            entries = field.value
            if entries is None:
                return
            for key, current in list(entries.items()):
                item = Holder(value_type, current)
                filler.fill_field(Field(item, field.tag, field))
                entries[key] = item.value
            return

        body = unwrap_literal(field.tag, "{", "}")
        if body is None:
            if field.tag:
                logger.debug("skipping %r: not a map literal: %r", field.ref, field.tag)
            return
        if field.tag == "{}":
            field.set({})
            return

        result: Dict[Any, Any] = {}
        for entry in tokenize_values(body):
            key_text, sep, value_text = entry.partition(":")
            if not sep:
                continue

            # one zero per entry; a mutable zero is never shared
            try:
                key = Holder(key_type, zero_value(key_type))
                value = Holder(value_type, zero_value(value_type))
            except TypeError as exc:
                logger.debug("skipping %r: cannot build zero entry: %s", field.ref, exc)
                return

            filler.fill_field(Field(key, key_text, field))
            filler.fill_field(Field(value, value_text, field))

            try:
                result[key.value] = value.value
            except TypeError as exc:
                logger.debug("skipping entry %r of %r: %s", entry, field.ref, exc)
        field.set(result)
