"""Struct walker — one ``Field`` per mutable dataclass member.

A member is visited when it is public (its name does not start with ``_``)
and its dataclass is not frozen.  Its annotation text is read from
``dataclasses.Field.metadata[<tag name>]``::

    @dataclass
    class Server:
        host: str = tagged("localhost", default="")
        port: int = field(default=0, metadata={"default": "8080"})
        _cache: dict = field(default_factory=dict)   # never visited
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterator

from .fields import AttrRef, Field
from .shapes import member_types

DEFAULT_TAG = "default"


def tagged(text: str, *, tag: str = DEFAULT_TAG, **kwargs: Any) -> Any:
    """``dataclasses.field`` carrying default annotation *text* under *tag*.

    Every other keyword is passed through to ``dataclasses.field``; existing
    ``metadata`` is merged.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[tag] = text
    return dataclasses.field(metadata=metadata, **kwargs)


def _is_mutable(obj: Any) -> bool:
    return not type(obj).__dataclass_params__.frozen


def walk_struct(field: Field, tag_name: str) -> Iterator[Field]:
    """Yield a child ``Field`` for every visitable member of ``field.value``.

    Members come out in declaration order.  Nothing is yielded for ``None``,
    non-dataclass values, or frozen dataclasses.
    """
    obj = field.value
    if obj is None or isinstance(obj, type) or not dataclasses.is_dataclass(obj):
        return
    if not _is_mutable(obj):
        return

    hints = member_types(type(obj))
    for member in dataclasses.fields(obj):
        if member.name.startswith("_"):
            continue
        tag = member.metadata.get(tag_name)
        yield Field(
            AttrRef(obj, member.name, hints.get(member.name, member.type)),
            "" if tag is None else str(tag).strip(),
            field,
        )
