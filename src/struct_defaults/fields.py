"""Traversal positions and the locations they point at.

A ``Field`` is created per traversal step and thrown away afterwards.  It
never owns the value; it points at it through a ``Ref``:

* ``AttrRef``  – a dataclass member (``owner.name``)
* ``ItemRef``  – a list index or dict key
* ``Holder``   – a free-standing slot: a freshly built element, a map key or
  value being assembled, or the target of a ``None`` pointer
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from typing import Any, MutableMapping, MutableSequence, Optional


# ─────────────────────────────────────────────────────────────────────────────
# Ref — mutable location abstraction
# ─────────────────────────────────────────────────────────────────────────────


class Ref(ABC):
    """A mutable location holding a value of annotation ``type``."""

    type: Any

    @abstractmethod
    def get(self) -> Any: ...

    @abstractmethod
    def set(self, value: Any) -> None: ...


class AttrRef(Ref):
    """Attribute *name* of *owner* (a dataclass member)."""

    def __init__(self, owner: Any, name: str, tp: Any) -> None:
        self.owner = owner
        self.name = name
        self.type = tp

    def get(self) -> Any:
        return getattr(self.owner, self.name)

    def set(self, value: Any) -> None:
        setattr(self.owner, self.name, value)

    def __repr__(self) -> str:
        return f"AttrRef({type(self.owner).__name__}.{self.name})"


class ItemRef(Ref):
    """Item *key* of a list or dict *container*."""

    def __init__(self, container: MutableSequence | MutableMapping, key: Any, tp: Any) -> None:
        self.container = container
        self.key = key
        self.type = tp

    def get(self) -> Any:
        return self.container[self.key]

    def set(self, value: Any) -> None:
        self.container[self.key] = value

    def __repr__(self) -> str:
        return f"ItemRef[{self.key!r}]"


class Holder(Ref):
    """Free-standing location — a fresh element, map key/value, or pointer target."""

    def __init__(self, tp: Any, value: Any = None) -> None:
        self.type = tp
        self.value = value

    def get(self) -> Any:
        return self.value

    def set(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Holder({self.value!r})"


# ─────────────────────────────────────────────────────────────────────────────
# Field — ephemeral traversal position
# ─────────────────────────────────────────────────────────────────────────────


@dataclasses.dataclass
class Field:
    """One step of the traversal.

    Attributes:
        ref:    The location being filled.
        tag:    Default annotation text for this location (``""`` if none).
        parent: Enclosing position; context only, never written through.
    """

    ref: Ref
    tag: str = ""
    parent: Optional[Field] = None

    @property
    def value(self) -> Any:
        return self.ref.get()

    @property
    def type(self) -> Any:
        return self.ref.type

    def set(self, value: Any) -> None:
        self.ref.set(value)

