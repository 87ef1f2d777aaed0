"""Core abstractions — fill handlers and the Filler engine.

Locations and traversal positions live in ``fields``; concrete fill handlers
live in the ``handlers`` sub-package and are wired in by ``options`` /
``factory``.

Execution flow (``Filler.set_defaults`` entry point)::

    value (dataclass instance)
      │
      ▼
    Filler.fill_struct(root Field)
      │
      ▼
    walk_struct → Field per public member
      │
      ▼
    Filler.fill_field(field)
        shape_handlers[shape_of(field.type)]        ← if should_fill
        type_handlers[concrete_type(field.type)]    ← if should_fill (again)
            │
            └─ composite handlers call filler.fill_field(child) recursively
"""

from __future__ import annotations

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from .fields import Field, Holder
from .shapes import Shape, concrete_type, inner_shape, is_zero, shape_of
from .walker import DEFAULT_TAG, walk_struct

logger = logging.getLogger(__name__)

OMIT_KEY = "omit"
DIVE_KEY = "dive"


# ─────────────────────────────────────────────────────────────────────────────
# FillHandler
# ─────────────────────────────────────────────────────────────────────────────


class FillHandler(ABC):
    """Fill a single location.

    Handlers are only invoked once ``Filler.should_fill`` agreed; composite
    handlers recurse through ``filler.fill_field``.  A handler never raises
    for bad annotation text — it leaves the location as it is.
    """

    @abstractmethod
    def execute(self, field: Field, filler: Filler) -> None: ...


class TagHandler(FillHandler):
    """Handler that does nothing for a location without annotation text."""

    def execute(self, field: Field, filler: Filler) -> None:
        if field.tag:
            self.apply(field, filler)

    @abstractmethod
    def apply(self, field: Field, filler: Filler) -> None: ...


# ─────────────────────────────────────────────────────────────────────────────
# Filler — the engine
# ─────────────────────────────────────────────────────────────────────────────


class Filler:
    """Owns both dispatch tables and the zero-value / recursion policy.

    * ``shape_handlers`` – keyed by ``Shape``; first-level dispatch.
    * ``type_handlers``  – keyed by concrete type (``datetime``, a dataclass,
      a ``NewType``…); second-level dispatch, runs after the shape handler.

    A built Filler may be shared between threads as long as neither table is
    mutated afterwards.
    """

    def __init__(
            self,
            *,
            tag_name: str = DEFAULT_TAG,
            omit_key: str = OMIT_KEY,
            dive_key: str = DIVE_KEY,
            shape_handlers: Optional[Dict[Shape, FillHandler]] = None,
            type_handlers: Optional[Dict[Any, FillHandler]] = None,
    ) -> None:
        self.tag_name = tag_name
        self.omit_key = omit_key
        self.dive_key = dive_key
        self.shape_handlers: Dict[Shape, FillHandler] = dict(shape_handlers) if shape_handlers else {}
        self.type_handlers: Dict[Any, FillHandler] = dict(type_handlers) if type_handlers else {}

    # -- registration -------------------------------------------------------

    def register_shape(self, shape: Shape, handler: FillHandler) -> None:
        self.shape_handlers[shape] = handler

    def register_type(self, tp: Any, handler: FillHandler) -> None:
        self.type_handlers[tp] = handler

    # -- public API ---------------------------------------------------------

    def set_defaults(self, value: Any) -> None:
        """Fill the unset members of dataclass instance *value* in place.

        Anything else (a class, ``None``, a plain dict…) is ignored.
        """
        if isinstance(value, type) or not dataclasses.is_dataclass(value):
            logger.debug("set_defaults: ignoring non-dataclass value of type %s", type(value).__name__)
            return
        self.fill_struct(Field(Holder(type(value), value)))

    # -- traversal ----------------------------------------------------------

    def fill_struct(self, field: Field) -> None:
        for member in walk_struct(field, self.tag_name):
            self.fill_field(member)

    def fill_field(self, field: Field) -> None:
        """Dispatch *field* by shape, then by concrete type."""
        handler = self.shape_handlers.get(shape_of(field.type))
        if handler is not None and self.should_fill(field):
            handler.execute(field, self)

        handler = self._type_handler(field)
        if handler is not None and self.should_fill(field):
            handler.execute(field, self)

    def should_fill(self, field: Field) -> bool:
        """Zero-value / recursion policy.

        * innermost shape STRUCT: dive → yes, omit → no, else only if zero.
        * innermost shape POLYMORPHIC: always (the resolved value decides).
        * anything else: only if zero.
        """
        shape = inner_shape(field.type, field.value)
        if shape is Shape.STRUCT:
            if field.tag == self.dive_key:
                return True
            if field.tag == self.omit_key:
                return False
        elif shape is Shape.POLYMORPHIC:
            return True
        return is_zero(field.value, field.type)

    def _type_handler(self, field: Field) -> Optional[FillHandler]:
        if not self.type_handlers:
            return None
        try:
            return self.type_handlers.get(concrete_type(field.type))
        except TypeError:
            # unhashable annotation, e.g. Literal[[1]]
            return None
