"""Filler options — each one configures a single aspect of a ``Filler``.

An option is a callable ``(filler) → None``.  ``build_filler`` applies them in
order, so a later option replaces whatever an earlier one set for the same
setting or table slot.

Exports
-------
Option
    Type alias for the option signature.

use_tag, use_omit_key, use_dive_key
    Annotation tag name and the two policy keywords.

use_time_format
    Install ``TimeHandler`` for ``datetime`` with the given layout.

parse_duration
    Install duration-literal parsing for ``timedelta`` locations.

use_default_type
    Register an exemplar value for a concrete type.

use_default
    Install the full standard shape-handler set.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional

from .casters import BUILTIN_CASTERS
from .core import Filler
from .handlers import (
    DefaultValueHandler,
    DurationHandler,
    MapHandler,
    PointerHandler,
    PolymorphicHandler,
    ScalarHandler,
    SequenceHandler,
    StructHandler,
    TimeHandler,
)
from .shapes import Shape

Option = Callable[[Filler], None]


def _require(value: str, what: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{what} must be a non-empty string, got {value!r}")
    return value


def use_tag(name: str) -> Option:
    """Read annotations from ``metadata[name]`` instead of ``metadata["default"]``."""
    _require(name, "tag name")

    def option(filler: Filler) -> None:
        filler.tag_name = name

    return option


def use_omit_key(key: str) -> Option:
    _require(key, "omit key")

    def option(filler: Filler) -> None:
        filler.omit_key = key

    return option


def use_dive_key(key: str) -> Option:
    _require(key, "dive key")

    def option(filler: Filler) -> None:
        filler.dive_key = key

    return option


def use_time_format(layout: str) -> Option:
    """Parse ``datetime`` annotations with *layout*.

    *layout* is a ``strptime`` format, ``handlers.ISO8601`` or
    ``handlers.RFC3339`` (fractional seconds accepted).
    """
    _require(layout, "time layout")

    def option(filler: Filler) -> None:
        filler.register_type(datetime, TimeHandler(layout))

    return option


def parse_duration() -> Option:
    """Read ``"1s"``-style literals into ``timedelta`` locations.

    Replaces the INT shape handler; integers that are not durations keep
    being parsed as plain integers.
    """

    def option(filler: Filler) -> None:
        filler.register_shape(Shape.INT, DurationHandler(ScalarHandler(BUILTIN_CASTERS[Shape.INT])))

    return option


def use_default_type(value: Any, *, as_type: Optional[Any] = None) -> Option:
    """Use *value* as the default of every entirely-zero location of its type.

    The type is ``type(value)`` unless *as_type* is given, which is how a
    ``typing.NewType`` is targeted::

        Role = NewType("Role", str)
        use_default_type("viewer", as_type=Role)
    """
    tp = type(value) if as_type is None else as_type

    def option(filler: Filler) -> None:
        filler.register_type(tp, DefaultValueHandler(value))

    return option


def use_default() -> Option:
    """Install the standard handler for every shape."""

    def option(filler: Filler) -> None:
        for shape, caster in BUILTIN_CASTERS.items():
            filler.register_shape(shape, ScalarHandler(caster))
        filler.register_shape(Shape.STRUCT, StructHandler())
        filler.register_shape(Shape.POINTER, PointerHandler())
        filler.register_shape(Shape.POLYMORPHIC, PolymorphicHandler())
        filler.register_shape(Shape.SEQUENCE, SequenceHandler())
        filler.register_shape(Shape.MAP, MapHandler())

    return option
