"""Scalar shape handlers — bool, int, uint, float, string, bytes.

Each handler parses the annotation text with a caster from
``struct_defaults.casters`` and stores the result.  Text that does not parse
leaves the location untouched.

Exports
-------
ScalarHandler
    Generic "parse with caster, then store" handler.

DurationHandler
    INT-shape handler that reads duration literals for ``timedelta``
    locations and defers to another handler for everything else.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Callable

from ..casters import cast_duration
from ..core import FillHandler, Filler, TagHandler
from ..fields import Field
from ..shapes import concrete_type, underlying_type

logger = logging.getLogger(__name__)

Caster = Callable[[str, Any], Any]


class ScalarHandler(TagHandler):
    """Parse ``field.tag`` with *caster* and store the result.

    ::

        ScalarHandler(cast_int)   # "42" → 42, "x" → untouched
    """

    def __init__(self, caster: Caster) -> None:
        self._caster = caster

    def apply(self, field: Field, filler: Filler) -> None:
        try:
            value = self._caster(field.tag, field.type)
        except (ValueError, TypeError, OverflowError) as exc:
            logger.debug("skipping %r: %s", field.ref, exc)
            return
        field.set(value)


class DurationHandler(TagHandler):
    """Duration literals (``"1s"``, ``"1h30m"``) for ``timedelta`` locations.

    Any other INT-shaped location is handed to *fallback*, so installing this
    handler does not change how plain integers are parsed.
    """

    def __init__(self, fallback: FillHandler) -> None:
        self._fallback = fallback

    def apply(self, field: Field, filler: Filler) -> None:
        target = underlying_type(concrete_type(field.type))
        if not (isinstance(target, type) and issubclass(target, timedelta)):
            self._fallback.execute(field, filler)
            return
        try:
            value = cast_duration(field.tag)
        except ValueError as exc:
            logger.debug("skipping %r: %s", field.ref, exc)
            return
        field.set(value if type(value) is target else target(seconds=value.total_seconds()))
