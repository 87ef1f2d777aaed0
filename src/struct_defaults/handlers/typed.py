"""Type handlers — keyed by exact concrete type instead of by shape.

Exports
-------
ISO8601, RFC3339, RFC822Z, RFC1123
    Timestamp layouts for ``TimeHandler``.  ``ISO8601`` is parsed with
    ``datetime.fromisoformat``; ``RFC3339`` is checked against the RFC 3339
    grammar (optional fractional seconds, mandatory zone) and then parsed
    the same way; the others are ``strptime`` formats.

TimeHandler
    Parse the annotation of a zero ``datetime`` location with one layout.

DefaultValueHandler
    Copy a registered exemplar into an entirely-zero location.
"""

from __future__ import annotations

import copy
import logging
from datetime import datetime
from typing import Any

import regex

from ..core import FillHandler, Filler, TagHandler
from ..fields import Field
from ..shapes import is_zero

logger = logging.getLogger(__name__)

ISO8601 = "iso8601"
RFC3339 = "rfc3339"
RFC822Z = "%d %b %y %H:%M %z"
RFC1123 = "%a, %d %b %Y %H:%M:%S %Z"

_RFC3339_TEXT = regex.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(?:\.[0-9]+)?(?:Z|[+-][0-9]{2}:[0-9]{2})"
)


def parse_time(text: str, layout: str) -> datetime:
    if layout == ISO8601:
        return datetime.fromisoformat(text)
    if layout == RFC3339:
        if _RFC3339_TEXT.fullmatch(text) is None:
            raise ValueError(f"not an RFC 3339 timestamp: {text!r}")
        return datetime.fromisoformat(text)
    return datetime.strptime(text, layout)


class TimeHandler(TagHandler):
    """``datetime`` locations: parse the annotation with *layout*.

    Only a zero (``None``) location is written; unparsable text is ignored.
    """

    def __init__(self, layout: str) -> None:
        self.layout = layout

    def apply(self, field: Field, filler: Filler) -> None:
        if not is_zero(field.value, field.type):
            return
        try:
            value = parse_time(field.tag, self.layout)
        except ValueError as exc:
            logger.debug("skipping %r: %s", field.ref, exc)
            return
        field.set(value)


class DefaultValueHandler(FillHandler):
    """Registered default for one concrete type.

    The whole location is replaced with a fresh deep copy of the exemplar,
    and only when it is entirely zero and not tagged with the omit key.  A
    partially populated value is never merged into, dive or not.
    """

    def __init__(self, value: Any) -> None:
        self._value = copy.deepcopy(value)

    def execute(self, field: Field, filler: Filler) -> None:
        if field.tag == filler.omit_key or not is_zero(field.value, field.type):
            return
        field.set(copy.deepcopy(self._value))
