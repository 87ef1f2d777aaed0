"""Handlers sub-package — concrete FillHandler implementations, grouped by
what they dispatch on.

scalar    – bool / int / uint / float / string / bytes shapes, duration literals
composite – struct / pointer / polymorphic / sequence / map shapes
typed     – handlers keyed by concrete type (timestamps, registered defaults)
"""

from .composite import (
    MapHandler,
    PointerHandler,
    PolymorphicHandler,
    SequenceHandler,
    StructHandler,
)
from .scalar import DurationHandler, ScalarHandler
from .typed import (
    ISO8601,
    RFC1123,
    RFC3339,
    RFC822Z,
    DefaultValueHandler,
    TimeHandler,
    parse_time,
)

__all__ = [
    # scalar
    "ScalarHandler",
    "DurationHandler",
    # composite
    "StructHandler",
    "PointerHandler",
    "PolymorphicHandler",
    "SequenceHandler",
    "MapHandler",
    # typed
    "TimeHandler",
    "DefaultValueHandler",
    "parse_time",
    "ISO8601",
    "RFC3339",
    "RFC822Z",
    "RFC1123",
]
