"""Filler factory — the single place where handlers are assembled.

``build_default_filler`` is the recommended entry point for users who want a
fully functional Filler without picking options by hand.  There is no
module-level shared instance: build one and pass it where it is needed.
"""

from __future__ import annotations

from .core import Filler
from .handlers import ISO8601
from .options import Option, parse_duration, use_default, use_time_format


def build_filler(*options: Option) -> Filler:
    """Assemble an independent Filler from *options*, applied in order.

    With no options the Filler has empty dispatch tables and fills nothing.

    Example::

        filler = build_filler(use_default(), use_tag("env"))
        filler.set_defaults(config)
    """
    filler = Filler()
    for option in options:
        option(filler)
    return filler


def build_default_filler(*options: Option) -> Filler:
    """Assemble a Filler with the standard wiring, then apply *options*.

    What gets wired
    ---------------
    * ``use_default()``               – every shape handler.
    * ``use_time_format(ISO8601)``    – ``datetime`` via ``fromisoformat``.
    * ``parse_duration()``            – ``"1s"``-style ``timedelta`` literals.

    Extra *options* come last and therefore override the above.

    Example::

        @dataclass
        class Retry:
            attempts: int = tagged("3", default=0)
            backoff: timedelta = tagged("250ms", default=timedelta(0))

        retry = Retry()
        build_default_filler().set_defaults(retry)
        # → Retry(attempts=3, backoff=timedelta(microseconds=250000))
    """
    return build_filler(use_default(), use_time_format(ISO8601), parse_duration(), *options)
