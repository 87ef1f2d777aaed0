"""Composite default literals — ``[e1,e2,...]`` and ``{k1:v1,k2:v2}``.

Grammar::

    literal  := scalar | sequence | map
    sequence := "[" [literal ("," literal)*] "]"
    map      := "{" [entry ("," entry)*] "}"
    entry    := literal ":" literal          (split on the *first* colon)

Scalars are taken verbatim; there is no quoting, so a scalar token cannot
contain ``,`` ``[`` ``]`` ``{`` or ``}``.

Exports
-------
tokenize_values
    Split a literal interior into its top-level comma-separated tokens.

unwrap_literal
    Strip the outer delimiters of a literal, rejecting unbalanced input.
"""

from __future__ import annotations

from typing import List, Optional

import regex

_OPENERS = {"[": "]", "{": "}"}
_CLOSERS = {"]", "}"}

_LITERAL_PATTERNS = {
    ("[", "]"): regex.compile(r"\[(?P<body>.*)\]", regex.DOTALL),
    ("{", "}"): regex.compile(r"\{(?P<body>.*)\}", regex.DOTALL),
}


def tokenize_values(expr: str) -> List[str]:
    """Split *expr* on commas that are not nested inside ``[]`` / ``{}``.

    ::

        tokenize_values("1,2,3")          # ['1', '2', '3']
        tokenize_values("[1,2],[3,4]")    # ['[1,2]', '[3,4]']
        tokenize_values("1:{1:a,2:b},2:c") # ['1:{1:a,2:b}', '2:c']

    A trailing empty token is dropped (``"1,"`` → ``['1']``); leading and
    inner empty tokens are kept.
    """
    tokens: List[str] = []
    buf: List[str] = []
    depth = 0

    for ch in expr:
        if ch == "," and depth == 0:
            tokens.append("".join(buf))
            buf = []
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        buf.append(ch)

    if buf:
        tokens.append("".join(buf))
    return tokens


def _balanced(expr: str) -> bool:
    stack: List[str] = []
    for ch in expr:
        if ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif ch in _CLOSERS:
            if not stack or stack.pop() != ch:
                return False
    return not stack


def unwrap_literal(text: str, opening: str, closing: str) -> Optional[str]:
    """Return the interior of ``<opening>…<closing>`` or ``None``.

    ``None`` means *text* is not a literal of that kind: the outer delimiters
    are missing, or the brackets inside are unbalanced or mismatched.
    """
    match = _LITERAL_PATTERNS[(opening, closing)].fullmatch(text)
    if match is None:
        return None
    body = match.group("body")
    return body if _balanced(body) else None
