"""Shared regex helpers for the story and component parsers."""

from __future__ import annotations

import re
from typing import Dict, List, Tuple

from ..models import ArgValue

# A JSDoc block whose body holds no "*/", so a match stays attached to the
# construct that follows it instead of reaching back to an earlier comment.
DOC_COMMENT = r"/\*\*\s*((?:(?!\*/)[\s\S])*?)\s*\*/"

_COMMENT_LEADER = re.compile(r"^\s*\*\s?", re.MULTILINE)
_TRAILING_COMMA = re.compile(r",\s*$")
_SURROUNDING_QUOTE = re.compile(r"^['\"]|['\"]$")
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER = re.compile(r"[+-]?\d+")
_HEX = re.compile(r"0[xX][0-9a-fA-F]+")


def strip_comment(body: str) -> str:
    """Remove leading ``*`` markers from each line of a block comment body."""
    return _COMMENT_LEADER.sub("", body).strip()


def split_args(body: str) -> List[Tuple[str, str]]:
    """Split an ``args: { ... }`` body into raw ``(key, value)`` pairs.

    The split happens on every comma, with no awareness of nested braces,
    brackets or strings, so values that themselves contain commas come back
    fragmented.
    """
    pairs: List[Tuple[str, str]] = []
    for fragment in body.split(","):
        colon = fragment.find(":")
        if colon <= 0:
            continue
        key = fragment[:colon].strip()
        value = _TRAILING_COMMA.sub("", fragment[colon + 1 :].strip())
        if key:
            pairs.append((key, value))
    return pairs


def raw_args(body: str) -> Dict[str, str]:
    """Return the ``split_args`` pairs as a dict, later keys winning."""
    return dict(split_args(body))


def coerce_literal(value: str) -> ArgValue:
    """Turn a raw literal into a JSON-typed value.

    One quote is stripped from each end, ``true``/``false`` become booleans and
    numeric literals become numbers; everything else stays a string.
    """
    cleaned = _SURROUNDING_QUOTE.sub("", value)
    if cleaned == "true":
        return True
    if cleaned == "false":
        return False
    number = _parse_number(cleaned)
    if number is not None:
        return number
    return cleaned


def _parse_number(text: str) -> int | float | None:
    if not text:
        return None
    if _HEX.fullmatch(text):
        return int(text, 16)
    if _INTEGER.fullmatch(text):
        return int(text)
    if _DECIMAL.fullmatch(text):
        return float(text)
    return None


def to_pascal_case(slug: str) -> str:
    """Convert ``with-icon`` style slugs into ``WithIcon`` identifiers."""
    return "".join(part[:1].upper() + part[1:].lower() for part in slug.split("-"))


__all__ = [
    "DOC_COMMENT",
    "coerce_literal",
    "raw_args",
    "split_args",
    "strip_comment",
    "to_pascal_case",
]
