"""Matching of file names against patterns where ``*`` stands for any run of characters."""

from __future__ import annotations

import re
from functools import lru_cache


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    pieces = (re.escape(piece) for piece in pattern.split("*"))
    return re.compile(".*".join(pieces), re.DOTALL)


def wildcard_matches(pattern: str, text: str) -> bool:
    """Return True if ``text`` matches ``pattern`` as a whole.

    Only ``*`` is special; it matches any sequence of characters, including
    none. Every other character must match literally.
    """
    return _compile(pattern).fullmatch(text) is not None