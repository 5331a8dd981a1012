"""
LIKE-pattern helpers.

Catalog filters use SQL LIKE wildcards: ``%`` matches any run of characters
and ``_`` matches exactly one. Matching is case-sensitive and anchored to
the whole value, as in the repository catalog.
"""

import re
from functools import lru_cache
from typing import Optional

MATCH_ALL = "%"


@lru_cache(maxsize=256)
def like_to_regex(pattern: str) -> re.Pattern:
    """Compile a LIKE pattern into an anchored regular expression.

    Args:
        pattern: LIKE pattern, e.g. ``"acme.%"``.

    Returns:
        Compiled regular expression matching the whole value.

    Example:
        >>> like_to_regex("CV_%").fullmatch("CV_ORDERS") is not None
        True
    """
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


def matches_like(value: Optional[str], pattern: Optional[str]) -> bool:
    """Check whether a value matches a LIKE pattern.

    A None pattern matches everything; a None value matches nothing.

    Example:
        >>> matches_like("SALES", "SAL%")
        True
        >>> matches_like("SALES", "sal%")
        False
    """
    if pattern is None or pattern == MATCH_ALL:
        return value is not None
    if value is None:
        return False
    return like_to_regex(pattern).fullmatch(value) is not None
