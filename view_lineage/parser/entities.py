"""
XML entity decoding.

Replaces the five predefined XML entities and decimal/hexadecimal character
references in a text span:

    &amp;  -> &        &#65;  -> A
    &apos; -> '        &#x41; -> A
    &lt;   -> <
    &gt;   -> >
    &quot; -> "

A bare ``&`` that does not start a ``&...;`` reference is copied verbatim.
Any other named reference (``&nbsp;``, ``&foo;``) raises UnknownEntityError,
since external and DTD-declared entities are not resolved.
"""

import re

from view_lineage.exceptions import UnknownEntityError

PREDEFINED_ENTITIES = {
    "amp": "&",
    "apos": "'",
    "lt": "<",
    "gt": ">",
    "quot": '"',
}

ENTITY_PATTERN = re.compile(
    r"&(?:#x(?P<hex>[0-9A-Fa-f]+)|#(?P<dec>[0-9]+)|(?P<name>[:_A-Za-z][\w.\-:]*));"
)


def decode_entities(text: str) -> str:
    """Replace entity and character references with the characters they denote.

    Args:
        text: Text as it appears between markup, or an unquoted attribute
            value.

    Returns:
        The decoded text. Text without references is returned unchanged.

    Raises:
        UnknownEntityError: For a named reference other than the five
            predefined ones, or a character reference outside the Unicode
            range. ``position`` is the 1-based offset within ``text``.

    Example:
        >>> decode_entities("a &lt; b &amp;&amp; c")
        'a < b && c'
        >>> decode_entities("&#65;&#x42;")
        'AB'
        >>> decode_entities("fish & chips")
        'fish & chips'
    """
    if "&" not in text:
        return text

    parts = []
    index = 0
    for match in ENTITY_PATTERN.finditer(text):
        parts.append(text[index:match.start()])
        parts.append(_resolve(match))
        index = match.end()
    parts.append(text[index:])
    return "".join(parts)


def _resolve(match: re.Match) -> str:
    token = match.group(0)
    name = match.group("name")
    if name is not None:
        try:
            return PREDEFINED_ENTITIES[name]
        except KeyError:
            raise UnknownEntityError(token, position=match.start() + 1) from None

    if match.group("hex") is not None:
        code_point = int(match.group("hex"), 16)
    else:
        code_point = int(match.group("dec"))
    try:
        return chr(code_point)
    except (ValueError, OverflowError):
        raise UnknownEntityError(
            token,
            position=match.start() + 1,
            message=f"Invalid character reference {token}",
        ) from None
