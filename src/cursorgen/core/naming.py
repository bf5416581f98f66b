"""
Naming helpers for generated cursors.

Covers cursor key composition, accessor identifiers derived from keys and
collision-free import aliases.
"""

import re
from collections.abc import Iterable

from .ir import ImportSpec

# Declared by every cursors file next to the field accessors.
ROOT_ACCESSOR = "root"

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_$]+")


def compose_cursor_key(*parts: str | None) -> str:
    """Join the non-empty key parts with dots (``None`` parts are skipped)."""
    return ".".join(p for p in parts if p)


def _words(segment: str) -> list[str]:
    return [w for w in _NON_IDENTIFIER.split(segment) if w]


def accessor_name(key_prefix: str | None, field_name: str) -> str:
    """
    Build an accessor identifier from a key prefix and a field name.

    Key segments are joined in lower camel case, and characters that cannot
    appear in an identifier (quoted property names) split words:
        >>> accessor_name("todos.detail", "title")
        'todosDetailTitle'
        >>> accessor_name(None, "foo-bar")
        'fooBar'
    """
    words = [w for s in (key_prefix or "").split(".") for w in _words(s)]
    words += _words(field_name)
    if not words:
        return "field"
    head, *tail = words
    name = head + "".join(w[:1].upper() + w[1:] for w in tail)
    if name[0].isdigit():
        name = f"_{name}"
    return name


def create_unused_alias(base: str, imports: Iterable[ImportSpec]) -> str:
    """Return ``base`` or ``base1``, ``base2``, ... whichever no import already uses."""
    used = {imp.prefix for imp in imports}
    alias = base
    counter = 0
    while alias in used:
        counter += 1
        alias = f"{base}{counter}"
    return alias


class NameRegistry:
    """
    Tracks accessor identifiers emitted into one cursors file.

    The first claim of a name keeps it; later claims get a numeric suffix
    (``todosTitle``, ``todosTitle2``, ...). Reserved names count as already
    claimed.
    """

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self._counts: dict[str, int] = dict.fromkeys(reserved, 1)

    def claim(self, name: str) -> str:
        count = self._counts.get(name, 0) + 1
        self._counts[name] = count
        if count == 1:
            return name
        unique = f"{name}{count}"
        # A suffixed name may itself be a later field's natural name.
        while unique in self._counts:
            count += 1
            unique = f"{name}{count}"
        self._counts[name] = count
        self._counts[unique] = 1
        return unique
