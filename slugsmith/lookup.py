"""Lookup of records by slug or primary key."""

from collections.abc import Callable
from typing import Any

type KeyLookup[T] = Callable[[Any], T | None]


def is_numeric_key(key: Any) -> bool:
    """
    Tell whether a key addresses a record by numeric primary key.

    A key is numeric only when its text survives a round trip through ``int``.

    Examples:
        >>> is_numeric_key(42), is_numeric_key("42")
        (True, True)
        >>> is_numeric_key("007"), is_numeric_key("my-post")
        (False, False)
    """
    text = str(key)
    try:
        return str(int(text)) == text
    except ValueError:
        return False


def slug_or_key_lookup[T](
    by_key: KeyLookup[T], by_slug: Callable[[str], T | None]
) -> KeyLookup[T]:
    """
    Compose a slug lookup in front of a primary key lookup.

    Non-numeric keys are tried as slugs first and fall back to the primary key
    when no record has that slug. Numeric keys go straight to ``by_key``.

    Args:
        by_key: Lookup by primary key
        by_slug: Lookup by slug value

    Returns:
        Combined lookup
    """

    def lookup(key: Any) -> T | None:
        if not is_numeric_key(key):
            found = by_slug(str(key))
            if found is not None:
                return found
        return by_key(key)

    return lookup
