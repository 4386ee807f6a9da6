"""Text normalization for slugs.

Turns free text into the canonical URL-safe token that every slug is built
from. Transliteration is delegated to python-slugify (text-unidecode).
"""

from slugify import slugify

from slugsmith.constants import SLUG_SEPARATOR

# Applied before transliteration so these act as plain word separators
# instead of being squeezed out ("don't" -> "don-t", "1,000" -> "1-000").
_SEPARATOR_REPLACEMENTS = [("'", " "), ("’", " "), (",", " ")]


def normalize(text: str | None) -> str:
    """
    Normalize free text into a slug token.

    Args:
        text: Source text, may be None

    Returns:
        Lowercase token made of ``[a-z0-9]`` runs joined by single hyphens,
        or an empty string when nothing usable remains

    Examples:
        >>> normalize("My first shinny blog post")
        'my-first-shinny-blog-post'
        >>> normalize("A fancy café")
        'a-fancy-cafe'
        >>> normalize("!!!")
        ''
    """
    if not text:
        return ""

    return slugify(
        text,
        entities=False,
        decimal=False,
        hexadecimal=False,
        separator=SLUG_SEPARATOR,
        lowercase=True,
        replacements=_SEPARATOR_REPLACEMENTS,
    )


def truncate(slug: str, length: int) -> str:
    """
    Cut a slug token to at most ``length`` characters.

    A hyphen left dangling by the cut is dropped, so the result is still a
    valid token.

    Examples:
        >>> truncate("another-productive-day", 8)
        'another'
        >>> truncate("aaaaa", 3)
        'aaa'
    """
    if length <= 0:
        return ""
    return slug[:length].rstrip(SLUG_SEPARATOR)
