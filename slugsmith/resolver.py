"""Slug resolution: staleness check, collision scan and suffix allocation.

A slug is generated from the normalized source, cut to the model's maximum
length. Collisions are resolved with a numeric suffix ``-N`` where ``N`` is one
more than the highest suffix already in use for the same base (bare base counts
as 1, so the first collision gets ``-2``). The base is always shortened before
the suffix is added, so a suffixed slug never exceeds the maximum length.

All existing variants are fetched with a single store query covering the bare
base and every prefix the base can be cut to for suffixes of up to
``suffix_digits`` digits.
"""

from collections.abc import Callable, Iterable
from typing import Any

from slugsmith.constants import FIRST_COLLISION_SUFFIX, MAX_SUFFIX_DIGITS, SLUG_SEPARATOR
from slugsmith.errors import EmptySlugSourceError, SlugAllocationError
from slugsmith.models.slug import SlugConfig, SlugQuery
from slugsmith.utils.logging import get_logger
from slugsmith.utils.slug import normalize, truncate

logger = get_logger(__name__)

SlugFinder = Callable[[SlugQuery], set[str]]


def candidate_prefixes(
    base: str, max_length: int, suffix_digits: int = MAX_SUFFIX_DIGITS
) -> tuple[str, ...]:
    """
    List the prefixes a suffixed variant of ``base`` can start with.

    Args:
        base: Normalized base token, already cut to ``max_length``
        max_length: Maximum slug length
        suffix_digits: Widest suffix to reserve room for

    Returns:
        Distinct non-empty prefixes, longest first

    Examples:
        >>> candidate_prefixes("aaaaa", 5)
        ('aaa', 'aa', 'a')
        >>> candidate_prefixes("fix", 50)
        ('fix',)
    """
    prefixes: list[str] = []
    for width in range(1, suffix_digits + 1):
        prefix = truncate(base, max_length - width - 1)
        if prefix and prefix not in prefixes:
            prefixes.append(prefix)
    return tuple(prefixes)


def suffix_of(slug: str, base: str, max_length: int) -> int | None:
    """
    Return the numeric suffix of ``slug`` if it is a numbered variant of ``base``.

    Only ``truncate(base, max_length - len(N) - 1) + "-" + N`` qualifies, so
    slugs of unrelated sources that merely share a prefix are ignored.

    Examples:
        >>> suffix_of("dm-tricks-10", "dm-tricks", 50)
        10
        >>> suffix_of("dm-tricks-and-more", "dm-tricks", 50) is None
        True
    """
    head, sep, tail = slug.rpartition(SLUG_SEPARATOR)
    if not sep or not (tail.isascii() and tail.isdigit()):
        return None
    if head != truncate(base, max_length - len(tail) - 1):
        return None
    return int(tail)


def allocate_slug(
    base: str,
    max_length: int,
    existing: Iterable[str],
    *,
    min_suffix: int | None = None,
) -> str:
    """
    Pick the slug for ``base`` given the slugs already taken.

    Args:
        base: Normalized base token
        max_length: Maximum slug length
        existing: Slugs returned by the collision scan
        min_suffix: Lowest suffix allowed (set when retrying after a conflict)

    Returns:
        ``base`` when it is free, otherwise ``base`` cut to fit plus ``-N``

    Raises:
        SlugAllocationError: Suffix does not fit in ``max_length``

    Examples:
        >>> allocate_slug("john", 80, {"john"})
        'john-2'
        >>> allocate_slug("aaaaa", 5, {"aaaaa"})
        'aaa-2'
    """
    base = truncate(base, max_length)
    taken = set(existing)
    bare_taken = base in taken
    suffixes = [
        n
        for slug in taken
        if slug != base and (n := suffix_of(slug, base, max_length)) is not None
    ]

    if not bare_taken and not suffixes and min_suffix is None:
        return base

    suffix = max(max(suffixes, default=1) + 1, min_suffix or FIRST_COLLISION_SUFFIX)
    digits = str(suffix)
    head = truncate(base, max_length - len(digits) - 1)
    if not head:
        logger.error(
            "Slug suffix does not fit", base=base, suffix=suffix, max_length=max_length
        )
        raise SlugAllocationError(
            f"Could not allocate unique slug for '{base}' within {max_length} characters",
            base=base,
            suffix=suffix,
            max_length=max_length,
        )
    return f"{head}{SLUG_SEPARATOR}{digits}"


class SlugResolver:
    """Computes the slug to persist for one model.

    Args:
        config: The model's slug configuration
        find_slugs: Store query returning the existing slugs matching a query
        suffix_digits: Widest suffix covered by the collision scan
    """

    def __init__(
        self,
        config: SlugConfig,
        find_slugs: SlugFinder,
        *,
        suffix_digits: int = MAX_SUFFIX_DIGITS,
    ) -> None:
        self.config = config
        self.find_slugs = find_slugs
        self.suffix_digits = suffix_digits

    def base_for(self, source: str | None) -> str:
        """Normalized source cut to the maximum length."""
        return truncate(normalize(source), self.config.max_length)

    def floor_after(self, conflicting_slug: str, source: str | None) -> int:
        """Lowest suffix worth trying after ``conflicting_slug`` was rejected."""
        base = self.base_for(source)
        if conflicting_slug == base:
            return FIRST_COLLISION_SUFFIX
        suffix = suffix_of(conflicting_slug, base, self.config.max_length)
        return (suffix or 1) + 1

    def resolve(
        self,
        source: str | None,
        current_slug: str | None,
        *,
        is_new: bool,
        scope_changed: bool = False,
        source_changed: bool = True,
        scope_values: dict[str, Any] | None = None,
        identity: Any | None = None,
        min_suffix: int | None = None,
    ) -> str:
        """
        Return the slug a record should be written with.

        An existing slug is kept, without querying the store, when the source
        normalizes to nothing, or when the scope is unchanged and the slug is
        permanent, the source is unchanged, or the edited source still
        normalizes to the slug's base.

        Args:
            source: Source text read from the record
            current_slug: Slug currently stored on the record
            is_new: Record has never been written
            scope_changed: A scope field differs from the stored record
            source_changed: Source differs from the stored record
            scope_values: Current values of the scope fields
            identity: Record primary key, excluded from the collision scan
            min_suffix: Lowest suffix allowed (set when retrying after a conflict)

        Returns:
            Slug to persist

        Raises:
            EmptySlugSourceError: Source is empty and there is no slug to keep
            SlugAllocationError: Suffix does not fit in the maximum length
        """
        config = self.config
        base = self.base_for(source)

        if not base:
            if current_slug:
                logger.debug("Empty slug source, keeping slug", model=config.model_name)
                return current_slug
            raise EmptySlugSourceError(
                f"Slug source of {config.model_name} is empty",
                model=config.model_name,
                source=config.source.name,
            )

        if current_slug and not scope_changed and min_suffix is None:
            if config.permanent or not source_changed:
                return current_slug
            # Source edited without changing its normalized form
            if not is_new and (
                current_slug == base
                or suffix_of(current_slug, base, config.max_length) is not None
            ):
                return current_slug

        query = SlugQuery(
            exact=base,
            prefixes=candidate_prefixes(base, config.max_length, self.suffix_digits),
            scope=dict(scope_values or {}),
            exclude=None if is_new else identity,
            slug_field=config.slug_field,
            identity_field=config.identity_field,
        )
        existing = self.find_slugs(query)
        slug = allocate_slug(base, config.max_length, existing, min_suffix=min_suffix)

        logger.debug(
            "Slug resolved",
            model=config.model_name,
            slug=slug,
            previous=current_slug,
            matches=len(existing),
        )
        return slug
