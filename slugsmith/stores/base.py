"""Store contract used by repositories and the slug resolver."""

import threading
from abc import ABC, abstractmethod
from typing import Any, Protocol

from slugsmith.constants import IDENTITY_FIELD
from slugsmith.errors import SlugConflictError
from slugsmith.models.slug import SlugQuery, UniqueConstraint
from slugsmith.utils.logging import get_logger

logger = get_logger(__name__)

Row = dict[str, Any]


class SlugStore(Protocol):
    """Persistence primitives a repository needs.

    Rows are plain dicts of JSON-compatible values. Writes that would give two
    rows the same slug inside one scope tuple raise :class:`SlugConflictError`.
    """

    def find_slugs(self, model: str, query: SlugQuery) -> set[str]: ...

    def get(self, model: str, identity: Any, identity_field: str = IDENTITY_FIELD) -> Row | None: ...

    def first(self, model: str, filters: dict[str, Any]) -> Row | None: ...

    def all(self, model: str, filters: dict[str, Any]) -> list[Row]: ...

    def insert(
        self,
        model: str,
        row: Row,
        *,
        identity_field: str = IDENTITY_FIELD,
        unique: UniqueConstraint | None = None,
    ) -> Row: ...

    def update(
        self,
        model: str,
        identity: Any,
        row: Row,
        *,
        identity_field: str = IDENTITY_FIELD,
        unique: UniqueConstraint | None = None,
    ) -> Row: ...

    def delete(self, model: str, identity: Any, identity_field: str = IDENTITY_FIELD) -> bool: ...


def row_matches(row: Row, filters: dict[str, Any]) -> bool:
    return all(row.get(name) == value for name, value in filters.items())


class RowStore(ABC):
    """Store over whole tables of rows, serialized by one lock.

    Subclasses only load and save a model's table; querying, id assignment and
    the slug uniqueness check happen here while the lock is held, so a write
    never interleaves with another write's check.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @abstractmethod
    def _read_rows(self, model: str) -> list[Row]:
        """Load every row of ``model``."""

    @abstractmethod
    def _write_rows(self, model: str, rows: list[Row]) -> None:
        """Replace every row of ``model``."""

    def find_slugs(self, model: str, query: SlugQuery) -> set[str]:
        with self._lock:
            rows = self._read_rows(model)

        found = set()
        for row in rows:
            if query.exclude is not None and row.get(query.identity_field) == query.exclude:
                continue
            if not row_matches(row, query.scope):
                continue
            slug = row.get(query.slug_field)
            if query.matches(slug):
                found.add(slug)

        logger.debug("Slug scan", model=model, exact=query.exact, found=len(found))
        return found

    def get(self, model: str, identity: Any, identity_field: str = IDENTITY_FIELD) -> Row | None:
        return self.first(model, {identity_field: identity})

    def first(self, model: str, filters: dict[str, Any]) -> Row | None:
        with self._lock:
            rows = self._read_rows(model)
        for row in rows:
            if row_matches(row, filters):
                return dict(row)
        return None

    def all(self, model: str, filters: dict[str, Any]) -> list[Row]:
        with self._lock:
            rows = self._read_rows(model)
        return [dict(row) for row in rows if row_matches(row, filters)]

    def insert(
        self,
        model: str,
        row: Row,
        *,
        identity_field: str = IDENTITY_FIELD,
        unique: UniqueConstraint | None = None,
    ) -> Row:
        row = dict(row)
        with self._lock:
            rows = self._read_rows(model)

            if row.get(identity_field) is None and identity_field == IDENTITY_FIELD:
                row[identity_field] = max((r.get(identity_field) or 0 for r in rows), default=0) + 1
            elif any(r.get(identity_field) == row[identity_field] for r in rows):
                if unique is not None and unique.field == identity_field:
                    raise SlugConflictError(row[identity_field], model=model)
                raise ValueError(f"Duplicate {identity_field} for {model}: {row[identity_field]}")

            _check_unique(model, rows, row, unique, skip=None)
            rows.append(row)
            self._write_rows(model, rows)

        logger.info("Row inserted", model=model, identity=row[identity_field])
        return dict(row)

    def update(
        self,
        model: str,
        identity: Any,
        row: Row,
        *,
        identity_field: str = IDENTITY_FIELD,
        unique: UniqueConstraint | None = None,
    ) -> Row:
        row = dict(row)
        with self._lock:
            rows = self._read_rows(model)
            index = next(
                (i for i, r in enumerate(rows) if r.get(identity_field) == identity), None
            )
            if index is None:
                raise KeyError(f"{model} {identity_field}={identity!r} not found")

            _check_unique(model, rows, row, unique, skip=index)
            rows[index] = row
            self._write_rows(model, rows)

        logger.info("Row updated", model=model, identity=identity)
        return dict(row)

    def delete(self, model: str, identity: Any, identity_field: str = IDENTITY_FIELD) -> bool:
        with self._lock:
            rows = self._read_rows(model)
            kept = [r for r in rows if r.get(identity_field) != identity]
            if len(kept) == len(rows):
                return False
            self._write_rows(model, kept)

        logger.info("Row deleted", model=model, identity=identity)
        return True


def _check_unique(
    model: str,
    rows: list[Row],
    row: Row,
    unique: UniqueConstraint | None,
    skip: int | None,
) -> None:
    if unique is None:
        return
    slug = row.get(unique.field)
    if not slug:
        return
    for i, other in enumerate(rows):
        if i == skip:
            continue
        if other.get(unique.field) == slug and all(
            other.get(name) == row.get(name) for name in unique.scope
        ):
            logger.warning("Slug conflict on write", model=model, slug=slug)
            raise SlugConflictError(slug, model=model)
