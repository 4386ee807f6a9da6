"""Repository: explicit slug resolution before every write.

Callers save records through a :class:`Repository` instead of relying on
lifecycle hooks. The slug is resolved from a snapshot of the record, written
together with the rest of the row, and only assigned back to the record once
the store accepted the write.

Two writers racing for the same slug are detected by the store's uniqueness
check; the loser recomputes with a higher suffix floor and retries.
"""

from typing import Any

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from slugsmith.constants import IDENTITY_FIELD
from slugsmith.errors import ConfigurationError, SlugAllocationError, SlugConflictError
from slugsmith.lookup import is_numeric_key, slug_or_key_lookup
from slugsmith.models.config import SlugOptions, SlugSettings
from slugsmith.models.records import PersistedState, SluggedRecord
from slugsmith.models.slug import SlugConfig, SlugQuery, build_slug_config
from slugsmith.resolver import SlugResolver
from slugsmith.stores.base import Row, SlugStore, row_matches
from slugsmith.utils.logging import get_logger

logger = get_logger(__name__)


class Repository[T: SluggedRecord]:
    """Reads and writes one record type, keeping its slugs unique.

    Args:
        model_cls: Record class
        store: Backing store
        options: Slug options; when omitted they are taken from
            ``settings.models[model_cls.__name__]``, and a model with no
            options at all is stored without a slug
        settings: Library settings

    Raises:
        ConfigurationError: Slug options do not fit the model
    """

    def __init__(
        self,
        model_cls: type[T],
        store: SlugStore,
        options: SlugOptions | None = None,
        *,
        settings: SlugSettings | None = None,
    ) -> None:
        self.model_cls = model_cls
        self.store = store
        self.settings = settings or SlugSettings()
        self.model_name = model_cls.__name__

        if options is None:
            options = self.settings.models.get(self.model_name)

        self.config: SlugConfig | None = None
        self.resolver: SlugResolver | None = None
        if options is not None:
            self.config = build_slug_config(model_cls, options, self.settings)
            _check_slug_field(model_cls, self.config)
            self.resolver = SlugResolver(
                self.config,
                self._find_slugs,
                suffix_digits=self.settings.resolver.suffix_digits,
            )

    @property
    def identity_field(self) -> str:
        return self.config.identity_field if self.config else IDENTITY_FIELD

    # Writes

    def create(self, **fields: Any) -> T:
        """Build a record from ``fields`` and save it."""
        return self.save(self.model_cls(**fields))

    def save(self, record: T) -> T:
        """
        Insert or update a record, resolving its slug first.

        Args:
            record: Record to write

        Returns:
            The same record, with ``slug`` and ``id`` set

        Raises:
            InvalidSlugSourceError: Source cannot be read from the record
            EmptySlugSourceError: Record has neither a source nor a slug
            SlugAllocationError: No unique slug after the configured retries
            StoreUnavailableError: Store failure, propagated unchanged
        """
        if self.config is None:
            self._write(record, record.model_dump(mode="json"), unique=None)
            return record

        resolver_settings = self.settings.resolver
        retrying = Retrying(
            stop=stop_after_attempt(resolver_settings.max_retries),
            wait=wait_exponential(
                multiplier=resolver_settings.retry_wait_seconds,
                max=resolver_settings.retry_max_wait_seconds,
            ),
            retry=retry_if_exception_type(SlugConflictError),
            reraise=True,
        )

        floor: int | None = None
        try:
            for attempt in retrying:
                with attempt:
                    try:
                        self._save_with_slug(record, floor)
                    except SlugConflictError as e:
                        floor = self.resolver.floor_after(e.slug, self.config.read_source(record))
                        logger.warning(
                            "Slug taken by concurrent write, retrying",
                            model=self.model_name,
                            slug=e.slug,
                            next_suffix=floor,
                            attempt=attempt.retry_state.attempt_number,
                        )
                        raise
        except SlugConflictError as e:
            logger.error(
                "Could not allocate unique slug",
                model=self.model_name,
                slug=e.slug,
                attempts=resolver_settings.max_retries,
            )
            raise SlugAllocationError(
                f"Could not allocate unique slug for {self.model_name} "
                f"after {resolver_settings.max_retries} attempts",
                model=self.model_name,
                slug=e.slug,
            ) from e

        return record

    def delete(self, record: T) -> bool:
        """Remove a stored record. Returns False when it was never stored."""
        if record.is_new:
            return False
        deleted = self.store.delete(self.model_name, record._persisted.identity, self.identity_field)
        record._persisted = None
        return deleted

    # Reads

    def get(self, key: Any, **filters: Any) -> T | None:
        """
        Find a record by slug or primary key.

        Non-numeric keys are looked up as slugs first on slugged models.
        ``filters`` restrict the lookup like a collection would, e.g.
        ``posts.get("my-post", user_id=1)``.
        """

        def by_key(value: Any) -> T | None:
            return self._get_by_key(value, filters)

        if self.config is None:
            return by_key(key)

        def by_slug(slug: str) -> T | None:
            return self.first(**{self.config.slug_field: slug, **filters})

        return slug_or_key_lookup(by_key, by_slug)(key)

    def first(self, **filters: Any) -> T | None:
        row = self.store.first(self.model_name, filters)
        return self._load(row) if row is not None else None

    def all(self, **filters: Any) -> list[T]:
        return [self._load(row) for row in self.store.all(self.model_name, filters)]

    # Internals

    def _find_slugs(self, query: SlugQuery) -> set[str]:
        return self.store.find_slugs(self.model_name, query)

    def _get_by_key(self, key: Any, filters: dict[str, Any]) -> T | None:
        identity_field = self.identity_field
        if identity_field == IDENTITY_FIELD and is_numeric_key(key):
            key = int(key)
        elif identity_field != IDENTITY_FIELD:
            key = str(key)

        row = self.store.get(self.model_name, key, identity_field)
        if row is None or not row_matches(row, filters):
            return None
        return self._load(row)

    def _save_with_slug(self, record: T, floor: int | None) -> None:
        config = self.config
        row = record.model_dump(mode="json")
        source = config.read_source(record)
        scope_values = {name: row.get(name) for name in config.scope}

        persisted = record._persisted
        is_new = persisted is None
        slug = self.resolver.resolve(
            source,
            record.slug,
            is_new=is_new,
            scope_changed=not is_new and persisted.scope != scope_values,
            source_changed=is_new or persisted.source != source,
            scope_values=scope_values,
            identity=None if is_new else persisted.identity,
            min_suffix=floor,
        )

        row[config.slug_field] = slug
        self._write(record, row, unique=config.unique_constraint())

    def _write(self, record: T, row: Row, unique: Any) -> None:
        identity_field = self.identity_field
        if record.is_new:
            saved = self.store.insert(
                self.model_name, row, identity_field=identity_field, unique=unique
            )
        else:
            saved = self.store.update(
                self.model_name,
                record._persisted.identity,
                row,
                identity_field=identity_field,
                unique=unique,
            )

        if self.config is not None:
            record.slug = saved[self.config.slug_field]
        if identity_field == IDENTITY_FIELD:
            record.id = saved[IDENTITY_FIELD]
        self._remember(record, saved)

        logger.info(
            "Record saved",
            model=self.model_name,
            identity=saved.get(identity_field),
            slug=record.slug,
        )

    def _load(self, row: Row) -> T:
        record = self.model_cls.model_validate(row)
        self._remember(record, row)
        return record

    def _remember(self, record: T, row: Row) -> None:
        if self.config is None:
            record._persisted = PersistedState(identity=row.get(self.identity_field))
            return
        record._persisted = PersistedState(
            identity=row.get(self.config.identity_field),
            source=self.config.read_source(record),
            scope={name: row.get(name) for name in self.config.scope},
        )


def _check_slug_field(model_cls: type[SluggedRecord], config: SlugConfig) -> None:
    if config.key and config.scope:
        raise ConfigurationError(
            f"{model_cls.__name__}: a slug used as key cannot be scoped",
            model=model_cls.__name__,
        )

    field = model_cls.model_fields.get(config.slug_field)
    if field is None:
        raise ConfigurationError(
            f"{model_cls.__name__} has no '{config.slug_field}' field",
            model=model_cls.__name__,
        )
    for constraint in field.metadata:
        bound = getattr(constraint, "max_length", None)
        if isinstance(bound, int) and bound < config.max_length:
            raise ConfigurationError(
                f"{model_cls.__name__}: slug length {config.max_length} exceeds "
                f"the '{config.slug_field}' field bound {bound}",
                model=model_cls.__name__,
            )
