"""Per-model slug configuration and store query models."""

from types import UnionType
from typing import Annotated, Any, Literal, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field
from pydantic.fields import FieldInfo

from slugsmith.constants import IDENTITY_FIELD, SLUG_FIELD, SLUG_SEPARATOR
from slugsmith.errors import ConfigurationError, InvalidSlugSourceError
from slugsmith.models.config import SlugOptions, SlugSettings
from slugsmith.utils.logging import get_logger

logger = get_logger(__name__)


class FieldSelector(BaseModel):
    """Reads the source text from a declared field or property."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["field"] = "field"
    name: str

    def read(self, record: Any) -> str | None:
        try:
            value = getattr(record, self.name)
        except AttributeError as e:
            raise InvalidSlugSourceError(
                f"Slug source '{self.name}' is not readable", source=self.name
            ) from e
        return _check_source_value(self.name, value)


class MethodSelector(BaseModel):
    """Reads the source text by calling a method on the record."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["method"] = "method"
    name: str

    def read(self, record: Any) -> str | None:
        try:
            method = getattr(record, self.name)
        except AttributeError as e:
            raise InvalidSlugSourceError(
                f"Slug source '{self.name}' is not readable", source=self.name
            ) from e
        if not callable(method):
            raise InvalidSlugSourceError(
                f"Slug source '{self.name}' is not callable", source=self.name
            )
        return _check_source_value(self.name, method())


SourceSelector = Annotated[FieldSelector | MethodSelector, Field(discriminator="kind")]


def _check_source_value(name: str, value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise InvalidSlugSourceError(
        f"Slug source '{name}' returned {type(value).__name__}, expected str",
        source=name,
    )


class SlugConfig(BaseModel):
    """Immutable slug configuration of one model type.

    Built once by :func:`build_slug_config` and passed explicitly to every
    resolution. Safe to share between threads.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_name: str
    source: SourceSelector
    max_length: int = Field(ge=1)
    permanent: bool = True
    scope: tuple[str, ...] = ()
    key: bool = False
    slug_field: str = SLUG_FIELD
    identity_field: str = IDENTITY_FIELD

    def read_source(self, record: Any) -> str | None:
        return self.source.read(record)

    def scope_values(self, record: Any) -> dict[str, Any]:
        return {name: getattr(record, name) for name in self.scope}

    def unique_constraint(self) -> "UniqueConstraint":
        return UniqueConstraint(field=self.slug_field, scope=self.scope)


class UniqueConstraint(BaseModel):
    """Slug uniqueness rule a store enforces on write."""

    model_config = ConfigDict(frozen=True)

    field: str = SLUG_FIELD
    scope: tuple[str, ...] = ()


class SlugQuery(BaseModel):
    """Existing-slug scan issued once per slug generation.

    Matches slugs equal to ``exact`` or starting with ``<prefix>-`` for any of
    ``prefixes``, among rows whose ``scope`` fields are equal and whose
    identity is not ``exclude``.
    """

    model_config = ConfigDict(frozen=True)

    exact: str
    prefixes: tuple[str, ...] = ()
    scope: dict[str, Any] = Field(default_factory=dict)
    exclude: Any | None = None
    slug_field: str = SLUG_FIELD
    identity_field: str = IDENTITY_FIELD

    def matches(self, slug: str | None) -> bool:
        if not slug:
            return False
        if slug == self.exact:
            return True
        return any(slug.startswith(prefix + SLUG_SEPARATOR) for prefix in self.prefixes)


def build_slug_config(
    model_cls: type[BaseModel],
    options: SlugOptions | None,
    settings: SlugSettings | None = None,
) -> SlugConfig:
    """
    Validate slug options against a model and freeze them.

    Args:
        model_cls: Pydantic model class owning the slug
        options: User slug options
        settings: Library settings supplying the default length

    Returns:
        Immutable slug configuration

    Raises:
        ConfigurationError: No source given, or a scope field is unknown
        InvalidSlugSourceError: Source is neither a field nor a method
    """
    settings = settings or SlugSettings()
    model_name = model_cls.__name__

    if options is None or not options.source:
        logger.error("Slug source missing", model=model_name)
        raise InvalidSlugSourceError(
            f"You must specify a source to generate slug for {model_name}", model=model_name
        )

    fields = model_cls.model_fields
    source = _select_source(model_cls, options.source)

    unknown_scope = [name for name in options.scope if name not in fields]
    if unknown_scope:
        raise ConfigurationError(
            f"Slug scope fields {unknown_scope} are not declared on {model_name}",
            model=model_name,
            scope=unknown_scope,
        )

    max_length = options.length
    if max_length is None and SLUG_FIELD in fields:
        max_length = _declared_max_length(fields[SLUG_FIELD])
    if max_length is None and isinstance(source, FieldSelector) and source.name in fields:
        source_field = fields[source.name]
        if _is_text(source_field.annotation):
            max_length = _declared_max_length(source_field)
    if max_length is None:
        max_length = settings.resolver.default_length

    config = SlugConfig(
        model_name=model_name,
        source=source,
        max_length=max_length,
        permanent=options.permanent,
        scope=tuple(options.scope),
        key=options.key,
        identity_field=SLUG_FIELD if options.key else IDENTITY_FIELD,
    )
    logger.debug(
        "Slug configured",
        model=model_name,
        source=source.name,
        source_kind=source.kind,
        max_length=max_length,
        permanent=config.permanent,
        scope=config.scope,
    )
    return config


def _select_source(model_cls: type[BaseModel], name: str) -> FieldSelector | MethodSelector:
    if name in model_cls.model_fields:
        return FieldSelector(name=name)

    attr = getattr(model_cls, name, None)
    if isinstance(attr, property):
        return FieldSelector(name=name)
    if callable(attr):
        return MethodSelector(name=name)

    raise InvalidSlugSourceError(
        f"Slug source '{name}' is not a field or method of {model_cls.__name__}",
        model=model_cls.__name__,
        source=name,
    )


def _declared_max_length(field: FieldInfo) -> int | None:
    for constraint in field.metadata:
        value = getattr(constraint, "max_length", None)
        if isinstance(value, int):
            return value
    return None


def _is_text(annotation: Any) -> bool:
    if annotation is str:
        return True
    if get_origin(annotation) in (Union, UnionType):
        return str in get_args(annotation)
    return False
