"""Base model for records that carry a slug."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class PersistedState(BaseModel):
    """What the store held for a record after its last write or load."""

    identity: Any = None
    source: str | None = None
    scope: dict[str, Any] = Field(default_factory=dict)


class SluggedRecord(BaseModel):
    """Pydantic base for records managed by a :class:`~slugsmith.repository.Repository`.

    Subclasses add their own fields and may redeclare ``slug`` to bound its
    length, e.g. ``slug: str | None = Field(default=None, max_length=30)``.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int | None = None
    slug: str | None = None

    _persisted: PersistedState | None = PrivateAttr(default=None)

    @property
    def is_new(self) -> bool:
        return self._persisted is None

    def to_param(self) -> list[str]:
        """URL parameter form of the record."""
        return [self.slug] if self.slug else []
