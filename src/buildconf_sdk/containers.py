"""Ordered collections of entities attached to a build configuration or project."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, ClassVar, Generic, TypeVar

import structlog

from buildconf_sdk.core.config import SdkConfig
from buildconf_sdk.core.constants import ApiVersion, EntityKind
from buildconf_sdk.core.entity import Entity
from buildconf_sdk.core.exceptions import ConfigurationError
from buildconf_sdk.core.validation import ValidationError, validate
from buildconf_sdk.schema.registry import SchemaRegistry

logger = structlog.get_logger(__name__)

E = TypeVar("E", bound=Entity)


class EntityList(Generic[E]):
    """Base collection.  Subclasses fix the accepted :class:`EntityKind`.

    Args:
        version: API version used by :meth:`create`.  Defaults to
            ``SdkConfig.default_version``.
        registry: Registry to create entities from.  Defaults to the
            built-in catalog.
    """

    kind: ClassVar[EntityKind]

    def __init__(
        self,
        version: ApiVersion | str | None = None,
        *,
        registry: SchemaRegistry | None = None,
        config: SdkConfig | None = None,
    ) -> None:
        if version is None:
            version = (config or SdkConfig()).default_version
        self.version = ApiVersion(version)
        self._registry = registry
        self._items: list[E] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(version={self.version.value!r}, items={len(self._items)})"

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> E:
        return self._items[index]

    @property
    def registry(self) -> SchemaRegistry:
        if self._registry is None:
            from buildconf_sdk.catalog import default_registry

            self._registry = default_registry()
        return self._registry

    def add(self, entity: E) -> E:
        """Append *entity* and return it.

        Raises:
            ConfigurationError: If the entity is of a different kind.
        """
        if not isinstance(entity, Entity) or entity.kind != self.kind:
            raise ConfigurationError(
                f"{type(self).__name__} only accepts {self.kind.value} entities, "
                f"got {type(entity).__name__}",
                details={"expected": self.kind.value},
            )
        self._items.append(entity)
        logger.debug("entity_added", container=type(self).__name__, entity=type(entity).__name__)
        return entity

    def extend(self, entities: Iterable[E]) -> None:
        for entity in entities:
            self.add(entity)

    def create(self, name: str, init: Callable[[Any], Any] | None = None, **fields: Any) -> E:
        """Instantiate catalog entity *name* for this container's version and add it."""
        entity = self.registry.create(self.version, name, init, **fields)
        return self.add(entity)  # type: ignore[arg-type]

    def validate(self) -> list[ValidationError]:
        """Validate every entity; paths are prefixed with ``Name[index]``."""
        errors: list[ValidationError] = []
        for index, entity in enumerate(self._items):
            label = f"{type(entity).__name__}[{index}]"
            for error in validate(entity):
                errors.append(
                    ValidationError(
                        property_path=(label, *error.property_path),
                        message=error.message,
                    )
                )
        return errors

    def to_list(self) -> list[dict[str, Any]]:
        return [entity.to_dict() for entity in self._items]

    def load(self, items: Iterable[Mapping[str, Any]]) -> None:
        """Append entities rebuilt from :meth:`to_list` output."""
        for data in items:
            self.add(self.registry.load(self.version, data))  # type: ignore[arg-type]


class BuildFeatures(EntityList[Entity]):
    kind = EntityKind.BUILD_FEATURE

    def feature(self, entity: Entity) -> Entity:
        return self.add(entity)


class ProjectFeatures(EntityList[Entity]):
    kind = EntityKind.PROJECT_FEATURE

    def feature(self, entity: Entity) -> Entity:
        return self.add(entity)


class Triggers(EntityList[Entity]):
    kind = EntityKind.TRIGGER

    def trigger(self, entity: Entity) -> Entity:
        return self.add(entity)
