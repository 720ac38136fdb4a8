"""SchemaRegistry: entity kinds per API version."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

import structlog

from buildconf_sdk.core.constants import ApiVersion, EntityKind
from buildconf_sdk.core.entity import Entity
from buildconf_sdk.core.exceptions import EntityNotFoundError, SchemaError
from buildconf_sdk.schema.builder import build_entity_class
from buildconf_sdk.schema.models import EntitySchema

logger = structlog.get_logger(__name__)


class SchemaRegistry:
    """Holds entity schemas and their generated classes, keyed by version and name.

    Usage::

        registry = SchemaRegistry()
        registry.register({
            "name": "SshAgent",
            "kind": "buildFeature",
            "version": "v2018_1",
            "type": "ssh-agent-build-feature",
            "fields": [{"name": "teamcity_ssh_key", "mandatory": True}],
        })
        agent = registry.create("v2018_1", "SshAgent", teamcity_ssh_key="deploy")
    """

    def __init__(self) -> None:
        self._schemas: dict[ApiVersion, dict[str, EntitySchema]] = {}
        self._classes: dict[ApiVersion, dict[str, type[Entity]]] = {}

    def __repr__(self) -> str:
        total = sum(len(names) for names in self._classes.values())
        return f"SchemaRegistry(versions={len(self._classes)}, entities={total})"

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        version, name = item
        try:
            return name in self._classes.get(ApiVersion(version), {})
        except ValueError:
            return False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, schema: EntitySchema | Mapping[str, Any]) -> type[Entity]:
        """Validate *schema*, build its class and store both.

        Raises:
            SchemaError: If the schema is malformed or already registered.
        """
        if not isinstance(schema, EntitySchema):
            try:
                schema = EntitySchema.model_validate(schema)
            except ValueError as exc:
                raise SchemaError(f"Invalid entity schema: {exc}") from exc
        by_name = self._schemas.setdefault(schema.version, {})
        if schema.name in by_name:
            raise SchemaError(
                f"{schema.name} is already registered for {schema.version.value}",
                details={"version": schema.version.value, "name": schema.name},
            )
        cls = build_entity_class(schema)
        by_name[schema.name] = schema
        self._classes.setdefault(schema.version, {})[schema.name] = cls
        logger.debug("schema_registered", version=schema.version.value, name=schema.name)
        return cls

    def register_all(
        self, schemas: Iterable[EntitySchema | Mapping[str, Any]]
    ) -> dict[str, type[Entity]]:
        return {cls.__name__: cls for cls in (self.register(s) for s in schemas)}

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def versions(self) -> list[ApiVersion]:
        return [v for v in ApiVersion if v in self._classes]

    def names(self, version: ApiVersion | str, kind: EntityKind | str | None = None) -> list[str]:
        """Sorted entity names for *version*, optionally filtered by *kind*."""
        classes = self._classes.get(ApiVersion(version), {})
        if kind is None:
            return sorted(classes)
        wanted = EntityKind(kind)
        return sorted(name for name, cls in classes.items() if cls.kind == wanted)

    def get(self, version: ApiVersion | str, name: str) -> type[Entity]:
        """Return the generated class for *name* in *version*.

        Raises:
            EntityNotFoundError: If nothing is registered under that pair.
        """
        try:
            return self._classes[ApiVersion(version)][name]
        except (KeyError, ValueError):
            available = ", ".join(self.names(version)) if self._known(version) else "none"
            raise EntityNotFoundError(
                f"Unknown entity '{name}' for version '{version}'. Available: {available}",
                details={"version": str(version), "name": name},
            ) from None

    def schema(self, version: ApiVersion | str, name: str) -> EntitySchema:
        cls = self.get(version, name)
        return self._schemas[ApiVersion(version)][cls.__name__]

    def create(
        self,
        version: ApiVersion | str,
        name: str,
        init: Callable[[Any], Any] | None = None,
        **fields: Any,
    ) -> Entity:
        """Instantiate *name* from *version* with the given fields."""
        return self.get(version, name)(init, **fields)

    def load(self, version: ApiVersion | str, data: Mapping[str, Any]) -> Entity:
        """Rebuild an entity from the output of :meth:`Entity.to_dict`.

        The class is chosen by ``type`` plus the fixed parameters present in
        ``params``; when several kinds share a type (e.g. OAuth connections)
        the one with the most matching fixed parameters wins.

        Raises:
            EntityNotFoundError: If no registered kind matches.
        """
        entity_type = data.get("type")
        params: Mapping[str, str] = data.get("params") or {}
        candidates = [
            cls
            for cls in self._classes.get(ApiVersion(version), {}).values()
            if cls.entity_type == entity_type
            and all(params.get(k) == v for k, v in cls.fixed_params.items())
        ]
        if not candidates:
            raise EntityNotFoundError(
                f"No entity of type {entity_type!r} matches in version '{version}'",
                details={"version": str(version), "type": entity_type},
            )
        cls = max(candidates, key=lambda c: len(c.fixed_params))
        entity = cls(id=data.get("id"))
        for key, value in params.items():
            entity.param(key, value)
        return entity

    def _known(self, version: ApiVersion | str) -> bool:
        try:
            return ApiVersion(version) in self._classes
        except ValueError:
            return False
