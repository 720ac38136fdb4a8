"""Versioned entity catalog.

Each module in this package holds the schema table for one API version.
Classes are generated once, on first use, into the default registry and
are reachable as module attributes::

    from buildconf_sdk.catalog import v2018_2

    feature = v2018_2.FreeDiskSpace(required_space="10gb", fail_build=True)
"""

from __future__ import annotations

import importlib
from typing import Any

from buildconf_sdk.core.constants import ApiVersion
from buildconf_sdk.core.entity import Entity
from buildconf_sdk.core.exceptions import EntityNotFoundError
from buildconf_sdk.schema.registry import SchemaRegistry

_registry: SchemaRegistry | None = None


def default_registry() -> SchemaRegistry:
    """Return the registry populated with every catalog version."""
    global _registry
    if _registry is None:
        registry = SchemaRegistry()
        for version in ApiVersion:
            module = importlib.import_module(f"{__name__}.{version.value}")
            registry.register_all(module.SCHEMAS)
        _registry = registry
    return _registry


def entity_class(version: ApiVersion | str, name: str) -> type[Entity]:
    """Look up a catalog class; raises ``AttributeError`` when unknown.

    Used by the per-version modules' ``__getattr__``.
    """
    try:
        return default_registry().get(version, name)
    except EntityNotFoundError as exc:
        raise AttributeError(str(exc)) from None


def create(version: ApiVersion | str, name: str, init: Any = None, **fields: Any) -> Entity:
    return default_registry().create(version, name, init, **fields)
