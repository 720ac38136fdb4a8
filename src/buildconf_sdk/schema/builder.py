"""Generate entity and variant classes from schema data."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

import structlog

from buildconf_sdk.core.compound import CompoundParam, CompoundParameter
from buildconf_sdk.core.constants import EntityKind
from buildconf_sdk.core.entity import BuildFeature, Entity, ProjectFeature, Trigger
from buildconf_sdk.core.exceptions import SchemaError
from buildconf_sdk.core.params import (
    BooleanParameter,
    EnumParameter,
    IntParameter,
    Parameter,
    StringParameter,
    camel_case,
)
from buildconf_sdk.schema.models import EntitySchema, FieldSpec, VariantSpec

logger = structlog.get_logger(__name__)

# instance attributes not visible on the class
_RESERVED = frozenset({"id", "params", "_type"})

_BASES: dict[EntityKind, type[Entity]] = {
    EntityKind.BUILD_FEATURE: BuildFeature,
    EntityKind.PROJECT_FEATURE: ProjectFeature,
    EntityKind.TRIGGER: Trigger,
}


def build_entity_class(schema: EntitySchema) -> type[Entity]:
    """Create the :class:`Entity` subclass described by *schema*.

    Generated enums and variant classes are attached to the new class by
    name, e.g. ``AutoMerge.MergePolicy`` or ``PullRequests.Github``.

    Raises:
        SchemaError: If the field table is inconsistent.
    """
    namespace: dict[str, Any] = {
        "__doc__": schema.description or None,
        "__module__": f"buildconf_sdk.catalog.{schema.version.value}",
        "__qualname__": schema.name,
        "entity_type": schema.type,
        "fixed_params": dict(schema.fixed_params),
        "schema": schema,
    }
    _add_fields(namespace, schema.fields, owner=schema.name, base=_BASES[schema.kind])
    cls = type(schema.name, (_BASES[schema.kind],), namespace)
    logger.debug(
        "entity_class_built",
        name=schema.name,
        version=schema.version.value,
        fields=len(schema.fields),
    )
    return cls


def build_variant_class(spec: VariantSpec, owner: str = "") -> type[CompoundParam]:
    """Create the :class:`CompoundParam` subclass for one variant."""
    qualname = f"{owner}.{spec.name}" if owner else spec.name
    namespace: dict[str, Any] = {
        "__doc__": spec.description or None,
        "__qualname__": qualname,
        "discriminator": spec.token,
    }
    _add_fields(namespace, spec.fields, owner=qualname, base=CompoundParam)
    return type(spec.name, (CompoundParam,), namespace)


def build_parameter(spec: FieldSpec, owner: str = "") -> tuple[Parameter[Any], dict[str, type]]:
    """Build the descriptor for *spec* plus any classes it introduces."""
    common: dict[str, Any] = {
        "mandatory": spec.mandatory,
        "aliases": spec.aliases,
        "deprecated": spec.deprecated,
        "replaced_by": spec.replaced_by,
    }
    extras: dict[str, type] = {}
    if spec.kind == "string":
        return StringParameter(spec.key, **common), extras
    if spec.kind == "boolean":
        return (
            BooleanParameter(
                spec.key,
                true_value=spec.true_value,
                false_value=spec.false_value,
                **common,
            ),
            extras,
        )
    if spec.kind == "integer":
        return IntParameter(spec.key, **common), extras
    if spec.kind == "enum":
        if spec.enum_name is None:
            raise SchemaError(f"{owner}.{spec.name}: enum field needs an enum_name")
        enum_cls = StrEnum(spec.enum_name, list(spec.options.items()))
        enum_cls.__qualname__ = f"{owner}.{spec.enum_name}" if owner else spec.enum_name
        mapping = {member: member.value for member in enum_cls}
        extras[spec.enum_name] = enum_cls
        return EnumParameter(enum_cls, spec.key, mapping=mapping, **common), extras
    variants = [build_variant_class(v, owner) for v in spec.variants]
    for variant in variants:
        if variant.__name__ in extras:
            raise SchemaError(f"{owner}.{spec.name}: duplicate variant {variant.__name__!r}")
        extras[variant.__name__] = variant
    return CompoundParameter(spec.key, variants=variants, **common), extras


def _add_fields(
    namespace: dict[str, Any], fields: list[FieldSpec], owner: str, base: type
) -> None:
    names = {f.name for f in fields}
    keys: dict[str, str] = {}
    own_keys: dict[str, set[str]] = {}
    variant_keys: dict[str, set[str]] = {}
    for spec in fields:
        if hasattr(base, spec.name) or spec.name in _RESERVED:
            raise SchemaError(f"{owner}: field name {spec.name!r} is reserved")
        if spec.name in namespace:
            raise SchemaError(f"{owner}: duplicate field or attribute {spec.name!r}")
        if spec.replaced_by is not None and spec.replaced_by not in names:
            raise SchemaError(
                f"{owner}.{spec.name}: replaced_by refers to unknown field {spec.replaced_by!r}"
            )
        key = spec.key or camel_case(spec.name)
        # deprecated fields may share the key of the field replacing them
        if spec.replaced_by is None:
            if key in keys:
                raise SchemaError(
                    f"{owner}: fields {keys[key]!r} and {spec.name!r} share key {key!r}"
                )
            keys[key] = spec.name
        parameter, extras = build_parameter(spec, owner)
        namespace[spec.name] = parameter
        own_keys[spec.name] = {key, *spec.aliases}
        if isinstance(parameter, CompoundParameter):
            variant_keys[spec.name] = set().union(
                *(variant.owned_keys() for variant in parameter.variants.values())
            )
        for extra_name, extra in extras.items():
            if extra_name in namespace:
                raise SchemaError(f"{owner}: duplicate attribute {extra_name!r}")
            namespace[extra_name] = extra
    # flattened variant keys must not overlap any other field of the owner
    for name, flattened in variant_keys.items():
        taken = set().union(*own_keys.values())
        for other, keys_of_other in variant_keys.items():
            if other != name:
                taken |= keys_of_other
        clash = flattened & taken
        if clash:
            raise SchemaError(
                f"{owner}.{name}: variant keys {sorted(clash)} collide with other fields",
                details={"field": name, "keys": sorted(clash)},
            )
