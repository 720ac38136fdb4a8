from buildconf_sdk.schema.builder import build_entity_class, build_variant_class
from buildconf_sdk.schema.models import EntitySchema, FieldSpec, VariantSpec
from buildconf_sdk.schema.registry import SchemaRegistry

__all__ = [
    "EntitySchema",
    "FieldSpec",
    "VariantSpec",
    "SchemaRegistry",
    "build_entity_class",
    "build_variant_class",
]
