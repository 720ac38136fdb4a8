"""Schema models describing entity kinds as data.

An :class:`EntitySchema` holds everything needed to generate an entity
class: its discriminator, the parameters written on construction, and a
field table.  Compound fields carry their variants, which carry their own
field tables, so arbitrarily nested sealed variants are plain data too.

Example::

    EntitySchema.model_validate({
        "name": "BuildReportTab",
        "kind": "projectFeature",
        "version": "v2017_2",
        "type": "ReportTab",
        "fixed_params": {"type": "BuildReportTab"},
        "fields": [
            {"name": "title", "mandatory": True},
            {"name": "start_page"},
        ],
    })
"""

from __future__ import annotations

import keyword
from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, Field, model_validator

from buildconf_sdk.core.constants import ApiVersion, EntityKind

FieldKind = Literal["string", "boolean", "integer", "enum", "compound"]


def _check_identifier(value: str) -> str:
    if not value.isidentifier() or keyword.iskeyword(value):
        raise ValueError(f"{value!r} is not a valid Python identifier")
    return value


Identifier = Annotated[str, AfterValidator(_check_identifier)]


class FieldSpec(BaseModel):
    """One typed field of an entity or variant.

    Attributes:
        name: Python attribute name (snake_case).
        kind: Value kind selecting the codec.
        key: Bag key; defaults to the camelCase form of ``name``.
        mandatory: Whether validation requires the key to be present.
        aliases: Extra accepted keys (read fallback, validation).
        deprecated: Deprecation message; emitted as ``DeprecationWarning``.
        replaced_by: Name of the field superseding this one.
        true_value: Stored literal for ``True`` (boolean fields).
        false_value: Stored literal for ``False``; ``""`` means "remove".
        enum_name: Class name of the generated enum (enum fields).
        options: Enum member name -> stored token, in declaration order.
        variants: Closed set of variants (compound fields).
    """

    name: Identifier
    kind: FieldKind = "string"
    key: str | None = None
    mandatory: bool = False
    aliases: list[str] = Field(default_factory=list)
    deprecated: str | None = None
    replaced_by: str | None = None
    true_value: str = "true"
    false_value: str = "false"
    enum_name: str | None = None
    options: dict[str, str] = Field(default_factory=dict)
    variants: list[VariantSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_kind(self) -> FieldSpec:
        if self.kind == "enum":
            if not self.enum_name or not self.options:
                raise ValueError(f"enum field {self.name!r} needs enum_name and options")
            _check_identifier(self.enum_name)
        elif self.options or self.enum_name:
            raise ValueError(f"field {self.name!r} of kind {self.kind!r} cannot declare options")
        if self.kind == "compound" and not self.variants:
            raise ValueError(f"compound field {self.name!r} needs at least one variant")
        if self.kind != "compound" and self.variants:
            raise ValueError(f"field {self.name!r} of kind {self.kind!r} cannot declare variants")
        if self.kind == "boolean" and self.true_value == self.false_value:
            raise ValueError(f"boolean field {self.name!r} needs distinct literals")
        return self


class VariantSpec(BaseModel):
    """One variant of a compound field."""

    name: Identifier
    token: str
    description: str = ""
    fields: list[FieldSpec] = Field(default_factory=list)


class EntitySchema(BaseModel):
    """A complete entity kind for one API version."""

    name: Identifier
    kind: EntityKind
    version: ApiVersion
    type: str
    description: str = ""
    fixed_params: dict[str, str] = Field(default_factory=dict)
    fields: list[FieldSpec] = Field(default_factory=list)

    @property
    def mandatory_fields(self) -> list[str]:
        return [f.name for f in self.fields if f.mandatory]


FieldSpec.model_rebuild()
